from __future__ import annotations

import anyio

from autofill.pipeline.generate import generate_fill_script
from autofill.pipeline.identity import classify_identity_fields
from autofill.schemas import Credential, CredentialType, IdentityData
from builders import fills, make_catalog, make_field


def _identity(**values) -> Credential:
    return Credential(type=CredentialType.IDENTITY, identity=IdentityData(**values))


def _run(catalog, credential):
    return anyio.run(generate_fill_script, catalog, credential)


def test_compound_name_field_never_takes_a_discrete_category() -> None:
    catalog = make_catalog([make_field("full", 0, html_name="your-name-surname")])
    assigned = classify_identity_fields(catalog)
    assert list(assigned) == ["name"]

    script = _run(catalog, _identity(first_name="Ada", middle_name="B", last_name="Lovelace"))
    assert fills(script) == {"full": "Ada B Lovelace"}


def test_discrete_fields() -> None:
    catalog = make_catalog(
        [
            make_field("first", 0, html_name="first-name"),
            make_field("last", 1, html_name="last_name"),
            make_field("mail", 2, html_name="email"),
            make_field("line1", 3, html_name="address-line-1"),
            make_field("zip", 4, html_name="zip"),
            make_field("tel", 5, type="tel", html_name="phone"),
        ]
    )
    script = _run(
        catalog,
        _identity(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            address1="1 Main St",
            postal_code="12345",
            phone="555-0100",
        ),
    )
    assert fills(script) == {
        "first": "Ada",
        "last": "Lovelace",
        "mail": "ada@example.com",
        "line1": "1 Main St",
        "zip": "12345",
        "tel": "555-0100",
    }


def test_full_address_is_joined_with_commas() -> None:
    catalog = make_catalog([make_field("addr", 0, html_name="street-address")])
    script = _run(catalog, _identity(address1="1 Main St", address3="Floor 2"))
    assert fills(script) == {"addr": "1 Main St, Floor 2"}


def test_state_and_country_iso_translation() -> None:
    catalog = make_catalog(
        [
            make_field("state", 0, html_name="state"),
            make_field("country", 1, html_name="country"),
        ]
    )
    script = _run(catalog, _identity(state="California", country="United States"))
    assert fills(script) == {"state": "CA", "country": "US"}


def test_short_region_values_pass_through() -> None:
    catalog = make_catalog([make_field("state", 0, html_name="state")])
    assert fills(_run(catalog, _identity(state="ca"))) == {"state": "ca"}


def test_unknown_region_falls_back_to_raw_value() -> None:
    catalog = make_catalog([make_field("state", 0, html_name="state")])
    assert fills(_run(catalog, _identity(state="Atlantis"))) == {"state": "Atlantis"}


def test_state_dropdown_receives_option_text() -> None:
    options = [["", "Choose"], ["CA", "California"], ["NY", "New York"]]
    catalog = make_catalog(
        [make_field("state", 0, type="select-one", html_name="state", select_info={"options": options})]
    )
    assert fills(_run(catalog, _identity(state="California"))) == {"state": "California"}


def test_email_address_label_is_read_as_a_compound_address() -> None:
    # "mail-addr" is a contains-name of the compound address category.
    catalog = make_catalog([make_field("mail", 0, label_tag="Email address")])
    assert list(classify_identity_fields(catalog)) == ["address"]

    script = _run(catalog, _identity(email="ada@example.com", address1="1 Main St"))
    assert fills(script) == {"mail": "1 Main St"}
