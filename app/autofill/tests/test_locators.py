from __future__ import annotations

from autofill.pipeline.locators import find_totp_field, find_username_field
from builders import make_catalog, make_field


def test_username_is_last_eligible_field_before_password() -> None:
    catalog = make_catalog(
        [
            make_field("a", 0, html_name="first", form="f1"),
            make_field("b", 1, html_name="second", form="f1"),
            make_field("pw", 2, type="password", form="f1"),
            make_field("c", 3, html_name="after", form="f1"),
        ],
        forms=["f1"],
    )
    found = find_username_field(catalog, catalog.fields[2], False, False, False)
    assert found.opid == "b"


def test_exact_username_name_stops_the_scan() -> None:
    catalog = make_catalog(
        [
            make_field("email", 0, html_name="email", form="f1"),
            make_field("nick", 1, html_name="nickname", form="f1"),
            make_field("pw", 2, type="password", form="f1"),
        ],
        forms=["f1"],
    )
    found = find_username_field(catalog, catalog.fields[2], False, False, False)
    assert found.opid == "email"


def test_username_must_share_the_form_unless_without_form() -> None:
    catalog = make_catalog(
        [
            make_field("user", 0, html_name="username", form="f2"),
            make_field("pw", 1, type="password", form="f1"),
        ],
        forms=["f1", "f2"],
    )
    anchor = catalog.fields[1]
    assert find_username_field(catalog, anchor, False, False, False) is None
    assert find_username_field(catalog, anchor, False, False, True).opid == "user"


def test_hidden_username_only_when_allowed() -> None:
    catalog = make_catalog(
        [
            make_field("user", 0, html_name="username", viewable=False, form="f1"),
            make_field("pw", 1, type="password", form="f1"),
        ],
        forms=["f1"],
    )
    anchor = catalog.fields[1]
    assert find_username_field(catalog, anchor, False, False, False) is None
    assert find_username_field(catalog, anchor, True, True, False).opid == "user"


def test_totp_field_may_follow_the_password() -> None:
    catalog = make_catalog(
        [
            make_field("pw", 0, type="password", form="f1"),
            make_field("code", 1, type="number", autocomplete_type="one-time-code", form="f1"),
        ],
        forms=["f1"],
    )
    found = find_totp_field(catalog, catalog.fields[0], False, False, False)
    assert found.opid == "code"
