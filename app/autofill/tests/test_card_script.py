from __future__ import annotations

import anyio

from autofill.pipeline.card import (
    classify_card_fields,
    format_combined_expiry,
    format_exp_month,
    format_exp_year,
)
from autofill.pipeline.generate import generate_fill_script
from autofill.schemas import CardData, Credential, CredentialType
from builders import fills, make_catalog, make_field


def _card(**values) -> Credential:
    data = {
        "cardholder_name": "Alice Example",
        "number": "4111111111111111",
        "exp_month": "3",
        "exp_year": "2027",
        "code": "123",
    }
    data.update(values)
    return Credential(type=CredentialType.CARD, card=CardData(**data))


def test_combined_expiry_formats() -> None:
    slash = make_field("exp", 0, placeholder="MM/YYYY")
    assert format_combined_expiry(slash, "3", "2027") == "03/2027"
    dashed = make_field("exp", 0, placeholder="YY-MM")
    assert format_combined_expiry(dashed, "3", "2027") == "27-03"
    plain = make_field("exp", 0, html_name="expiration")
    assert format_combined_expiry(plain, "3", "2027") == "2027-03"


def test_combined_expiry_short_hints_and_two_digit_years() -> None:
    short = make_field("exp", 0, placeholder="MM / YY")
    assert format_combined_expiry(short, "11", "2027") == "11/27"
    long_hint = make_field("exp", 0, label_right="mm/yyyy")
    assert format_combined_expiry(long_hint, "11", "27") == "11/2027"


def test_month_dropdown_with_leading_placeholder() -> None:
    options = [["", "Month"]] + [[str(number), f"{number:02d}"] for number in range(1, 13)]
    field = make_field("month", 0, type="select-one", select_info={"options": options})
    assert format_exp_month(field, "3") == "03"


def test_month_dropdown_with_trailing_placeholder() -> None:
    names = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
    options = [[str(number), name] for number, name in enumerate(names, 1)] + [["", "Month"]]
    field = make_field("month", 0, type="select-one", select_info={"options": options})
    assert format_exp_month(field, "3") == "Mar"


def test_month_dropdown_of_twelve() -> None:
    options = [[f"{number:02d}", name] for number, name in enumerate(["Jan", "Feb", "Mar"] + ["x"] * 9, 1)]
    field = make_field("month", 0, type="select-one", select_info={"options": options})
    assert format_exp_month(field, "2") == "Feb"
    assert format_exp_month(field, "13") == "13"


def test_month_text_input_is_zero_padded_for_two_chars() -> None:
    assert format_exp_month(make_field("m", 0, max_length=2), "4") == "04"
    assert format_exp_month(make_field("m", 0, placeholder="MM"), "4") == "04"
    assert format_exp_month(make_field("m", 0), "4") == "4"


def test_year_formats() -> None:
    assert format_exp_year(make_field("y", 0, max_length=2), "2027") == "27"
    assert format_exp_year(make_field("y", 0, placeholder="YYYY"), "27") == "2027"
    options = [["", "Year"], ["2026", "26"], ["2027", "27"]]
    dropdown = make_field("y", 0, type="select-one", select_info={"options": options})
    assert format_exp_year(dropdown, "2027") == "27"


def test_year_dropdown_matches_short_text_and_labelled_options() -> None:
    short = make_field("y", 0, type="select-one", select_info={"options": [["b", "27"]]})
    assert format_exp_year(short, "2027") == "27"
    labelled = make_field("y", 0, type="select-one", select_info={"options": [["a", "Exp: 2027"]]})
    assert format_exp_year(labelled, "2027") == "Exp: 2027"


def test_classification_assigns_each_category_once() -> None:
    catalog = make_catalog(
        [
            make_field("name", 0, html_name="cc-name"),
            make_field("number", 1, autocomplete_type="cc-number"),
            make_field("month", 2, html_name="cc-exp-month"),
            make_field("year", 3, html_name="cc-exp-year"),
            make_field("cvc", 4, html_name="cvc"),
            make_field("cvc2", 5, html_name="cvc"),
            make_field("hidden", 6, html_name="cc-number", viewable=False),
        ]
    )
    assigned = {key: field.opid for key, field in classify_card_fields(catalog).items()}
    assert assigned == {
        "cardholder_name": "name",
        "number": "number",
        "exp_month": "month",
        "exp_year": "year",
        "code": "cvc",
    }


def test_card_script_fills() -> None:
    catalog = make_catalog(
        [
            make_field("name", 0, html_name="cc-name"),
            make_field("number", 1, html_name="cc-number", max_length=19),
            make_field("exp", 2, html_name="cc-exp", placeholder="MM / YY"),
            make_field("cvc", 3, html_name="cvc"),
        ]
    )
    script = anyio.run(generate_fill_script, catalog, _card())
    assert fills(script) == {
        "name": "Alice Example",
        "number": "4111111111111111",
        "cvc": "123",
        "exp": "03/27",
    }
    assert script.script[-1].action == "focus"
    assert script.script[-1].opid == "exp"


def test_card_without_record_gives_no_script() -> None:
    credential = Credential(type=CredentialType.CARD)
    catalog = make_catalog([make_field("number", 0, html_name="cc-number")])
    assert anyio.run(generate_fill_script, catalog, credential) is None
