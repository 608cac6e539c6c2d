from __future__ import annotations

from autofill.field_names import USERNAME_FIELD_NAMES
from autofill.pipeline.matching import (
    field_attrs_contain,
    field_is_fuzzy_match,
    field_property_is_match,
    find_matching_field_index,
    is_field_match,
)
from builders import make_field


def test_is_field_match_equality_and_contains() -> None:
    assert is_field_match("Card Number", ["card-number"])
    assert is_field_match("billing_cc_number", ["cc-number"], ["cc-number"])
    # "cc" is allowed on equality only.
    assert not is_field_match("accent", ["cc"], ["cc-number"])
    assert is_field_match("CC", ["cc"], ["cc-number"])
    assert not is_field_match(None, ["cc"])


def test_regex_directive_matches_with_search() -> None:
    field = make_field("f1", 0, html_name="login_email_address")
    assert field_property_is_match(field, "html_name", "regex=email")
    assert not field_property_is_match(field, "html_name", "regex=^email")


def test_malformed_regex_directive_is_no_match() -> None:
    field = make_field("f1", 0, html_name="anything")
    assert not field_property_is_match(field, "html_name", "regex=([")


def test_csv_directive_matches_any_token() -> None:
    field = make_field("f1", 0, html_id="Login")
    assert field_property_is_match(field, "html_id", "csv=user, login ,email")
    assert not field_property_is_match(field, "html_id", "csv=user,email")


def test_literal_match_ignores_case() -> None:
    field = make_field("f1", 0, html_name="UserName")
    assert field_property_is_match(field, "html_name", "username")


def test_find_matching_field_index_honours_property_prefix() -> None:
    field = make_field("f1", 0, html_id="pin", html_name="code")
    assert find_matching_field_index(field, ["name=pin", "id=pin"]) == 1
    assert find_matching_field_index(field, ["nothing", "code"]) == 1
    assert find_matching_field_index(field, ["nothing"]) == -1


def test_label_prefix_applies_to_every_label_source() -> None:
    field = make_field("f1", 0, label_aria="Member number")
    assert find_matching_field_index(field, ["label=member number"]) == 0


def test_fuzzy_match_uses_substrings() -> None:
    field = make_field("f1", 0, placeholder="Your Email Address\n")
    assert field_is_fuzzy_match(field, USERNAME_FIELD_NAMES)
    other = make_field("f2", 1, placeholder="Search the site")
    assert not field_is_fuzzy_match(other, USERNAME_FIELD_NAMES)


def test_field_attrs_contain_strips_spaces() -> None:
    field = make_field("f1", 0, placeholder="MM / YY")
    assert field_attrs_contain(field, "mm/yy", ["placeholder"])
    assert not field_attrs_contain(field, "yyyy", ["placeholder"])
