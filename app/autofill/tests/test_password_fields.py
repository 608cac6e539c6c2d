from __future__ import annotations

from autofill.pipeline.password_fields import get_forms_with_password_fields, load_password_fields
from builders import make_catalog, make_field


def _load(catalog, **overrides):
    params = {
        "can_be_hidden": False,
        "can_be_readonly": False,
        "must_be_empty": False,
        "fill_new_password": False,
    }
    params.update(overrides)
    return load_password_fields(catalog, **params)


def test_password_type_and_password_like_text_fields() -> None:
    catalog = make_catalog(
        [
            make_field("pw", 0, type="password"),
            make_field("txt", 1, html_name="user_password"),
            make_field("otp", 2, html_name="one-time-password"),
            make_field("plain", 3, html_name="nickname"),
        ]
    )
    assert [field.opid for field in _load(catalog)] == ["pw", "txt"]


def test_filters_hidden_readonly_disabled_and_new_password() -> None:
    catalog = make_catalog(
        [
            make_field("hidden", 0, type="password", viewable=False),
            make_field("ro", 1, type="password", readonly=True),
            make_field("off", 2, type="password", disabled=True),
            make_field("new", 3, type="password", autocomplete_type="new-password"),
            make_field("filled", 4, type="password", value="abc"),
        ]
    )
    assert [field.opid for field in _load(catalog)] == ["filled"]
    assert [field.opid for field in _load(catalog, must_be_empty=True)] == []
    relaxed = _load(catalog, can_be_hidden=True, can_be_readonly=True, fill_new_password=True)
    assert [field.opid for field in relaxed] == ["hidden", "ro", "new", "filled"]


def test_orphan_password_fields_join_the_only_form() -> None:
    catalog = make_catalog(
        [
            make_field("current", 0, type="password", form="f1"),
            make_field("new", 1, type="password"),
            make_field("confirm", 2, type="password"),
        ],
        forms=["f1"],
    )
    fields = _load(catalog)
    assert [field.form for field in fields] == ["f1", "f1", "f1"]
    # The catalog itself is left untouched.
    assert catalog.fields[1].form is None


def test_form_repair_needs_exactly_three_fields() -> None:
    catalog = make_catalog(
        [
            make_field("current", 0, type="password", form="f1"),
            make_field("new", 1, type="password"),
        ],
        forms=["f1"],
    )
    assert [field.form for field in _load(catalog)] == ["f1", None]


def test_form_repair_needs_a_single_form() -> None:
    catalog = make_catalog(
        [
            make_field("current", 0, type="password", form="f1"),
            make_field("new", 1, type="password"),
            make_field("confirm", 2, type="password"),
        ],
        forms=["f1", "f2"],
    )
    assert [field.form for field in _load(catalog)] == ["f1", None, None]


def test_forms_with_password_fields() -> None:
    catalog = make_catalog(
        [
            make_field("user", 0, html_name="username", form="f1"),
            make_field("pw", 1, type="password", form="f1"),
            make_field("search", 2, html_name="q", form="f2"),
        ],
        forms=["f1", "f2"],
    )
    forms = get_forms_with_password_fields(catalog)
    assert len(forms) == 1
    assert forms[0].form.opid == "f1"
    assert forms[0].password.opid == "pw"
    assert forms[0].username.opid == "user"
    assert [field.opid for field in forms[0].passwords] == ["pw"]


def test_forms_with_password_fields_empty_without_passwords() -> None:
    catalog = make_catalog([make_field("user", 0, html_name="username", form="f1")], forms=["f1"])
    assert get_forms_with_password_fields(catalog) == []
