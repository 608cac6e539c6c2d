from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..field_names import NEW_PASSWORD_AUTOCOMPLETE, PASSWORD_FIELD_IGNORE_LIST
from ..schemas import FieldDescriptor, FormWithPasswords, PageFieldCatalog
from .locators import find_username_field

LOGGER = logging.getLogger(__name__)

RE_PASSWORD_NOISE = re.compile(r"[\s_\-]")


def _value_is_like_password(value: Optional[str]) -> bool:
    if value is None:
        return False
    cleaned = RE_PASSWORD_NOISE.sub("", value.lower())
    if "password" not in cleaned:
        return False
    return not any(ignored in cleaned for ignored in PASSWORD_FIELD_IGNORE_LIST)


def _is_like_password(field: FieldDescriptor) -> bool:
    if field.type != "text":
        return False
    return any(
        _value_is_like_password(value)
        for value in (field.html_id, field.html_name, field.placeholder)
    )


def _value_empty(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def repair_password_forms(
    catalog: PageFieldCatalog,
    password_fields: List[FieldDescriptor],
) -> List[FieldDescriptor]:
    """Attach orphan password fields to the only form on the page.

    Three password fields on a single-form page where some sit outside the
    form is the shape of a password-change form with broken nesting.
    """
    if len(password_fields) != 3 or len(catalog.forms) != 1:
        return password_fields
    if not any(not field.form for field in password_fields):
        return password_fields
    solo_form = next(iter(catalog.forms))
    if not any(field.form == solo_form for field in password_fields):
        return password_fields
    LOGGER.debug("Reassigning orphan password fields to form %s", solo_form)
    return [
        field if field.form else field.model_copy(update={"form": solo_form})
        for field in password_fields
    ]


def load_password_fields(
    catalog: PageFieldCatalog,
    can_be_hidden: bool,
    can_be_readonly: bool,
    must_be_empty: bool,
    fill_new_password: bool,
) -> List[FieldDescriptor]:
    fields: List[FieldDescriptor] = []
    for field in catalog.fields:
        if field.is_label_only:
            continue
        if field.type != "password" and not _is_like_password(field):
            continue
        if field.disabled:
            continue
        if field.readonly and not can_be_readonly:
            continue
        if not field.viewable and not can_be_hidden:
            continue
        if must_be_empty and not _value_empty(field.value):
            continue
        if not fill_new_password and field.autocomplete_type == NEW_PASSWORD_AUTOCOMPLETE:
            continue
        fields.append(field)
    return repair_password_forms(catalog, fields)


def get_forms_with_password_fields(catalog: PageFieldCatalog) -> List[FormWithPasswords]:
    password_fields = load_password_fields(catalog, True, True, False, True)
    if not password_fields:
        return []

    results: List[FormWithPasswords] = []
    for form_key, form in catalog.forms.items():
        form_passwords = [field for field in password_fields if field.form == form_key]
        if not form_passwords:
            continue
        anchor = form_passwords[0]
        username = find_username_field(catalog, anchor, False, False, False)
        if username is None:
            username = find_username_field(catalog, anchor, True, True, False)
        results.append(
            FormWithPasswords(
                form=form,
                password=anchor,
                username=username,
                passwords=form_passwords,
            )
        )
    return results
