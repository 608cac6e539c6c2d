from __future__ import annotations

from typing import Optional

from ..field_names import (
    ONE_TIME_CODE_AUTOCOMPLETE,
    TOTP_FIELD_NAMES,
    TOTP_FIELD_TYPES,
    USERNAME_FIELD_NAMES,
    USERNAME_FIELD_TYPES,
)
from ..schemas import FieldDescriptor, PageFieldCatalog
from .matching import field_is_fuzzy_match, find_matching_field_index


def _is_eligible(
    field: FieldDescriptor,
    anchor: FieldDescriptor,
    can_be_hidden: bool,
    can_be_readonly: bool,
    without_form: bool,
) -> bool:
    return (
        not field.disabled
        and (can_be_readonly or not field.readonly)
        and (without_form or field.form == anchor.form)
        and (can_be_hidden or field.viewable)
    )


def is_totp_like(field: FieldDescriptor) -> bool:
    return (
        field_is_fuzzy_match(field, TOTP_FIELD_NAMES)
        or field.autocomplete_type == ONE_TIME_CODE_AUTOCOMPLETE
    )


def find_username_field(
    catalog: PageFieldCatalog,
    password_field: FieldDescriptor,
    can_be_hidden: bool,
    can_be_readonly: bool,
    without_form: bool,
) -> Optional[FieldDescriptor]:
    """Return the username field preceding ``password_field``.

    The last eligible field before the password field wins unless an earlier
    one matches a username name exactly.
    """
    username: Optional[FieldDescriptor] = None
    for field in catalog.fields:
        if field.is_label_only:
            continue
        if field.element_number >= password_field.element_number:
            break
        if field.type not in USERNAME_FIELD_TYPES:
            continue
        if not _is_eligible(field, password_field, can_be_hidden, can_be_readonly, without_form):
            continue
        username = field
        if find_matching_field_index(field, USERNAME_FIELD_NAMES) > -1:
            break
    return username


def find_totp_field(
    catalog: PageFieldCatalog,
    password_field: FieldDescriptor,
    can_be_hidden: bool,
    can_be_readonly: bool,
    without_form: bool,
) -> Optional[FieldDescriptor]:
    totp: Optional[FieldDescriptor] = None
    for field in catalog.fields:
        if field.is_label_only:
            continue
        if field.type not in TOTP_FIELD_TYPES:
            continue
        if not _is_eligible(field, password_field, can_be_hidden, can_be_readonly, without_form):
            continue
        if not is_totp_like(field):
            continue
        totp = field
        if (
            find_matching_field_index(field, TOTP_FIELD_NAMES) > -1
            or field.autocomplete_type == ONE_TIME_CODE_AUTOCOMPLETE
        ):
            break
    return totp
