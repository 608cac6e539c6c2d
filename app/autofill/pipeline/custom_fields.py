from __future__ import annotations

import logging
from typing import Optional

from ..schemas import Credential, CustomField, CustomFieldType
from .context import FillContext
from .matching import find_matching_field_index

LOGGER = logging.getLogger(__name__)


def custom_field_value(credential: Credential, custom: CustomField) -> Optional[str]:
    if custom.type == CustomFieldType.LINKED:
        return credential.linked_field_value(custom.linked_id)
    if custom.value is None and custom.type == CustomFieldType.BOOLEAN:
        return "false"
    return custom.value


def fill_custom_fields(ctx: FillContext) -> int:
    """Fill page fields whose id, name or label matches a custom field name.

    Runs before the kind-specific builder, so a page field claimed here is
    never filled again with the credential's built-in values.
    """
    named = [custom for custom in ctx.credential.fields if custom.name]
    if not named:
        return 0
    names = [custom.name.lower() for custom in named]

    filled = 0
    for field in ctx.catalog.fields:
        if ctx.assembler.is_filled(field):
            continue
        if not field.viewable and not field.is_label_only:
            continue
        index = find_matching_field_index(field, names)
        if index < 0:
            continue
        value = custom_field_value(ctx.credential, named[index])
        if value is None:
            continue
        if ctx.assembler.fill_by_opid(field, value):
            filled += 1
    if filled:
        LOGGER.debug("Filled %d field(s) from custom fields", filled)
    return filled
