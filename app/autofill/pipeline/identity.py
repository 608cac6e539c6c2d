from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..field_names import IDENTITY_ATTRIBUTES, NameTable, iter_identity_categories
from ..iso_codes import country_code, state_code
from ..schemas import FieldDescriptor, FillScript, PageFieldCatalog
from .card import is_fillable_candidate
from .context import FillContext
from .matching import field_attr, is_field_match

LOGGER = logging.getLogger(__name__)

# Categories filled straight from the identity attribute of the same name.
DIRECT_IDENTITY_FIELDS = [
    "title",
    "first_name",
    "middle_name",
    "last_name",
    "address1",
    "address2",
    "address3",
    "city",
    "postal_code",
    "company",
    "email",
    "phone",
    "username",
]


def _classify(
    field: FieldDescriptor,
    tables: List[NameTable],
    assigned: Dict[str, FieldDescriptor],
) -> Tuple[Optional[str], bool]:
    """Return (unassigned category, whether any category of ``tables`` matched)."""
    matched = False
    for attr in IDENTITY_ATTRIBUTES:
        value = field_attr(field, attr)
        if value is None:
            continue
        for table in tables:
            if not is_field_match(value, table.names, table.contains_names):
                continue
            matched = True
            if table.key not in assigned:
                return table.key, True
    return None, matched


def classify_identity_fields(catalog: PageFieldCatalog) -> Dict[str, FieldDescriptor]:
    """Assign identity categories to fields.

    Compound "name" and "address" fields are recognized first; a field that
    looks like one of those is never considered for a discrete category.
    """
    compound = iter_identity_categories(1)
    discrete = iter_identity_categories(2)
    fill_fields: Dict[str, FieldDescriptor] = {}
    for field in catalog.fields:
        if not is_fillable_candidate(field):
            continue
        category, matched_compound = _classify(field, compound, fill_fields)
        if category is None and not matched_compound:
            category, _ = _classify(field, discrete, fill_fields)
        if category is not None:
            fill_fields[category] = field
    return fill_fields


def _fill_region(
    ctx: FillContext,
    field: Optional[FieldDescriptor],
    value: Optional[str],
    lookup: Callable[[Optional[str]], Optional[str]],
) -> None:
    if field is None or not value:
        return
    if len(value) > 2:
        iso = lookup(value)
        if iso and ctx.assembler.set_field_value(field, iso):
            return
    ctx.assembler.set_field_value(field, value)


def build_identity_script(ctx: FillContext) -> Optional[FillScript]:
    identity = ctx.credential.identity
    if identity is None:
        return None
    assembler = ctx.assembler
    fill_fields = classify_identity_fields(ctx.catalog)
    LOGGER.debug("Identity fields found: %s", sorted(fill_fields))

    for key in DIRECT_IDENTITY_FIELDS:
        assembler.set_field_value(fill_fields.get(key), getattr(identity, key))

    _fill_region(ctx, fill_fields.get("state"), identity.state, state_code)
    _fill_region(ctx, fill_fields.get("country"), identity.country, country_code)

    name_field = fill_fields.get("name")
    if name_field is not None and (identity.first_name or identity.last_name):
        parts = [identity.first_name, identity.middle_name, identity.last_name]
        assembler.set_field_value(name_field, " ".join(part for part in parts if part))

    address_field = fill_fields.get("address")
    if address_field is not None and identity.address1:
        parts = [identity.address1, identity.address2, identity.address3]
        assembler.set_field_value(address_field, ", ".join(part for part in parts if part))

    assembler.append_trailing_focus()
    return assembler.build()
