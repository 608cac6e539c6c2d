from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..field_names import (
    CARD_ATTRIBUTES,
    CARD_ATTRIBUTES_EXTENDED,
    CARD_CATEGORIES,
    EXCLUDED_AUTOFILL_TYPES,
    MONTH_ABBR,
    YEAR_ABBR_LONG,
    YEAR_ABBR_SHORT,
    NameTable,
)
from ..schemas import FieldDescriptor, FillScript, PageFieldCatalog
from .context import FillContext
from .matching import field_attr, field_attrs_contain, is_field_match

LOGGER = logging.getLogger(__name__)

# (hint, output, uses short year). The hint is expanded with every month
# abbreviation and with the long or short year abbreviations.
EXPIRY_TEMPLATES: List[Tuple[str, str, bool]] = [
    ("{m}/{y}", "{month}/{year}", False),
    ("{m}/{y}", "{month}/{year}", True),
    ("{y}/{m}", "{year}/{month}", False),
    ("{y}/{m}", "{year}/{month}", True),
    ("{m}-{y}", "{month}-{year}", False),
    ("{m}-{y}", "{month}-{year}", True),
    ("{y}-{m}", "{year}-{month}", False),
    ("{y}-{m}", "{year}-{month}", True),
    ("{y}{m}", "{year}{month}", False),
    ("{y}{m}", "{year}{month}", True),
    ("{m}{y}", "{month}{year}", False),
    ("{m}{y}", "{month}{year}", True),
]


def match_category(
    value: Optional[str],
    tables: Iterable[NameTable],
    assigned: Dict[str, FieldDescriptor],
) -> Optional[str]:
    for table in tables:
        if table.key in assigned:
            continue
        if is_field_match(value, table.names, table.contains_names):
            return table.key
    return None


def is_fillable_candidate(field: FieldDescriptor) -> bool:
    return (
        not field.is_label_only
        and field.type not in EXCLUDED_AUTOFILL_TYPES
        and field.viewable
    )


def classify_card_fields(catalog: PageFieldCatalog) -> Dict[str, FieldDescriptor]:
    """Assign each card category to the first field whose attributes match it."""
    fill_fields: Dict[str, FieldDescriptor] = {}
    for field in catalog.fields:
        if not is_fillable_candidate(field):
            continue
        for attr in CARD_ATTRIBUTES:
            value = field_attr(field, attr)
            if value is None:
                continue
            category = match_category(value, CARD_CATEGORIES, fill_fields)
            if category is not None:
                fill_fields[category] = field
                break
    return fill_fields


def _month_option_index(options: List[List[Optional[str]]], month: str) -> Optional[int]:
    try:
        number = int(month)
    except ValueError:
        return None
    if len(options) == 12:
        return number - 1
    if len(options) == 13:
        first = options[0][0] if options[0] else None
        last = options[12][0] if options[12] else None
        # A leading placeholder option shifts the months by one.
        if first and not last:
            return number - 1
        return number
    return None


def format_exp_month(field: FieldDescriptor, month: str) -> str:
    if field.select_info is not None:
        options = field.select_options
        index = _month_option_index(options, month)
        if index is not None and 0 <= index < len(options):
            option = options[index]
            if len(option) > 1 and option[1] is not None:
                return option[1]
        return month
    if len(month) == 1 and (
        field_attrs_contain(field, "mm", CARD_ATTRIBUTES_EXTENDED) or field.max_length == 2
    ):
        return "0" + month
    return month


def format_exp_year(field: FieldDescriptor, year: str) -> str:
    if field.select_info is not None:
        for option in field.select_options:
            value = option[0] if option else None
            text = option[1] if len(option) > 1 else None
            if year in (value, text):
                return text or year
            if text and len(text) == 2 and len(year) == 4 and text == year[2:]:
                return text
            if text:
                colon = text.find(":")
                if colon > -1 and len(text) > colon + 1 and text[colon + 2:] == year:
                    return text
        return year
    if field_attrs_contain(field, "yyyy", CARD_ATTRIBUTES_EXTENDED) or field.max_length == 4:
        return "20" + year if len(year) == 2 else year
    if field_attrs_contain(field, "yy", CARD_ATTRIBUTES_EXTENDED) or field.max_length == 2:
        return year[2:] if len(year) == 4 else year
    return year


def format_combined_expiry(field: FieldDescriptor, month: str, year: str) -> str:
    """Render month and year for a single expiry field using its format hints.

    Without a recognizable hint the value is ``YYYY-MM``.
    """
    full_month = ("0" + month)[-2:]
    full_year = year
    part_year: Optional[str] = None
    if len(year) == 2:
        part_year = year
        full_year = "20" + year
    elif len(year) == 4:
        part_year = year[2:4]

    for month_abbr in MONTH_ABBR:
        for hint, output, short in EXPIRY_TEMPLATES:
            if short and part_year is None:
                continue
            year_abbrs = YEAR_ABBR_SHORT if short else YEAR_ABBR_LONG
            for year_abbr in year_abbrs:
                needle = hint.format(m=month_abbr, y=year_abbr)
                if field_attrs_contain(field, needle, CARD_ATTRIBUTES_EXTENDED):
                    return output.format(month=full_month, year=part_year if short else full_year)
    return f"{full_year}-{full_month}"


def build_card_script(ctx: FillContext) -> Optional[FillScript]:
    card = ctx.credential.card
    if card is None:
        return None
    assembler = ctx.assembler
    fill_fields = classify_card_fields(ctx.catalog)
    LOGGER.debug("Card fields found: %s", sorted(fill_fields))

    assembler.set_field_value(fill_fields.get("cardholder_name"), card.cardholder_name)
    assembler.set_field_value(fill_fields.get("number"), card.number)
    assembler.set_field_value(fill_fields.get("code"), card.code)
    assembler.set_field_value(fill_fields.get("brand"), card.brand)

    month_field = fill_fields.get("exp_month")
    if month_field is not None and card.exp_month:
        assembler.fill_by_opid(month_field, format_exp_month(month_field, card.exp_month))

    year_field = fill_fields.get("exp_year")
    if year_field is not None and card.exp_year:
        assembler.fill_by_opid(year_field, format_exp_year(year_field, card.exp_year))

    exp_field = fill_fields.get("exp")
    if exp_field is not None and card.exp_month and card.exp_year:
        assembler.set_field_value(
            exp_field, format_combined_expiry(exp_field, card.exp_month, card.exp_year)
        )

    assembler.append_trailing_focus()
    return assembler.build()
