from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, Optional, Sequence

from ..field_names import FUZZY_ATTRIBUTES, MATCH_PROPERTIES
from ..schemas import FieldDescriptor

LOGGER = logging.getLogger(__name__)

RE_NEWLINES = re.compile(r"\r\n|\r|\n")
RE_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")

REGEX_DIRECTIVE = "regex="
CSV_DIRECTIVE = "csv="


def field_attr(field: Optional[FieldDescriptor], attr: str) -> Optional[str]:
    if field is None:
        return None
    value = getattr(field, attr, None)
    if not isinstance(value, str) or not value:
        return None
    return value


def _clean(value: str) -> str:
    return RE_NEWLINES.sub("", value.strip())


def is_field_match(
    value: Optional[str],
    names: Sequence[str],
    contains_names: Optional[Sequence[str]] = None,
) -> bool:
    """Match a normalized field value against a priority-ordered name list.

    Every name matches on equality. A name also matches as a substring of the
    value when it is listed in ``contains_names`` or when no allow-list is given.
    """
    if not value:
        return False
    normalized = RE_NON_ALNUM.sub("", value.strip().lower())
    for name in names:
        check_contains = contains_names is None or name in contains_names
        candidate = name.lower().replace("-", "")
        if normalized == candidate or (check_contains and candidate in normalized):
            return True
    return False


@lru_cache(maxsize=512)
def _compile_directive(pattern: str) -> Optional[re.Pattern]:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        LOGGER.error("Invalid regex directive %r: %s", pattern, exc)
        return None


def field_property_is_match(field: FieldDescriptor, attr: str, name: str) -> bool:
    value = field_attr(field, attr)
    if value is None:
        return False
    value = _clean(value)
    if name.startswith(REGEX_DIRECTIVE):
        compiled = _compile_directive(name[len(REGEX_DIRECTIVE):])
        return bool(compiled is not None and compiled.search(value))
    if name.startswith(CSV_DIRECTIVE):
        tokens = name[len(CSV_DIRECTIVE):].split(",")
        return any(token.strip().lower() == value.lower() for token in tokens)
    return value.lower() == name.lower()


def field_property_is_prefix_match(
    field: FieldDescriptor,
    attr: str,
    name: str,
    prefix: str,
    separator: str = "=",
) -> bool:
    if not name.startswith(prefix + separator):
        return False
    rest = name[len(prefix) + len(separator):]
    return bool(rest) and field_property_is_match(field, attr, rest)


def find_matching_field_index(field: FieldDescriptor, names: Sequence[str]) -> int:
    for index, name in enumerate(names):
        for prop in MATCH_PROPERTIES:
            if "=" in name and field_property_is_prefix_match(field, prop.attr, name, prop.group):
                return index
            if field_property_is_match(field, prop.attr, name):
                return index
    return -1


def fuzzy_match(options: Sequence[str], value: Optional[str]) -> bool:
    if not options or not value:
        return False
    value = RE_NEWLINES.sub("", value).strip().lower()
    return any(option in value for option in options)


def field_is_fuzzy_match(field: FieldDescriptor, names: Sequence[str]) -> bool:
    return any(fuzzy_match(names, field_attr(field, attr)) for attr in FUZZY_ATTRIBUTES)


def field_attrs_contain(
    field: Optional[FieldDescriptor],
    needle: str,
    attrs: Iterable[str],
) -> bool:
    """True when any of ``attrs``, spaces removed and lowercased, contains ``needle``."""
    if field is None:
        return False
    for attr in attrs:
        value = field_attr(field, attr)
        if value and needle in value.replace(" ", "").lower():
            return True
    return False
