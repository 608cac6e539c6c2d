from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..schemas import Click, FieldDescriptor, Fill, FillScript, Focus

LOGGER = logging.getLogger(__name__)

SELECT_ONE = "select-one"


def truncate_to_max_length(value: str, max_length: Optional[int]) -> str:
    if max_length and max_length > 0 and len(value) > max_length:
        return value[:max_length]
    return value


def _matching_option_text(options: List[List[Optional[str]]], value: str) -> Optional[str]:
    wanted = value.lower()
    for option in options:
        for entry in option:
            if entry and entry.lower() == wanted:
                if len(option) > 1 and option[1]:
                    return option[1]
                return value
    return None


class FillScriptAssembler:
    """Emits fill actions for one request and tracks which opids were filled."""

    def __init__(self, script: Optional[FillScript] = None) -> None:
        self.script = script if script is not None else FillScript()
        self.filled: Dict[str, FieldDescriptor] = {}

    def is_filled(self, field: FieldDescriptor) -> bool:
        return field.opid in self.filled

    def fill_by_opid(self, field: FieldDescriptor, value: str) -> bool:
        if field.opid in self.filled:
            LOGGER.debug("Skipping %s; already filled", field.opid)
            return False
        value = truncate_to_max_length(str(value), field.max_length)
        self.filled[field.opid] = field
        if not field.is_label_only:
            self.script.script.append(Click(opid=field.opid))
            self.script.script.append(Focus(opid=field.opid))
        self.script.script.append(Fill(opid=field.opid, value=value))
        return True

    def set_field_value(self, field: Optional[FieldDescriptor], value: Optional[str]) -> bool:
        if field is None or not value:
            return False
        if field.type == SELECT_ONE and field.select_options:
            option_text = _matching_option_text(field.select_options, value)
            if option_text is None:
                LOGGER.debug("No option of %s matches the value; not filling", field.opid)
                return False
            value = option_text
        return self.fill_by_opid(field, value)

    def append_trailing_focus(self) -> None:
        last_field: Optional[FieldDescriptor] = None
        last_password: Optional[FieldDescriptor] = None
        for field in self.filled.values():
            if not field.viewable:
                continue
            last_field = field
            if field.type == "password":
                last_password = field
        target = last_password or last_field
        if target is not None:
            self.script.script.append(Focus(opid=target.opid))

    def build(self) -> FillScript:
        return self.script
