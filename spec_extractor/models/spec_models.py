# spec_extractor/models/spec_models.py

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List

import json5

from ..errors import RecordParseError

# Row labels as they appear in the detail panel's spec table, keyed by field name.
# Lookup is by label prefix, so these must match the page's wording exactly.
SPEC_FIELD_LABELS: Dict[str, str] = {
    "head_size": "Head Size:",
    "length": "Length:",
    "balance": "Balance:",
    "swing_weight": "Swing Weight:",
    "beam_width": "Beam Width:",
    "tip_or_shaft": "Tip/Shaft:",
    "composition": "Composition:",
    "power_level": "Power Level:",
    "stiffness": "Stiffness:",
    "string_pattern": "String Pattern:",
    "main_skip": "Main Skip:",
    "string_tension": "String Tension:",
}


def _payload_key(field_name: str) -> str:
    return field_name.replace("_", "").lower()


@dataclass(frozen=True)
class SpecRecord:
    """
    One item's specification as read from its detail panel. Every spec field
    is a string; a label missing from the page gives "". A non-empty `error`
    marks a soft failure and says nothing about the other fields.
    """
    name: str
    error: str = ""
    head_size: str = ""
    length: str = ""
    balance: str = ""
    swing_weight: str = ""
    beam_width: str = ""
    tip_or_shaft: str = ""
    composition: str = ""
    power_level: str = ""
    stiffness: str = ""
    string_pattern: str = ""
    main_skip: str = ""
    string_tension: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    @classmethod
    def empty(cls, name: str, error: str) -> "SpecRecord":
        return cls(name=name, error=error)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in dataclasses.fields(cls)]

    @classmethod
    def from_payload(cls, raw: str) -> "SpecRecord":
        """Parses the serialized object produced by the detail script.

        Keys are matched case-insensitively ignoring underscores, so both the
        script's camelCase (`headSize`) and snake_case work. Missing or null
        fields become "". Raises RecordParseError on anything else.
        """
        if not isinstance(raw, str):
            raise RecordParseError(RecordParseError.MALFORMED, f"expected a string, got {type(raw).__name__}")
        try:
            data = json5.loads(raw)
        except (ValueError, TypeError) as e:
            raise RecordParseError(RecordParseError.MALFORMED, str(e)) from e

        if not isinstance(data, dict):
            raise RecordParseError(RecordParseError.NOT_AN_OBJECT, type(data).__name__)

        by_key = {_payload_key(str(k)): v for k, v in data.items()}

        name = by_key.get("name")
        if not isinstance(name, str):
            raise RecordParseError(RecordParseError.MISSING_NAME, repr(name))

        values: Dict[str, str] = {"name": name}
        for field_name in cls.field_names():
            if field_name == "name":
                continue
            value = by_key.get(_payload_key(field_name))
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise RecordParseError(
                    RecordParseError.BAD_FIELD, f"{field_name}={value!r}"
                )
            values[field_name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)
