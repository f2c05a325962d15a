"""Decoding of raw declarative attribute values.

Attribute values arrive either already typed (ints, bools, strings from an
in-memory inspector) or as declarative text from a manifest: resource
references such as ``@0x7f0a0001``, integers in any base prefix, booleans,
and ``|``-joined flag names. Each decoder raises ``ValueError`` for input it
cannot interpret; the parser decides what to do about it.
"""

from collections.abc import Mapping
from typing import Any

SEARCH_MODE_FLAGS: dict[str, int] = {
    "showSearchLabelAsBadge": 0x04,
    "showSearchIconAsBadge": 0x08,
    "queryRewriteFromData": 0x10,
    "queryRewriteFromText": 0x20,
}

VOICE_SEARCH_MODE_FLAGS: dict[str, int] = {
    "showVoiceSearchButton": 0x1,
    "launchWebSearch": 0x2,
    "launchRecognizer": 0x4,
}

IME_OPTION_FLAGS: dict[str, int] = {
    "normal": 0x0,
    "actionUnspecified": 0x0,
    "actionNone": 0x1,
    "actionGo": 0x2,
    "actionSearch": 0x3,
    "actionSend": 0x4,
    "actionNext": 0x5,
    "actionDone": 0x6,
    "flagNoExtractUi": 0x10000000,
    "flagNoAccessoryAction": 0x20000000,
    "flagNoEnterAction": 0x40000000,
}

INPUT_TYPE_FLAGS: dict[str, int] = {
    "none": 0x0,
    "text": 0x1,
    "textCapCharacters": 0x1001,
    "textCapWords": 0x2001,
    "textCapSentences": 0x4001,
    "textAutoCorrect": 0x8001,
    "textAutoComplete": 0x10001,
    "textMultiLine": 0x20001,
    "textNoSuggestions": 0x80001,
    "textUri": 0x11,
    "textEmailAddress": 0x21,
    "textEmailSubject": 0x31,
    "textShortMessage": 0x41,
    "textPersonName": 0x61,
    "textPostalAddress": 0x71,
    "textPassword": 0x81,
    "textWebEditText": 0xA1,
    "textFilter": 0xB1,
    "number": 0x2,
    "numberSigned": 0x1002,
    "numberDecimal": 0x2002,
    "phone": 0x3,
    "datetime": 0x4,
    "date": 0x14,
    "time": 0x24,
}

_NULL_REFERENCES = {"@null", "@0"}


INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def to_int(value: Any, flags: Mapping[str, int] | None = None) -> int:
    """Decode a signed 32-bit integer, optionally from ``|``-joined flag names."""
    result = _decode_int(value, flags)
    if not INT32_MIN <= result <= INT32_MAX:
        raise ValueError(f"Integer {value!r} does not fit in 32 bits")
    return result


def _decode_int(value: Any, flags: Mapping[str, int] | None) -> int:
    match value:
        case bool():
            raise ValueError(f"Expected an integer, got boolean {value!r}")
        case int():
            return value
        case str():
            text = value.strip()
            if not text:
                raise ValueError("Empty integer value")
            try:
                return int(text, 0)
            except ValueError:
                if flags is None:
                    raise
            result = 0
            for name in text.split("|"):
                name = name.strip()
                if name not in flags:
                    raise ValueError(f"Unknown flag {name!r}") from None
                result |= flags[name]
            return result
        case _:
            raise ValueError(f"Expected an integer, got {type(value).__name__}")


def to_resource_ref(value: Any) -> int:
    """Decode a resource reference (``@123``, ``@0x7f0a0001`` or an int)."""
    match value:
        case str() if value.strip() in _NULL_REFERENCES:
            return 0
        case str() if value.strip().startswith("@"):
            return to_int(value.strip()[1:])
        case _:
            return to_int(value)


def to_bool(value: Any) -> bool:
    """Decode a boolean from a bool, 0/1, or ``true``/``false`` text."""
    match value:
        case bool():
            return value
        case 0 | 1:
            return bool(value)
        case str() if value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        case _:
            raise ValueError(f"Expected a boolean, got {value!r}")


def to_str(value: Any) -> str:
    """Decode a string attribute."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"Expected a string, got {type(value).__name__}")
