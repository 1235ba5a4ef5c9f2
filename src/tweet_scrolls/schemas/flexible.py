"""Tolerant decoding for fields that appear as more than one JSON kind."""

from __future__ import annotations

import json
from typing import Annotated, Any

from pydantic import BeforeValidator


def coerce_to_string(value: Any) -> str | None:
    """Collapse a string-or-object union into its canonical string form.

    Strings pass through, ``None`` stays ``None``, booleans and numbers use
    their JSON spelling and objects/arrays become compact, key-sorted JSON.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def coerce_to_bool(value: Any) -> bool:
    """Read booleans exported as strings ("true"/"false") or numbers."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    if isinstance(value, (int, float)):
        return value != 0
    return False


FlexibleStr = Annotated[str | None, BeforeValidator(coerce_to_string)]
FlexibleBool = Annotated[bool, BeforeValidator(coerce_to_bool)]
