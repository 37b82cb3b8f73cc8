"""Lenient parsing of raw table store records."""

from typing import Any, Mapping, Optional

from ..utils.datetime import utc_now_iso


def to_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return fallback


def to_str(value: Any, fallback: str = "") -> str:
    return value if isinstance(value, str) else fallback


def to_optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def to_optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.strip():
        try:
            return int(float(value))
        except ValueError:
            return None
    return None


def to_int(value: Any, fallback: int = 0) -> int:
    parsed = to_optional_int(value)
    return fallback if parsed is None else parsed


def first_str(raw: Mapping[str, Any], *keys: str) -> Optional[str]:
    """Return the first non-empty string among ``keys``."""

    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def record_id(raw: Mapping[str, Any]) -> str:
    return first_str(raw, "_id", "id") or ""


def timestamp(raw: Mapping[str, Any], *keys: str) -> str:
    return first_str(raw, *keys) or utc_now_iso()


def without_empty_id(payload: dict[str, Any]) -> dict[str, Any]:
    """Let the store generate ``_id`` when the entity has none yet."""

    if not payload.get("_id"):
        payload.pop("_id", None)
    return payload
