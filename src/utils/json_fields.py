"""Type-checked accessors for values pulled out of decoded JSON.

Each returns None when the value has the wrong type, so callers can treat
"missing" and "malformed" the same way.
"""


def as_int(val: object) -> int | None:
    # bool is an int subclass, JSON true/false is not a count
    if isinstance(val, bool) or not isinstance(val, int):
        return None
    return val


def as_float(val: object) -> float | None:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return None
    return float(val)


def as_str(val: object) -> str | None:
    return val if isinstance(val, str) else None


def as_str_list(val: object) -> list[str]:
    if not isinstance(val, list):
        return []
    return [v for v in val if isinstance(v, str)]
