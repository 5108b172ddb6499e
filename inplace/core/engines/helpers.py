"""
Handlebars helpers registered by the built-in handlebars engine.
"""
import datetime
from typing import Any

def add_helper(this: Any, *args: Any) -> float:
    """
    Sums numeric arguments, skipping anything that is not a number.
    pybars passes the current 'this' context first.
    """
    total = 0.0
    for val in args:
        if isinstance(val, bool):
            continue
        if isinstance(val, (int, float)):
            total += val
        elif isinstance(val, str) and val.replace(".", "", 1).isdigit():
            total += float(val)
    return total

def now_utc_iso_helper(this: Any, *args: Any) -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()

def default_helper(this: Any, value: Any, fallback: Any) -> Any:
    # {{default title "Untitled"}}
    return fallback if value in (None, "") else value

BUILTIN_HELPERS = {
    "add": add_helper,
    "now": now_utc_iso_helper,
    "default": default_helper,
}
