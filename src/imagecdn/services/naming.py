import time
from typing import Optional


def stored_filename(original_name: str, now_ms: Optional[int] = None) -> str:
    """
    "<epoch millis>-<original name>". Two uploads of the same name within one
    millisecond map to the same stored name.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{original_name}"
