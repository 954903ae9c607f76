import re
from typing import Optional

from daywheel.config import DEFAULT_EVENT_COLOR

_URL_RE = re.compile(r"https?://[^\s)]+")


def extract_meeting_link(location: Optional[str], description: Optional[str]) -> Optional[str]:
    """First http(s) URL found in the location, then the description."""
    text = " ".join(part for part in (location, description) if part).strip()
    if not text:
        return None
    match = _URL_RE.search(text)
    return match.group(0) if match else None


def argb_to_hex(color: Optional[int], alpha: Optional[float] = None) -> str:
    """Convert a packed 0xAARRGGBB int to a Flet ``#aarrggbb`` string."""
    if color is None:
        color = DEFAULT_EVENT_COLOR
    a = (color >> 24) & 0xFF
    if alpha is not None:
        a = max(0, min(255, round(alpha * 255)))
    return f"#{a:02x}{(color >> 16) & 0xFF:02x}{(color >> 8) & 0xFF:02x}{color & 0xFF:02x}"
