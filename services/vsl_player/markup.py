"""
Markup Utilities for Embed Generation
Escaping of user-supplied text, URL encoding and accent color normalization
"""
import re
from urllib.parse import quote

from loguru import logger

from config import settings


_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
})

# Characters encodeURI leaves untouched besides letters, digits and -_.~
_URI_SAFE = ";,/?:@&=+$!*'()#"

_HEX6 = re.compile(r"^#[0-9a-fA-F]{6}$")
_HEX3 = re.compile(r"^#[0-9a-fA-F]{3}$")


def escape_html(text: str) -> str:
    """Escape the five HTML-sensitive characters."""
    return text.translate(_HTML_ESCAPES)


def encode_uri(url: str) -> str:
    """Percent-encode a URL the way JavaScript's encodeURI does."""
    return quote(url, safe=_URI_SAFE)


def attribute_url(url: str) -> str:
    """Encode a URL and make it safe inside a quoted HTML attribute."""
    return escape_html(encode_uri(url))


def normalize_accent_color(color: str, default: str = None) -> str:
    """
    Return a #RRGGBB color usable in inline styles.

    #RRGGBB is kept as given, #RGB is expanded, anything else falls back
    to the default accent color.
    """
    default = default or settings.DEFAULT_ACCENT_COLOR
    value = (color or "").strip()
    if _HEX6.match(value):
        return value
    if _HEX3.match(value):
        return "#" + "".join(ch * 2 for ch in value[1:])
    logger.warning(f"Accent color {color!r} is not a hex color, using {default}")
    return default
