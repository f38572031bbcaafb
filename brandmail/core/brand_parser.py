"""
Brand parsing helpers.

Color extraction from brand-manual text, hex/RGB conversion, WCAG
luminance, and brand kit construction with the email-safe defaults.
"""

import re
import secrets
import string
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from ..models.schemas import BrandColors, BrandKit, BrandTypography

HEX_PATTERN = re.compile(r"#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})\b")
RGB_PATTERN = re.compile(r"rgb\s*\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)", re.IGNORECASE)
HEX6_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

DARK_TEXT = "#1e293b"
LIGHT_TEXT = "#ffffff"

DEFAULT_KIT_ID = "default"
DEFAULT_KIT_NAME = "Mi Primera Marca"

# Web-safe font stacks with fallbacks for clients without web fonts
SAFE_FONT_STACKS: Dict[str, str] = {
    "System": "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif",
    "Inter": "'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif",
    "Poppins": "'Poppins', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif",
    "Roboto": "'Roboto', -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif",
    "Arial": "Arial, 'Helvetica Neue', Helvetica, sans-serif",
    "Georgia": "Georgia, 'Times New Roman', Times, serif",
    "Verdana": "Verdana, Geneva, sans-serif",
    "Tahoma": "Tahoma, Geneva, sans-serif",
    "Trebuchet": "'Trebuchet MS', 'Lucida Grande', 'Lucida Sans Unicode', sans-serif",
    "Courier": "'Courier New', Courier, monospace",
}


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


# =============================================================================
# Color conversion
# =============================================================================

def rgb_to_hex(r: int, g: int, b: int) -> str:
    return "#" + "".join(f"{c:02x}" for c in (r, g, b)).upper()


def hex_to_rgb(hex_color: str) -> Optional[Tuple[int, int, int]]:
    """Parse a 6-digit hex color (``#`` optional). Returns None if malformed."""
    match = HEX6_PATTERN.match(hex_color or "")
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def _linearize(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(r: int, g: int, b: int) -> float:
    """WCAG 2.x relative luminance of an sRGB color."""
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def is_light_color(hex_color: str) -> bool:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return True
    return relative_luminance(*rgb) > 0.5


def suggested_text_color(background_color: str) -> str:
    return DARK_TEXT if is_light_color(background_color) else LIGHT_TEXT


# =============================================================================
# Extraction
# =============================================================================

def extract_hex_colors(text: str) -> List[str]:
    """Hex colors found in ``text``, normalized to upper-case 6-digit form."""
    colors = []
    for match in HEX_PATTERN.finditer(text):
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        colors.append(f"#{digits.upper()}")
    return _unique(colors)


def extract_rgb_colors(text: str) -> List[str]:
    colors = []
    for match in RGB_PATTERN.finditer(text):
        r, g, b = (int(v) for v in match.groups())
        if r <= 255 and g <= 255 and b <= 255:
            colors.append(rgb_to_hex(r, g, b))
    return _unique(colors)


def extract_all_colors(text: str) -> List[str]:
    return _unique(extract_hex_colors(text) + extract_rgb_colors(text))


def categorize_colors(colors: List[str]) -> Dict[str, List[str]]:
    """Split colors into light / dark / neutral buckets by luminance."""
    buckets: Dict[str, List[str]] = {"light": [], "dark": [], "neutral": []}
    for color in colors:
        rgb = hex_to_rgb(color)
        if rgb is None:
            continue
        luminance = relative_luminance(*rgb)
        if luminance > 0.7:
            buckets["light"].append(color)
        elif luminance < 0.3:
            buckets["dark"].append(color)
        else:
            buckets["neutral"].append(color)
    return buckets


# =============================================================================
# Brand kit construction
# =============================================================================

def generate_id() -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(9))


def default_brand_kit() -> BrandKit:
    return BrandKit(
        id=DEFAULT_KIT_ID,
        name=DEFAULT_KIT_NAME,
        colors=BrandColors(),
        typography=BrandTypography(),
    )


def create_brand_kit(name: str, **overrides) -> BrandKit:
    """New brand kit with default colors/typography and a fresh id."""
    now = datetime.now(timezone.utc).isoformat()
    data = {
        "id": generate_id(),
        "name": name,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return BrandKit.model_validate(data)
