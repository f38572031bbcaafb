"""
Design token resolution.

Maps a brand kit to the flat token set every block renderer reads, and
derives the dark-mode variant by fixed substitution.
"""

from ..models.schemas import BrandKit, DesignTokens

DEFAULT_RADIUS = "4px"
DEFAULT_SPACING_SCALE = 8

# Buttons keep their brand color in dark mode, so only the neutral
# surfaces and text roles are replaced.
DARK_MODE_OVERRIDES = {
    "background": "#1a1a1a",
    "surface": "#2d2d2d",
    "text": "#ffffff",
    "muted_text": "#a0a0a0",
    "border": "#404040",
}


def resolve_tokens(brand_kit: BrandKit) -> DesignTokens:
    """Convert a brand kit into design tokens. Colors are not validated."""
    colors = brand_kit.colors
    return DesignTokens(
        primary=colors.primary,
        secondary=colors.secondary,
        background=colors.background,
        surface=colors.surface,
        text=colors.text,
        muted_text=colors.muted_text,
        border=colors.border,
        success=colors.success,
        warning=colors.warning,
        danger=colors.danger,
        radius=DEFAULT_RADIUS,
        spacing_scale=DEFAULT_SPACING_SCALE,
        font_stack=brand_kit.typography.font_stack,
    )


def dark_mode_tokens(tokens: DesignTokens) -> DesignTokens:
    """Return a copy of ``tokens`` with the fixed dark-mode palette applied."""
    return tokens.model_copy(update=DARK_MODE_OVERRIDES)
