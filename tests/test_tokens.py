from brandmail.core.brand_parser import default_brand_kit
from brandmail.core.tokens import (
    DARK_MODE_OVERRIDES,
    DEFAULT_RADIUS,
    DEFAULT_SPACING_SCALE,
    dark_mode_tokens,
    resolve_tokens,
)
from brandmail.models.schemas import BrandKit


def test_resolve_tokens_copies_brand_colors(brand_kit):
    tokens = resolve_tokens(brand_kit)

    assert tokens.primary == "#2563eb"
    assert tokens.muted_text == "#64748b"
    assert tokens.font_stack == "Arial, Helvetica, sans-serif"
    assert tokens.radius == DEFAULT_RADIUS
    assert tokens.spacing_scale == DEFAULT_SPACING_SCALE


def test_resolve_tokens_passes_invalid_colors_through():
    kit = BrandKit.model_validate({"id": "k", "name": "Bad", "colors": {"primary": "not-a-color"}})
    assert resolve_tokens(kit).primary == "not-a-color"


def test_dark_mode_tokens_replaces_only_neutral_roles(tokens):
    dark = dark_mode_tokens(tokens)

    assert dark.background == "#1a1a1a"
    assert dark.surface == "#2d2d2d"
    assert dark.text == "#ffffff"
    assert dark.muted_text == "#a0a0a0"
    assert dark.border == "#404040"
    assert dark.primary == tokens.primary
    assert dark.secondary == tokens.secondary
    assert dark.font_stack == tokens.font_stack


def test_dark_mode_tokens_does_not_mutate_input(tokens):
    dark_mode_tokens(tokens)
    assert tokens.background == "#ffffff"


def test_dark_mode_tokens_is_idempotent(tokens):
    once = dark_mode_tokens(tokens)
    assert dark_mode_tokens(once) == once
    assert set(DARK_MODE_OVERRIDES) == {"background", "surface", "text", "muted_text", "border"}


def test_default_kit_resolves_to_default_palette():
    tokens = resolve_tokens(default_brand_kit())

    assert (tokens.primary, tokens.secondary, tokens.background, tokens.surface) == (
        "#2563eb", "#64748b", "#ffffff", "#f8fafc",
    )
    assert (tokens.text, tokens.muted_text, tokens.border) == ("#1e293b", "#64748b", "#e2e8f0")
    assert (tokens.success, tokens.warning, tokens.danger) == ("#22c55e", "#f59e0b", "#ef4444")
