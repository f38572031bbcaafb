"""
Contrast and dark-mode advisor.

WCAG contrast ratios for the brand kit's key color pairs and a fixed set
of dark-mode safety heuristics evaluated against the brand kit.
"""

import logging
from typing import List

from ..models.schemas import BrandKit, ContrastCheck, ContrastLevel, DarkModeDefense
from .brand_parser import hex_to_rgb, relative_luminance

logger = logging.getLogger(__name__)

AAA_THRESHOLD = 7.0
AA_THRESHOLD = 4.5
BUTTON_TEXT_COLOR = "#ffffff"

# Mid grays that some clients' dark modes flip to near-white
PURE_GRAYS = ("#808080", "#888", "#999", "#aaa", "#bbb")


def contrast_ratio(color1: str, color2: str) -> float:
    """
    WCAG contrast ratio between two hex colors, from 1.0 to 21.0.

    If either color is not a 6-digit hex value the ratio is 1.0.
    """
    rgb1 = hex_to_rgb(color1)
    rgb2 = hex_to_rgb(color2)
    if rgb1 is None or rgb2 is None:
        return 1.0

    l1 = relative_luminance(*rgb1)
    l2 = relative_luminance(*rgb2)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def contrast_level(ratio: float) -> ContrastLevel:
    if ratio >= AAA_THRESHOLD:
        return ContrastLevel.AAA
    if ratio >= AA_THRESHOLD:
        return ContrastLevel.AA
    return ContrastLevel.FAIL


def _contrast_check(check_id: str, foreground: str, background: str, failure_hint: str) -> ContrastCheck:
    ratio = contrast_ratio(foreground, background)
    level = contrast_level(ratio)
    return ContrastCheck(
        id=check_id,
        foreground=foreground,
        background=background,
        ratio=round(ratio, 2),
        level=level,
        suggestion=failure_hint if level == ContrastLevel.FAIL else None,
    )


def check_contrasts(brand_kit: BrandKit) -> List[ContrastCheck]:
    """Evaluate the four fixed foreground/background pairs of a brand kit."""
    colors = brand_kit.colors
    checks = [
        _contrast_check(
            "text-background", colors.text, colors.background,
            "El contraste entre texto y fondo es insuficiente",
        ),
        _contrast_check(
            "muted-background", colors.muted_text, colors.background,
            "El texto secundario puede ser difícil de leer",
        ),
        _contrast_check(
            "text-surface", colors.text, colors.surface,
            "El texto sobre tarjetas y contenedores puede ser difícil de leer",
        ),
        _contrast_check(
            "button", BUTTON_TEXT_COLOR, colors.primary,
            "El texto del botón puede no ser legible; considera un color más oscuro",
        ),
    ]

    failing = [c.id for c in checks if c.level == ContrastLevel.FAIL]
    if failing:
        logger.debug(f"Brand kit {brand_kit.id} fails contrast for: {', '.join(failing)}")
    return checks


def get_dark_mode_defenses(brand_kit: BrandKit) -> List[DarkModeDefense]:
    """Dark-mode safety heuristics evaluated against the brand kit."""
    colors = brand_kit.colors

    return [
        DarkModeDefense(
            id="solid-bg",
            title="Fondos sólidos",
            description="Usar colores de fondo sólidos en lugar de transparentes",
            applied=True,
            recommendation="Los fondos sólidos evitan que el dark mode invierta el contenido inesperadamente.",
        ),
        DarkModeDefense(
            id="avoid-gray",
            title="Evitar grises puros",
            description="Usar tonos con matiz en lugar de grises neutros",
            applied=colors.muted_text.lower() not in PURE_GRAYS,
            recommendation="Los grises puros pueden volverse blancos en dark mode, perdiéndose contra el fondo.",
        ),
        DarkModeDefense(
            id="border-visibility",
            title="Bordes visibles",
            description="Mantener bordes definidos en tarjetas y contenedores",
            applied=colors.border.lower() != colors.background.lower(),
            recommendation="Los bordes ayudan a mantener la estructura visual en dark mode.",
        ),
        DarkModeDefense(
            id="logo-version",
            title="Logo alternativo",
            description="Tener una versión del logo para fondos oscuros",
            applied=bool(brand_kit.logos.dark),
            recommendation="Un logo con colores invertidos o con fondo puede ser necesario en dark mode.",
        ),
        DarkModeDefense(
            id="sufficient-contrast",
            title="Contraste suficiente",
            description="Mantener ratio mínimo de 4.5:1 para texto",
            applied=contrast_ratio(colors.text, colors.background) >= AA_THRESHOLD,
            recommendation="El alto contraste base sobrevive mejor las transformaciones de dark mode.",
        ),
    ]
