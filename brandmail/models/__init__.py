"""Data models for the Email Builder service."""

from .schemas import (
    BrandAnalysis,
    BrandColors,
    BrandKit,
    BrandLogos,
    BrandTypography,
    CheckStatus,
    CompatibilityCheck,
    ContrastCheck,
    ContrastLevel,
    DarkModeDefense,
    DesignTokens,
    EmailBlock,
    EmailDocument,
    RenderOptions,
    TemplateDefinition,
    UnsupportedBlock,
)

__all__ = [
    "BrandAnalysis",
    "BrandColors",
    "BrandKit",
    "BrandLogos",
    "BrandTypography",
    "CheckStatus",
    "CompatibilityCheck",
    "ContrastCheck",
    "ContrastLevel",
    "DarkModeDefense",
    "DesignTokens",
    "EmailBlock",
    "EmailDocument",
    "RenderOptions",
    "TemplateDefinition",
    "UnsupportedBlock",
]
