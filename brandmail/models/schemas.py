"""
Email Builder - Pydantic Models

Brand kits, design tokens, email documents and their typed content blocks,
plus the result records produced by the compatibility checker and the
contrast advisor.

Attributes are snake_case in Python and camelCase on the wire, so the
editor's JSON (``mutedText``, ``includeUnsubscribe``...) validates as-is.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CamelModel(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


Alignment = Literal["left", "center", "right"]


class CheckStatus(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class ContrastLevel(str, Enum):
    AAA = "AAA"
    AA = "AA"
    FAIL = "fail"


# =============================================================================
# Design Tokens / Brand Kit
# =============================================================================

class DesignTokens(CamelModel):
    """Flat token set consumed by every block renderer."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    primary: str
    secondary: str
    background: str
    surface: str
    text: str
    muted_text: str
    border: str
    success: str
    warning: str
    danger: str
    radius: str = "4px"
    spacing_scale: int = 8
    font_stack: str = "Arial, 'Helvetica Neue', Helvetica, sans-serif"


class BrandLogos(CamelModel):
    """Logo slots; each value is an opaque image reference (URL or data URI)."""
    primary: Optional[str] = None
    dark: Optional[str] = None
    icon: Optional[str] = None


class BrandColors(CamelModel):
    """The eleven color roles of a brand kit."""
    primary: str = "#2563eb"
    secondary: str = "#64748b"
    accent: str = "#0891b2"
    background: str = "#ffffff"
    surface: str = "#f8fafc"
    text: str = "#1e293b"
    muted_text: str = "#64748b"
    border: str = "#e2e8f0"
    success: str = "#22c55e"
    warning: str = "#f59e0b"
    danger: str = "#ef4444"


class BrandTypography(CamelModel):
    heading: str = "Arial"
    body: str = "Arial"
    font_stack: str = "Arial, 'Helvetica Neue', Helvetica, sans-serif"


class BrandKit(CamelModel):
    """Reusable bundle of colors, fonts and logos applied to email documents."""
    id: str
    name: str
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
    logos: BrandLogos = Field(default_factory=BrandLogos)
    colors: BrandColors = Field(default_factory=BrandColors)
    typography: BrandTypography = Field(default_factory=BrandTypography)
    brand_notes: Optional[str] = None
    extracted_colors: List[str] = Field(default_factory=list)


# =============================================================================
# Blocks
# =============================================================================

class HeaderBlock(CamelModel):
    id: str
    type: Literal["header"] = "header"
    alignment: Alignment
    logo_url: Optional[str] = None
    tagline: Optional[str] = None
    background_color: Optional[str] = None
    padding: Optional[int] = None


class HeroBlock(CamelModel):
    id: str
    type: Literal["hero"] = "hero"
    title: str
    alignment: Alignment
    subtitle: Optional[str] = None
    image_url: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None


class TextBlock(CamelModel):
    id: str
    type: Literal["text"] = "text"
    content: str  # raw HTML, inserted verbatim
    alignment: Alignment


class ImageBlock(CamelModel):
    id: str
    type: Literal["image"] = "image"
    src: str
    alt: str
    alignment: Alignment
    width: Optional[int] = None
    link: Optional[str] = None


class ButtonBlock(CamelModel):
    id: str
    type: Literal["button"] = "button"
    text: str
    url: str
    alignment: Alignment
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    full_width: bool = False
    border_radius: Optional[int] = None


class DividerBlock(CamelModel):
    id: str
    type: Literal["divider"] = "divider"
    style: Literal["solid", "dashed", "dotted"]
    color: Optional[str] = None
    thickness: Optional[int] = None


class SpacerBlock(CamelModel):
    id: str
    type: Literal["spacer"] = "spacer"
    height: int


class CardBlock(CamelModel):
    id: str
    type: Literal["card"] = "card"
    content: str
    title: Optional[str] = None
    image_url: Optional[str] = None
    cta_text: Optional[str] = None
    cta_url: Optional[str] = None
    background_color: Optional[str] = None
    border_color: Optional[str] = None


class FooterBlock(CamelModel):
    id: str
    type: Literal["footer"] = "footer"
    content: str
    include_unsubscribe: bool = False
    background_color: Optional[str] = None
    text_color: Optional[str] = None


SocialPlatform = Literal["facebook", "twitter", "instagram", "linkedin", "youtube"]


class SocialNetwork(CamelModel):
    platform: SocialPlatform = Field(validation_alias=AliasChoices("platform", "type"))
    url: str


class SocialBlock(CamelModel):
    id: str
    type: Literal["social"] = "social"
    networks: List[SocialNetwork]
    alignment: Alignment
    icon_style: Literal["color", "mono", "outline"]


SUPPORTED_BLOCK_TYPES = (
    "header", "hero", "text", "image", "button",
    "divider", "spacer", "card", "footer", "social",
)


class UnsupportedBlock(CamelModel):
    """
    Any block whose type has no renderer (e.g. ``columns``).

    Kept so persisted documents still load; renders to an empty string.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    type: str

    @field_validator("type")
    @classmethod
    def _not_a_supported_type(cls, value: str) -> str:
        if value in SUPPORTED_BLOCK_TYPES:
            raise ValueError(f"'{value}' blocks must match their own schema")
        return value


SupportedBlock = Annotated[
    Union[
        HeaderBlock,
        HeroBlock,
        TextBlock,
        ImageBlock,
        ButtonBlock,
        DividerBlock,
        SpacerBlock,
        CardBlock,
        FooterBlock,
        SocialBlock,
    ],
    Field(discriminator="type"),
]

EmailBlock = Annotated[
    Union[SupportedBlock, UnsupportedBlock],
    Field(union_mode="left_to_right"),
]


# =============================================================================
# Email Document
# =============================================================================

class EmailDocument(CamelModel):
    """An ordered sequence of blocks plus email metadata."""
    id: str
    name: str
    subject: str = ""
    preheader: str = ""
    blocks: List[EmailBlock] = Field(default_factory=list)
    brand_kit_id: Optional[str] = None
    theme: Literal["light", "dark"] = "light"
    content_width: int = 600
    template_id: Optional[str] = None
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)


class TemplateDefinition(CamelModel):
    id: str
    name: str
    description: str
    category: Literal["newsletter", "announcement", "event", "promotional"]
    preview: str = ""
    blocks: List[EmailBlock] = Field(default_factory=list)
    default_subject: Optional[str] = None
    default_preheader: Optional[str] = None


class RenderOptions(CamelModel):
    for_preview: bool = False
    dark_mode: bool = False
    include_comments: bool = False
    minify: bool = False


# =============================================================================
# Check Results
# =============================================================================

class CompatibilityCheck(CamelModel):
    id: str
    name: str
    status: CheckStatus
    message: str
    suggestion: Optional[str] = None


class ContrastCheck(CamelModel):
    id: str
    foreground: str
    background: str
    ratio: float
    level: ContrastLevel
    suggestion: Optional[str] = None


class DarkModeDefense(CamelModel):
    id: str
    title: str
    description: str
    applied: bool
    recommendation: str


# =============================================================================
# Brand Manual Analysis (external collaborator result shape)
# =============================================================================

class AnalysisColors(CamelModel):
    primary: List[str] = Field(default_factory=list)
    secondary: List[str] = Field(default_factory=list)
    accent: List[str] = Field(default_factory=list)
    neutral: List[str] = Field(default_factory=list)


class AnalysisTypography(CamelModel):
    heading_fonts: List[str] = Field(default_factory=list)
    body_fonts: List[str] = Field(default_factory=list)
    font_sizes: Dict[str, List[str]] = Field(default_factory=dict)


class AnalysisSpacing(CamelModel):
    scale: str = ""
    recommendations: List[str] = Field(default_factory=list)


class BrandAnalysis(CamelModel):
    """Brand attributes extracted from an uploaded brand manual."""
    colors: AnalysisColors = Field(default_factory=AnalysisColors)
    typography: AnalysisTypography = Field(default_factory=AnalysisTypography)
    spacing: AnalysisSpacing = Field(default_factory=AnalysisSpacing)
    border_radius: List[str] = Field(default_factory=list)
    brand_voice: str = ""
    key_guidelines: List[str] = Field(default_factory=list)
    logo_usage: Optional[str] = None
    do_and_donts: List[str] = Field(default_factory=list)
