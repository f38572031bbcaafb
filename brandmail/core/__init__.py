"""Core components for the Email Builder service."""

from .tokens import resolve_tokens, dark_mode_tokens
from .blocks import render_block
from .renderer import render_email, minify_html, dark_mode_preview_css
from .compatibility import EmailCompatibilityChecker, check_compatibility
from .contrast import contrast_ratio, check_contrasts, get_dark_mode_defenses
from .brand_parser import default_brand_kit, create_brand_kit, extract_all_colors
from .brand_analysis import BrandManualAnalyzer, BrandAnalysisError, apply_brand_analysis
from .templates import get_template, list_templates, create_email
from .storage import Repository, BrandKitStore, create_repository

__all__ = [
    "resolve_tokens",
    "dark_mode_tokens",
    "render_block",
    "render_email",
    "minify_html",
    "dark_mode_preview_css",
    "EmailCompatibilityChecker",
    "check_compatibility",
    "contrast_ratio",
    "check_contrasts",
    "get_dark_mode_defenses",
    "default_brand_kit",
    "create_brand_kit",
    "extract_all_colors",
    "BrandManualAnalyzer",
    "BrandAnalysisError",
    "apply_brand_analysis",
    "get_template",
    "list_templates",
    "create_email",
    "Repository",
    "BrandKitStore",
    "create_repository",
]
