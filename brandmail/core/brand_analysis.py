"""
Brand manual analysis boundary.

The analysis itself runs in an external AI service; this module defines
the interface it is called through, parses the completion text it
returns, and applies the extracted attributes to a brand kit.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import ValidationError

from ..models.schemas import BrandAnalysis, BrandColors, BrandKit, BrandTypography

logger = logging.getLogger(__name__)


class BrandAnalysisError(ValueError):
    """Raised when an analysis response cannot be turned into a BrandAnalysis."""


class BrandManualAnalyzer(ABC):
    """Extracts brand attributes from an uploaded brand manual."""

    @abstractmethod
    async def analyze(self, filename: str, content: bytes) -> BrandAnalysis:
        """
        Analyze a brand manual file.

        Args:
            filename: Original file name (used for content-type detection)
            content: Raw file bytes

        Returns:
            BrandAnalysis with colors, typography and guidelines
        """


def _parse_json_response(response_text: str) -> Dict[str, Any]:
    """Parse JSON from a completion, handling markdown fences and prose."""
    try:
        return json.loads(response_text)
    except json.JSONDecodeError:
        pass

    if "```json" in response_text:
        start = response_text.find("```json") + 7
        end = response_text.find("```", start)
        if end > start:
            try:
                return json.loads(response_text[start:end].strip())
            except json.JSONDecodeError:
                pass

    if "{" in response_text:
        start = response_text.find("{")
        end = response_text.rfind("}") + 1
        if end > start:
            try:
                return json.loads(response_text[start:end])
            except json.JSONDecodeError:
                pass

    raise BrandAnalysisError("Could not parse JSON from analysis response")


def parse_analysis_response(response_text: str) -> BrandAnalysis:
    """Turn raw completion text into a validated BrandAnalysis."""
    data = _parse_json_response(response_text or "")
    if not isinstance(data, dict):
        raise BrandAnalysisError("Analysis response is not a JSON object")

    try:
        return BrandAnalysis.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Analysis response failed validation: {e}")
        raise BrandAnalysisError(f"Invalid analysis response: {e}") from e


def _bullets(items: List[str]) -> str:
    return "\n".join(f"• {item}" for item in items)


def build_brand_notes(analysis: BrandAnalysis) -> str:
    parts = ["=== BRAND ANALYSIS ===\n"]
    if analysis.brand_voice:
        parts.append(f"Brand Voice: {analysis.brand_voice}\n")
    if analysis.key_guidelines:
        parts.append(f"\nKey Guidelines:\n{_bullets(analysis.key_guidelines)}\n")
    if analysis.logo_usage:
        parts.append(f"\nLogo Usage:\n{analysis.logo_usage}\n")
    if analysis.do_and_donts:
        parts.append(f"\nDo's and Don'ts:\n{_bullets(analysis.do_and_donts)}\n")
    if analysis.spacing.recommendations:
        parts.append(f"\nSpacing:\n{_bullets(analysis.spacing.recommendations)}")
    return "".join(parts)


def _first(values: List[str], fallback: str) -> str:
    return values[0] if values else fallback


def apply_brand_analysis(brand_kit: BrandKit, analysis: BrandAnalysis) -> BrandKit:
    """
    Return a copy of ``brand_kit`` updated with the analysis results.

    Brand roles come from the first color of each analysis group; text,
    border and status roles are reset to the defaults.
    """
    found = analysis.colors
    extracted = [c for c in found.primary + found.secondary + found.accent + found.neutral if c]
    current = brand_kit.colors
    defaults = BrandColors()

    colors = BrandColors(
        primary=_first(found.primary, current.primary),
        secondary=_first(found.secondary, current.secondary),
        accent=_first(found.accent, current.accent),
        background=_first(found.neutral, "#ffffff"),
        surface=found.neutral[1] if len(found.neutral) > 1 else current.surface,
        text=defaults.text,
        muted_text=defaults.muted_text,
        border=defaults.border,
        success=defaults.success,
        warning=defaults.warning,
        danger=defaults.danger,
    )

    body_font = _first(analysis.typography.body_fonts, "")
    typography = BrandTypography(
        heading=_first(analysis.typography.heading_fonts, brand_kit.typography.heading),
        body=body_font or brand_kit.typography.body,
        font_stack=f'"{body_font}", Arial, sans-serif' if body_font else brand_kit.typography.font_stack,
    )

    logger.info(f"Applied brand analysis to {brand_kit.id}: {len(extracted)} colors")
    return brand_kit.model_copy(update={
        "colors": colors,
        "typography": typography,
        "brand_notes": build_brand_notes(analysis),
        "extracted_colors": extracted,
        "updated_at": datetime.now(timezone.utc).isoformat(),
    })
