import pytest

from brandmail.core.brand_analysis import (
    BrandAnalysisError,
    apply_brand_analysis,
    build_brand_notes,
    parse_analysis_response,
)

ANALYSIS_JSON = """{
  "colors": {
    "primary": ["#0F766E"],
    "secondary": ["#475569", "#334155"],
    "accent": [],
    "neutral": ["#FAFAFA", "#F1F5F9"]
  },
  "typography": {"headingFonts": ["Playfair Display"], "bodyFonts": ["Lato"], "fontSizes": {"body": ["16px"]}},
  "spacing": {"recommendations": ["Margen de 24px"]},
  "borderRadius": ["6px"],
  "brandVoice": "Cercana y clara",
  "keyGuidelines": ["Usar siempre el logo completo"],
  "logoUsage": "Fondo claro",
  "doAndDonts": ["No deformar el logo"]
}"""


def test_parse_plain_json():
    analysis = parse_analysis_response(ANALYSIS_JSON)

    assert analysis.colors.primary == ["#0F766E"]
    assert analysis.typography.body_fonts == ["Lato"]
    assert analysis.brand_voice == "Cercana y clara"


def test_parse_fenced_json():
    text = f"Aquí está el análisis:\n```json\n{ANALYSIS_JSON}\n```\nSaludos"
    assert parse_analysis_response(text).border_radius == ["6px"]


def test_parse_json_embedded_in_prose():
    text = f"Resultado: {ANALYSIS_JSON} fin."
    assert parse_analysis_response(text).key_guidelines == ["Usar siempre el logo completo"]


@pytest.mark.parametrize("text", ["", "sin json aquí", "{roto", "[1, 2, 3]"])
def test_parse_failures_raise(text):
    with pytest.raises(BrandAnalysisError):
        parse_analysis_response(text)


def test_analysis_error_is_value_error():
    assert issubclass(BrandAnalysisError, ValueError)


def test_apply_brand_analysis(brand_kit):
    analysis = parse_analysis_response(ANALYSIS_JSON)
    updated = apply_brand_analysis(brand_kit, analysis)

    assert updated.id == brand_kit.id
    assert updated.colors.primary == "#0F766E"
    assert updated.colors.secondary == "#475569"
    assert updated.colors.accent == brand_kit.colors.accent
    assert updated.colors.background == "#FAFAFA"
    assert updated.colors.surface == "#F1F5F9"
    assert updated.colors.text == "#1e293b"
    assert updated.extracted_colors == ["#0F766E", "#475569", "#334155", "#FAFAFA", "#F1F5F9"]
    assert updated.typography.heading == "Playfair Display"
    assert updated.typography.body == "Lato"
    assert updated.typography.font_stack == '"Lato", Arial, sans-serif'


def test_apply_brand_analysis_does_not_mutate(brand_kit):
    before = brand_kit.model_dump()
    apply_brand_analysis(brand_kit, parse_analysis_response(ANALYSIS_JSON))
    assert brand_kit.model_dump() == before


def test_empty_analysis_keeps_kit_fonts_and_white_background(brand_kit):
    updated = apply_brand_analysis(brand_kit, parse_analysis_response("{}"))

    assert updated.colors.primary == brand_kit.colors.primary
    assert updated.colors.background == "#ffffff"
    assert updated.typography.font_stack == brand_kit.typography.font_stack
    assert updated.extracted_colors == []


def test_brand_notes_sections():
    notes = build_brand_notes(parse_analysis_response(ANALYSIS_JSON))

    assert notes.startswith("=== BRAND ANALYSIS ===")
    assert "Brand Voice: Cercana y clara" in notes
    assert "• Usar siempre el logo completo" in notes
    assert "Logo Usage:\nFondo claro" in notes
    assert "• No deformar el logo" in notes
    assert "Spacing:\n• Margen de 24px" in notes
