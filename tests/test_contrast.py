import pytest

from brandmail.core.contrast import check_contrasts, contrast_level, contrast_ratio, get_dark_mode_defenses
from brandmail.models.schemas import BrandKit, ContrastLevel


def _kit(**colors):
    return BrandKit.model_validate({"id": "k", "name": "K", "colors": colors})


def test_black_on_white_is_max():
    assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
    assert contrast_ratio("#ffffff", "#000000") == pytest.approx(21.0)


def test_same_color_is_one():
    assert contrast_ratio("#2563eb", "#2563eb") == pytest.approx(1.0)


def test_unparseable_color_gives_ratio_one():
    assert contrast_ratio("red", "#ffffff") == 1.0
    assert contrast_ratio("#fff", "#000000") == 1.0


def test_contrast_levels():
    assert contrast_level(7.0) == ContrastLevel.AAA
    assert contrast_level(6.99) == ContrastLevel.AA
    assert contrast_level(4.5) == ContrastLevel.AA
    assert contrast_level(4.49) == ContrastLevel.FAIL


def test_check_contrasts_default_kit(brand_kit):
    checks = check_contrasts(brand_kit)

    assert [c.id for c in checks] == ["text-background", "muted-background", "text-surface", "button"]
    text_bg = checks[0]
    assert text_bg.foreground == "#1e293b"
    assert text_bg.background == "#ffffff"
    assert text_bg.level == ContrastLevel.AAA
    assert text_bg.suggestion is None
    assert checks[3].foreground == "#ffffff"
    assert checks[3].background == "#2563eb"
    assert all(c.ratio == round(c.ratio, 2) for c in checks)


def test_failing_pair_has_suggestion():
    checks = check_contrasts(_kit(text="#cccccc", background="#ffffff", mutedText="#eeeeee", primary="#ffff00"))

    for check in checks:
        if check.id != "text-surface":
            assert check.level == ContrastLevel.FAIL
            assert check.suggestion
    assert checks[0].suggestion == "El contraste entre texto y fondo es insuficiente"


def test_defenses_order_and_fixed_solid_bg(brand_kit):
    defenses = get_dark_mode_defenses(brand_kit)

    assert [d.id for d in defenses] == [
        "solid-bg", "avoid-gray", "border-visibility", "logo-version", "sufficient-contrast",
    ]
    assert defenses[0].applied is True


def test_defenses_for_sample_kit(brand_kit):
    applied = {d.id: d.applied for d in get_dark_mode_defenses(brand_kit)}

    assert applied["avoid-gray"] is True
    assert applied["border-visibility"] is True
    assert applied["logo-version"] is False
    assert applied["sufficient-contrast"] is True


def test_pure_gray_and_hidden_border():
    kit = _kit(mutedText="#999", border="#FFFFFF", background="#ffffff", text="#aaaaaa")
    applied = {d.id: d.applied for d in get_dark_mode_defenses(kit)}

    assert applied["avoid-gray"] is False
    assert applied["border-visibility"] is False
    assert applied["sufficient-contrast"] is False


def test_dark_logo_applied():
    kit = BrandKit.model_validate({"id": "k", "name": "K", "logos": {"dark": "https://x.test/dark.png"}})
    applied = {d.id: d.applied for d in get_dark_mode_defenses(kit)}
    assert applied["logo-version"] is True


def test_ratio_decreases_as_foreground_approaches_background():
    grays = [f"#{level:02x}{level:02x}{level:02x}" for level in range(0, 256, 5)]
    ratios = [contrast_ratio(gray, "#ffffff") for gray in grays]

    assert all(darker > lighter for darker, lighter in zip(ratios, ratios[1:]))
