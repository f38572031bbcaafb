from brandmail.core.compatibility import EmailCompatibilityChecker, check_compatibility
from brandmail.models.schemas import CheckStatus


def _by_id(checks):
    return {c.id: c for c in checks}


def test_complete_document_passes(document, brand_kit):
    checks = check_compatibility(document, brand_kit)

    assert [c.id for c in checks] == [
        "preheader", "subject", "header", "cta", "footer", "unsubscribe",
        "table-layout", "inline-styles", "font-stack", "width",
    ]
    assert all(c.status == CheckStatus.PASS for c in checks)


def test_empty_document(make_document, brand_kit):
    checks = _by_id(check_compatibility(make_document(), brand_kit))

    assert "image-alt" not in checks
    for check_id in ("preheader", "subject", "header", "cta", "footer", "unsubscribe"):
        assert checks[check_id].status == CheckStatus.WARNING
    for check_id in ("table-layout", "inline-styles", "font-stack", "width"):
        assert checks[check_id].status == CheckStatus.PASS
    assert checks["preheader"].message == "Sin preheader definido"
    assert checks["subject"].message == "Sin asunto definido"


def test_no_check_ever_fails(make_document, brand_kit):
    checks = check_compatibility(make_document(subject="x" * 200), brand_kit)
    assert not any(c.status == CheckStatus.FAIL for c in checks)


def test_long_subject_warns(make_document, brand_kit):
    subject = "a" * 61
    check = _by_id(check_compatibility(make_document(subject=subject), brand_kit))["subject"]

    assert check.status == CheckStatus.WARNING
    assert check.message == f'Asunto: "{subject}" (61 caracteres)'
    assert "60" in check.suggestion


def test_subject_at_limit_passes(make_document, brand_kit):
    check = _by_id(check_compatibility(make_document(subject="a" * 60), brand_kit))["subject"]
    assert check.status == CheckStatus.PASS
    assert check.suggestion is None


def test_subject_threshold_is_configurable(make_document, brand_kit):
    checker = EmailCompatibilityChecker(subject_max_length=10)
    check = _by_id(checker.check(make_document(subject="a" * 11), brand_kit))["subject"]
    assert check.status == CheckStatus.WARNING


def test_image_alt_counts(make_document, brand_kit):
    doc = make_document([
        {"id": "i1", "type": "image", "src": "a.png", "alt": "Producto", "alignment": "center"},
        {"id": "i2", "type": "image", "src": "b.png", "alt": "", "alignment": "center"},
    ])
    checks = check_compatibility(doc, brand_kit)
    ids = [c.id for c in checks]
    image_alt = _by_id(checks)["image-alt"]

    assert ids.index("cta") < ids.index("image-alt") < ids.index("footer")
    assert image_alt.status == CheckStatus.WARNING
    assert image_alt.message == "1/2 imágenes tienen alt text"


def test_image_alt_all_present(make_document, brand_kit):
    doc = make_document([{"id": "i1", "type": "image", "src": "a.png", "alt": "Foto", "alignment": "left"}])
    assert _by_id(check_compatibility(doc, brand_kit))["image-alt"].status == CheckStatus.PASS


def test_unsubscribe_uses_first_footer(make_document, brand_kit):
    doc = make_document([
        {"id": "f1", "type": "footer", "content": "a"},
        {"id": "f2", "type": "footer", "content": "b", "includeUnsubscribe": True},
    ])
    checks = _by_id(check_compatibility(doc, brand_kit))

    assert checks["footer"].status == CheckStatus.PASS
    assert checks["unsubscribe"].status == CheckStatus.WARNING


def test_unsubscribe_pass(make_document, brand_kit):
    doc = make_document([{"id": "f", "type": "footer", "content": "a", "includeUnsubscribe": True}])
    check = _by_id(check_compatibility(doc, brand_kit))["unsubscribe"]

    assert check.status == CheckStatus.PASS
    assert check.message == "Link de baja incluido"


def test_font_stack_reports_primary_font(make_document, brand_kit):
    check = _by_id(check_compatibility(make_document(), brand_kit))["font-stack"]
    assert check.message == "Font stack: Arial"


def test_width_check_reports_default_policy(make_document, brand_kit):
    check = _by_id(check_compatibility(make_document(content_width=700), brand_kit))["width"]
    assert check.status == CheckStatus.PASS
    assert check.message == "Ancho fijo 600px con responsive"
