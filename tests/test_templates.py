import pytest

from brandmail.core.templates import clone_template_blocks, create_email, get_template, list_templates


def test_three_builtin_templates():
    assert [t.id for t in list_templates()] == ["newsletter", "announcement", "event"]


def test_get_template():
    template = get_template("event")

    assert template.name == "Invitación a Evento"
    assert template.default_subject.startswith("📅")
    assert get_template("missing") is None


def test_templates_use_only_supported_blocks():
    for template in list_templates():
        types = {block.type for block in template.blocks}
        assert "footer" in types
        assert "button" in types


def test_placeholders_present():
    urls = {block.url for t in list_templates() for block in t.blocks if block.type == "button"}
    assert {"{{cta_url}}", "{{registration_url}}"} <= urls


def test_clone_template_blocks_assigns_fresh_ids():
    original = get_template("newsletter").blocks
    cloned = clone_template_blocks(original)

    assert [b.type for b in cloned] == [b.type for b in original]
    assert not {b.id for b in cloned} & {b.id for b in original}
    social = next(b for b in cloned if b.type == "social")
    assert social.networks is not next(b for b in original if b.type == "social").networks


def test_create_email_without_template():
    doc = create_email("Vacío", brand_kit_id="kit-1")

    assert doc.blocks == []
    assert doc.subject == ""
    assert doc.brand_kit_id == "kit-1"
    assert doc.content_width == 600


def test_create_email_from_template():
    doc = create_email("Semanal", template_id="newsletter", content_width=640)
    template = get_template("newsletter")

    assert doc.template_id == "newsletter"
    assert doc.subject == template.default_subject
    assert doc.preheader == template.default_preheader
    assert len(doc.blocks) == len(template.blocks)
    assert doc.content_width == 640


def test_create_email_unknown_template():
    with pytest.raises(KeyError):
        create_email("X", template_id="nope")
