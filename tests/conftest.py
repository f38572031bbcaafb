"""
Shared fixtures: a sample brand kit, its resolved tokens and a small
email document covering the common block types.
"""
import pytest

from brandmail.core.tokens import resolve_tokens
from brandmail.models.schemas import BrandKit, EmailDocument


@pytest.fixture
def brand_kit():
    return BrandKit.model_validate({
        "id": "kit-1",
        "name": "Acme",
        "logos": {"primary": "https://cdn.example.com/logo.png"},
        "colors": {
            "primary": "#2563eb",
            "secondary": "#64748b",
            "accent": "#0891b2",
            "background": "#ffffff",
            "surface": "#f8fafc",
            "text": "#1e293b",
            "mutedText": "#64748b",
            "border": "#e2e8f0",
            "success": "#22c55e",
            "warning": "#f59e0b",
            "danger": "#ef4444",
        },
        "typography": {
            "heading": "Arial",
            "body": "Arial",
            "fontStack": "Arial, Helvetica, sans-serif",
        },
    })


@pytest.fixture
def tokens(brand_kit):
    return resolve_tokens(brand_kit)


@pytest.fixture
def document():
    return EmailDocument.model_validate({
        "id": "doc-1",
        "name": "Welcome",
        "subject": "Bienvenido a Acme",
        "preheader": "Todo lo que necesitas saber",
        "contentWidth": 600,
        "blocks": [
            {"id": "b-header", "type": "header", "alignment": "center", "tagline": "Hola"},
            {"id": "b-text", "type": "text", "alignment": "left", "content": "<p>Hola {{nombre}}</p>"},
            {"id": "b-button", "type": "button", "text": "Comprar", "url": "https://acme.test/shop",
             "alignment": "center"},
            {"id": "b-footer", "type": "footer", "content": "© Acme", "includeUnsubscribe": True},
        ],
    })


@pytest.fixture
def make_document():
    """Build an EmailDocument from a list of raw block dicts."""
    def _make(blocks=None, **fields):
        data = {"id": "doc-x", "name": "Test", "blocks": blocks or []}
        data.update(fields)
        return EmailDocument.model_validate(data)
    return _make
