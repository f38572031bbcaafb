"""
FastAPI routes for the Email Builder service.

Thin HTTP surface over the core: rendering, compatibility checks,
contrast advice, templates, drafts and brand kit CRUD.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import Field

from ..config.settings import get_app_config, load_brand_kit_presets
from ..core.brand_analysis import BrandAnalysisError, apply_brand_analysis, parse_analysis_response
from ..core.brand_parser import categorize_colors, default_brand_kit, extract_all_colors
from ..core.compatibility import EmailCompatibilityChecker
from ..core.contrast import check_contrasts, get_dark_mode_defenses
from ..core.renderer import render_email
from ..core.storage import BrandKitStore, create_repository
from ..core.templates import create_email, get_template, list_templates
from ..models.schemas import BrandKit, CamelModel, EmailDocument, RenderOptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/email-builder", tags=["Email Builder"])


# =============================================================================
# Pydantic Request Models
# =============================================================================

class RenderRequest(CamelModel):
    """Request body for rendering an email document."""
    document: EmailDocument
    brand_kit: Optional[BrandKit] = Field(None, description="Inline brand kit (wins over brandKitId)")
    brand_kit_id: Optional[str] = Field(None, description="Stored brand kit id")
    options: RenderOptions = Field(default_factory=RenderOptions)


class CheckRequest(CamelModel):
    """Request body for compatibility checks."""
    document: EmailDocument
    brand_kit: Optional[BrandKit] = None
    brand_kit_id: Optional[str] = None


class ContrastRequest(CamelModel):
    brand_kit: Optional[BrandKit] = None
    brand_kit_id: Optional[str] = None


class CreateDocumentRequest(CamelModel):
    """Request body for creating a draft, optionally from a template."""
    name: str = Field(..., description="Document name")
    template_id: Optional[str] = Field(None, description="Built-in template id")
    brand_kit_id: Optional[str] = None
    content_width: Optional[int] = Field(None, gt=0, description="Content width in pixels")


class ColorExtractionRequest(CamelModel):
    text: str


class BrandAnalysisRequest(CamelModel):
    """Raw completion text returned by the brand manual analyzer."""
    response: str


# =============================================================================
# State Management (lazy initialization)
# =============================================================================

_config = None
_brand_kit_store = None
_draft_repository = None


def _reset_state():
    """Drop cached config and stores (used when the environment changes)."""
    global _config, _brand_kit_store, _draft_repository
    _config = None
    _brand_kit_store = None
    _draft_repository = None


def _get_config():
    """Lazy load configuration."""
    global _config
    if _config is None:
        _config = get_app_config()
    return _config


def _get_brand_kit_store() -> BrandKitStore:
    """Lazy initialization of the brand kit store."""
    global _brand_kit_store
    if _brand_kit_store is None:
        config = _get_config()
        _brand_kit_store = BrandKitStore(
            create_repository(BrandKit, "brand_kits", config.storage),
            presets=load_brand_kit_presets(config.presets_path),
        )
    return _brand_kit_store


def _get_draft_repository():
    """Lazy initialization of the draft repository."""
    global _draft_repository
    if _draft_repository is None:
        _draft_repository = create_repository(EmailDocument, "drafts", _get_config().storage)
    return _draft_repository


def _resolve_brand_kit(
    brand_kit: Optional[BrandKit],
    brand_kit_id: Optional[str],
    document: Optional[EmailDocument] = None,
) -> BrandKit:
    """Inline kit, then explicit id, then the document's kit id, then the default kit."""
    if brand_kit is not None:
        return brand_kit

    kit_id = brand_kit_id or (document.brand_kit_id if document else None)
    if not kit_id:
        return default_brand_kit()

    kit = _get_brand_kit_store().get(kit_id)
    if kit is None:
        raise HTTPException(status_code=404, detail=f"Brand kit {kit_id} not found")
    return kit


def _dump(models: List[CamelModel]) -> List[Dict[str, Any]]:
    return [m.model_dump(by_alias=True, mode="json") for m in models]


# =============================================================================
# Rendering & Checks
# =============================================================================

@router.post("/render")
async def render_document(request: RenderRequest) -> Dict[str, Any]:
    """
    Render an email document to HTML.

    - **document**: Email document (blocks, subject, preheader, theme)
    - **brandKit** / **brandKitId**: Brand kit to apply
    - **options**: forPreview, darkMode, includeComments, minify
    """
    try:
        brand_kit = _resolve_brand_kit(request.brand_kit, request.brand_kit_id, request.document)
        options = request.options
        if not options.for_preview and _get_config().renderer.minify_export:
            options = options.model_copy(update={"minify": True})

        html = render_email(request.document, brand_kit, options)
        return {"html": html}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to render email {request.document.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/check")
async def check_document(request: CheckRequest) -> Dict[str, Any]:
    """Run the compatibility checks against a document."""
    try:
        brand_kit = _resolve_brand_kit(request.brand_kit, request.brand_kit_id, request.document)
        checker = EmailCompatibilityChecker(
            subject_max_length=_get_config().checker.subject_max_length,
        )
        return {"checks": _dump(checker.check(request.document, brand_kit))}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to check email {request.document.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/contrast")
async def advise_contrast(request: ContrastRequest) -> Dict[str, Any]:
    """Contrast ratios and dark-mode defenses for a brand kit."""
    try:
        brand_kit = _resolve_brand_kit(request.brand_kit, request.brand_kit_id)
        contrasts = check_contrasts(brand_kit)
        minimum = _get_config().checker.min_text_contrast
        return {
            "contrasts": _dump(contrasts),
            "belowMinimum": [c.id for c in contrasts if c.ratio < minimum],
            "darkModeDefenses": _dump(get_dark_mode_defenses(brand_kit)),
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to evaluate contrast: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/extract-colors")
async def extract_colors(request: ColorExtractionRequest) -> Dict[str, Any]:
    """Pull hex and rgb() colors out of free text and group them by lightness."""
    colors = extract_all_colors(request.text)
    return {"colors": colors, "categories": categorize_colors(colors)}


# =============================================================================
# Templates & Drafts
# =============================================================================

@router.get("/templates")
async def get_templates() -> Dict[str, Any]:
    templates = list_templates()
    return {"total": len(templates), "templates": _dump(templates)}


@router.get("/templates/{template_id}")
async def get_template_detail(template_id: str) -> Dict[str, Any]:
    template = get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template {template_id} not found")
    return template.model_dump(by_alias=True, mode="json")


@router.post("/documents")
async def create_document(request: CreateDocumentRequest) -> Dict[str, Any]:
    """
    Create a draft, optionally seeded from a built-in template.

    The draft is stored and returned in the editor's JSON shape.
    """
    try:
        doc = create_email(
            request.name,
            brand_kit_id=request.brand_kit_id,
            template_id=request.template_id,
            content_width=request.content_width or _get_config().renderer.default_content_width,
        )
        stored = _get_draft_repository().put(doc)
        logger.info(f"Created draft {stored.id} (template: {request.template_id})")
        return stored.model_dump(by_alias=True, mode="json")

    except KeyError:
        raise HTTPException(status_code=404, detail=f"Template {request.template_id} not found")
    except Exception as e:
        logger.error(f"Failed to create document: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/documents")
async def list_documents() -> Dict[str, Any]:
    docs = _get_draft_repository().list()
    return {"total": len(docs), "documents": _dump(docs)}


@router.get("/documents/{document_id}")
async def get_document(document_id: str) -> Dict[str, Any]:
    doc = _get_draft_repository().get(document_id)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")
    return doc.model_dump(by_alias=True, mode="json")


@router.put("/documents/{document_id}")
async def save_document(document_id: str, document: EmailDocument) -> Dict[str, Any]:
    if document.id != document_id:
        raise HTTPException(status_code=400, detail="Document id does not match the URL")
    stored = _get_draft_repository().put(document)
    return stored.model_dump(by_alias=True, mode="json")


@router.delete("/documents/{document_id}")
async def delete_document(document_id: str) -> Dict[str, Any]:
    if not _get_draft_repository().delete(document_id):
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")
    return {"deleted": document_id}


# =============================================================================
# Brand Kits
# =============================================================================

@router.get("/brand-kits")
async def list_brand_kits() -> Dict[str, Any]:
    """List stored brand kits; an empty store is seeded on first call."""
    try:
        kits = _get_brand_kit_store().list()
        return {"total": len(kits), "brandKits": _dump(kits)}

    except Exception as e:
        logger.error(f"Failed to list brand kits: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/brand-kits/{kit_id}")
async def get_brand_kit(kit_id: str) -> Dict[str, Any]:
    kit = _get_brand_kit_store().get(kit_id)
    if kit is None:
        raise HTTPException(status_code=404, detail=f"Brand kit {kit_id} not found")
    return kit.model_dump(by_alias=True, mode="json")


@router.put("/brand-kits/{kit_id}")
async def save_brand_kit(kit_id: str, brand_kit: BrandKit) -> Dict[str, Any]:
    """Create or replace a brand kit. The body id must match the URL."""
    if brand_kit.id != kit_id:
        raise HTTPException(status_code=400, detail="Brand kit id does not match the URL")

    try:
        stored = _get_brand_kit_store().put(brand_kit)
        return stored.model_dump(by_alias=True, mode="json")

    except Exception as e:
        logger.error(f"Failed to save brand kit {kit_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/brand-kits/{kit_id}")
async def delete_brand_kit(kit_id: str) -> Dict[str, Any]:
    if not _get_brand_kit_store().delete(kit_id):
        raise HTTPException(status_code=404, detail=f"Brand kit {kit_id} not found")
    return {"deleted": kit_id}


@router.post("/brand-kits/{kit_id}/analysis")
async def apply_analysis(kit_id: str, request: BrandAnalysisRequest) -> Dict[str, Any]:
    """
    Apply a brand manual analysis to a stored brand kit.

    Takes the analyzer's raw completion text, parses it and stores the
    updated kit.
    """
    store = _get_brand_kit_store()
    kit = store.get(kit_id)
    if kit is None:
        raise HTTPException(status_code=404, detail=f"Brand kit {kit_id} not found")

    try:
        analysis = parse_analysis_response(request.response)
    except BrandAnalysisError as e:
        raise HTTPException(status_code=400, detail=str(e))

    stored = store.put(apply_brand_analysis(kit, analysis))
    return {
        "brandKit": stored.model_dump(by_alias=True, mode="json"),
        "analysis": analysis.model_dump(by_alias=True, mode="json"),
    }
