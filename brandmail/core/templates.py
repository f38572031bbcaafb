"""
Built-in email templates.

Templates carry placeholder tokens ({{nombre}}, {{cta_url}},
{{registration_url}}, {{email}}) that the sending platform substitutes.
"""

import logging
from typing import List, Optional

from ..models.schemas import EmailDocument, TemplateDefinition
from .brand_parser import generate_id

logger = logging.getLogger(__name__)

_NEWSLETTER = {
    "id": "newsletter",
    "name": "Newsletter",
    "description": "Newsletter limpio y profesional con secciones de contenido destacado y tarjetas.",
    "category": "newsletter",
    "defaultSubject": "Tu newsletter semanal",
    "defaultPreheader": "Las últimas novedades y contenido destacado de esta semana",
    "blocks": [
        {"id": "nl-header", "type": "header", "alignment": "center",
         "tagline": "Tu newsletter semanal", "padding": 30},
        {"id": "nl-hero", "type": "hero", "title": "Título Principal del Newsletter",
         "subtitle": "Una breve descripción de lo que encontrarás en esta edición.",
         "alignment": "center"},
        {"id": "nl-spacer-1", "type": "spacer", "height": 20},
        {"id": "nl-intro", "type": "text", "alignment": "left",
         "content": "<p>Hola <strong>{{nombre}}</strong>,</p><p>Bienvenido a nuestra edición de esta semana. "
                    "Hemos preparado contenido especial para ti.</p>"},
        {"id": "nl-divider-1", "type": "divider", "style": "solid", "thickness": 1},
        {"id": "nl-featured", "type": "text", "alignment": "left",
         "content": '<h2 style="margin: 0 0 10px 0; font-size: 20px;">📌 Destacado de la semana</h2>'
                    "<p>Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed do eiusmod tempor "
                    "incididunt ut labore et dolore magna aliqua.</p>"},
        {"id": "nl-cta", "type": "button", "text": "Leer más", "url": "{{cta_url}}",
         "alignment": "left", "borderRadius": 6},
        {"id": "nl-spacer-2", "type": "spacer", "height": 30},
        {"id": "nl-more", "type": "text", "alignment": "left",
         "content": '<h2 style="margin: 0 0 15px 0; font-size: 20px;">📚 Más contenido</h2>'},
        {"id": "nl-card-1", "type": "card", "title": "Artículo 1",
         "content": "Breve descripción del primer artículo o noticia destacada de la semana.",
         "ctaText": "Ver artículo →", "ctaUrl": "#"},
        {"id": "nl-card-2", "type": "card", "title": "Artículo 2",
         "content": "Breve descripción del segundo artículo o recurso importante.",
         "ctaText": "Ver artículo →", "ctaUrl": "#"},
        {"id": "nl-spacer-3", "type": "spacer", "height": 20},
        {"id": "nl-divider-2", "type": "divider", "style": "solid", "thickness": 1},
        {"id": "nl-social", "type": "social", "alignment": "center", "iconStyle": "color",
         "networks": [
             {"platform": "twitter", "url": "#"},
             {"platform": "linkedin", "url": "#"},
             {"platform": "instagram", "url": "#"},
         ]},
        {"id": "nl-footer", "type": "footer", "includeUnsubscribe": True,
         "content": "© 2025 Tu Empresa. Todos los derechos reservados.<br/>Dirección: Calle Example 123, Ciudad"},
    ],
}

_ANNOUNCEMENT = {
    "id": "announcement",
    "name": "Anuncio",
    "description": "Perfecto para anuncios de productos, lanzamientos o actualizaciones importantes.",
    "category": "announcement",
    "defaultSubject": "🎉 ¡Gran anuncio!",
    "defaultPreheader": "Tenemos noticias emocionantes que compartir contigo",
    "blocks": [
        {"id": "an-header", "type": "header", "alignment": "center", "padding": 25},
        {"id": "an-hero", "type": "hero", "title": "🎉 ¡Gran Anuncio!",
         "subtitle": "Tenemos noticias emocionantes que compartir contigo.", "alignment": "center"},
        {"id": "an-spacer-1", "type": "spacer", "height": 30},
        {"id": "an-intro", "type": "text", "alignment": "center",
         "content": '<p style="font-size: 18px; text-align: center;">Estamos emocionados de presentarte '
                    "nuestras últimas novedades.</p>"},
        {"id": "an-spacer-2", "type": "spacer", "height": 20},
        {"id": "an-card-1", "type": "card", "title": "✨ Nueva Funcionalidad",
         "content": "Descripción de la primera característica o producto nuevo que estás anunciando. "
                    "Destaca los beneficios principales."},
        {"id": "an-card-2", "type": "card", "title": "🚀 Mejoras de Rendimiento",
         "content": "Descripción de mejoras o actualizaciones. Explica cómo beneficia esto a tus usuarios."},
        {"id": "an-card-3", "type": "card", "title": "🎁 Oferta Especial",
         "content": "Si hay una promoción asociada al anuncio, descríbela aquí con todos los detalles importantes.",
         "ctaText": "Aprovechar oferta", "ctaUrl": "#"},
        {"id": "an-spacer-3", "type": "spacer", "height": 30},
        {"id": "an-cta", "type": "button", "text": "Explorar Ahora", "url": "{{cta_url}}",
         "alignment": "center", "fullWidth": False, "borderRadius": 8},
        {"id": "an-spacer-4", "type": "spacer", "height": 30},
        {"id": "an-help", "type": "text", "alignment": "center",
         "content": '<p style="text-align: center; color: #666;">¿Tienes preguntas? Responde a este correo '
                    "o visita nuestro centro de ayuda.</p>"},
        {"id": "an-divider", "type": "divider", "style": "solid", "thickness": 1},
        {"id": "an-footer", "type": "footer", "includeUnsubscribe": True,
         "content": "© 2025 Tu Empresa<br/>Este email fue enviado a {{email}}"},
    ],
}

_EVENT = {
    "id": "event",
    "name": "Invitación a Evento",
    "description": "Invitación para webinars, conferencias o eventos con agenda y detalles.",
    "category": "event",
    "defaultSubject": "📅 Estás invitado: [Nombre del Evento]",
    "defaultPreheader": "Reserva tu lugar para este evento exclusivo",
    "blocks": [
        {"id": "ev-header", "type": "header", "alignment": "center",
         "tagline": "Estás invitado", "padding": 30},
        {"id": "ev-hero", "type": "hero", "title": "Webinar: Título del Evento",
         "subtitle": "Aprende las mejores prácticas con nuestros expertos", "alignment": "center"},
        {"id": "ev-spacer-1", "type": "spacer", "height": 20},
        {"id": "ev-details", "type": "text", "alignment": "center",
         "content": (
             '<div style="text-align: center; padding: 20px; background-color: #f8fafc; border-radius: 8px;">'
             '<p style="margin: 0 0 15px 0; font-size: 14px; color: #64748b; text-transform: uppercase; '
             'letter-spacing: 1px;">Detalles del evento</p>'
             '<p style="margin: 0 0 10px 0; font-size: 18px; font-weight: bold;">📅 Jueves, 15 de Febrero 2025</p>'
             '<p style="margin: 0 0 10px 0; font-size: 18px;">🕐 10:00 AM - 11:30 AM (GMT-5)</p>'
             '<p style="margin: 0; font-size: 18px;">💻 Online via Zoom</p>'
             "</div>"
         )},
        {"id": "ev-spacer-2", "type": "spacer", "height": 20},
        {"id": "ev-agenda", "type": "text", "alignment": "left",
         "content": (
             '<h3 style="margin: 0 0 15px 0;">¿Qué aprenderás?</h3>'
             '<ul style="margin: 0; padding-left: 20px; line-height: 1.8;">'
             "<li>Estrategias probadas para mejorar tu productividad</li>"
             "<li>Herramientas y recursos exclusivos</li>"
             "<li>Sesión de preguntas y respuestas en vivo</li>"
             "<li>Material descargable para asistentes</li>"
             "</ul>"
         )},
        {"id": "ev-spacer-3", "type": "spacer", "height": 20},
        {"id": "ev-cta", "type": "button", "text": "Reservar Mi Lugar", "url": "{{registration_url}}",
         "alignment": "center", "borderRadius": 8},
        {"id": "ev-spacer-4", "type": "spacer", "height": 10},
        {"id": "ev-limited", "type": "text", "alignment": "center",
         "content": '<p style="text-align: center; font-size: 14px; color: #64748b;">Cupos limitados. '
                    "¡No te lo pierdas!</p>"},
        {"id": "ev-divider", "type": "divider", "style": "solid", "thickness": 1},
        {"id": "ev-speakers", "type": "text", "alignment": "center",
         "content": (
             '<h3 style="margin: 0 0 15px 0; text-align: center;">Speakers</h3>'
             '<table width="100%" cellpadding="10" cellspacing="0" border="0"><tr>'
             '<td width="50%" valign="top" style="text-align: center;">'
             '<p style="margin: 0; font-weight: bold;">María García</p>'
             '<p style="margin: 5px 0 0; font-size: 14px; color: #64748b;">CEO, Empresa</p></td>'
             '<td width="50%" valign="top" style="text-align: center;">'
             '<p style="margin: 0; font-weight: bold;">Carlos López</p>'
             '<p style="margin: 5px 0 0; font-size: 14px; color: #64748b;">CTO, Startup</p></td>'
             "</tr></table>"
         )},
        {"id": "ev-spacer-5", "type": "spacer", "height": 20},
        {"id": "ev-social", "type": "social", "alignment": "center", "iconStyle": "color",
         "networks": [
             {"platform": "twitter", "url": "#"},
             {"platform": "linkedin", "url": "#"},
         ]},
        {"id": "ev-footer", "type": "footer", "includeUnsubscribe": True,
         "content": "© 2025 Tu Empresa. Todos los derechos reservados."},
    ],
}

TEMPLATES: List[TemplateDefinition] = [
    TemplateDefinition.model_validate(raw) for raw in (_NEWSLETTER, _ANNOUNCEMENT, _EVENT)
]


def list_templates() -> List[TemplateDefinition]:
    return list(TEMPLATES)


def get_template(template_id: str) -> Optional[TemplateDefinition]:
    return next((t for t in TEMPLATES if t.id == template_id), None)


def clone_template_blocks(blocks: list) -> list:
    """Deep copies of ``blocks`` with fresh ids."""
    return [block.model_copy(update={"id": generate_id()}, deep=True) for block in blocks]


def create_email(
    name: str,
    brand_kit_id: Optional[str] = None,
    template_id: Optional[str] = None,
    content_width: int = 600,
) -> EmailDocument:
    """
    Create a new email document, optionally seeded from a template.

    Args:
        name: Document name
        brand_kit_id: Brand kit the document is designed with
        template_id: Built-in template to copy blocks/subject/preheader from
        content_width: Content width in pixels

    Returns:
        New EmailDocument (empty when no template is given)

    Raises:
        KeyError: If ``template_id`` does not name a built-in template
    """
    doc = EmailDocument(
        id=generate_id(),
        name=name,
        brand_kit_id=brand_kit_id,
        template_id=template_id,
        content_width=content_width,
    )
    if template_id is None:
        return doc

    template = get_template(template_id)
    if template is None:
        raise KeyError(f"Unknown template: {template_id}")

    logger.info(f"Creating email '{name}' from template {template_id}")
    return doc.model_copy(update={
        "blocks": clone_template_blocks(template.blocks),
        "subject": template.default_subject or "",
        "preheader": template.default_preheader or "",
    })
