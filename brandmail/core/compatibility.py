"""
Email Compatibility Checker.

Evaluates an email document against email-client best practices:
- Preheader and subject line
- Header, CTA and footer presence
- Image alt text coverage
- Unsubscribe link
- Structural guarantees of the renderer (tables, inline CSS, fonts, width)

All checks always run and are returned in a fixed order.
"""

import logging
from typing import List

from ..models.schemas import (
    BrandKit,
    CheckStatus,
    CompatibilityCheck,
    EmailDocument,
)

logger = logging.getLogger(__name__)


class EmailCompatibilityChecker:
    """
    Runs the fixed battery of compatibility checks over an email document.

    Checks:
    - preheader, subject
    - header, cta (button), footer presence
    - image-alt (only when the document has images)
    - unsubscribe
    - table-layout, inline-styles, font-stack, width
    """

    def __init__(self, subject_max_length: int = 60):
        """
        Initialize the checker with thresholds.

        Args:
            subject_max_length: Subject length above which mobile clients truncate
        """
        self.subject_max_length = subject_max_length

    def check_preheader(self, doc: EmailDocument) -> CompatibilityCheck:
        if doc.preheader:
            return CompatibilityCheck(
                id="preheader",
                name="Preheader",
                status=CheckStatus.PASS,
                message=f"Preheader configurado ({len(doc.preheader)} caracteres)",
            )
        return CompatibilityCheck(
            id="preheader",
            name="Preheader",
            status=CheckStatus.WARNING,
            message="Sin preheader definido",
            suggestion="Agrega un preheader de 40-100 caracteres para mejor preview en inbox",
        )

    def check_subject(self, doc: EmailDocument) -> CompatibilityCheck:
        if not doc.subject:
            return CompatibilityCheck(
                id="subject",
                name="Asunto",
                status=CheckStatus.WARNING,
                message="Sin asunto definido",
            )

        too_long = len(doc.subject) > self.subject_max_length
        return CompatibilityCheck(
            id="subject",
            name="Asunto",
            status=CheckStatus.WARNING if too_long else CheckStatus.PASS,
            message=f'Asunto: "{doc.subject}" ({len(doc.subject)} caracteres)',
            suggestion=(
                f"El asunto tiene más de {self.subject_max_length} caracteres y puede truncarse en móvil"
                if too_long else None
            ),
        )

    def check_presence(
        self,
        doc: EmailDocument,
        block_type: str,
        check_id: str,
        name: str,
        present_message: str,
        missing_message: str,
        suggestion: str,
    ) -> CompatibilityCheck:
        """Pass if at least one block of ``block_type`` exists, else warn."""
        present = any(block.type == block_type for block in doc.blocks)
        return CompatibilityCheck(
            id=check_id,
            name=name,
            status=CheckStatus.PASS if present else CheckStatus.WARNING,
            message=present_message if present else missing_message,
            suggestion=None if present else suggestion,
        )

    def check_image_alt(self, doc: EmailDocument) -> List[CompatibilityCheck]:
        """Alt-text coverage; emitted only when the document has image blocks."""
        images = [block for block in doc.blocks if block.type == "image"]
        if not images:
            return []

        with_alt = sum(1 for block in images if block.alt)
        complete = with_alt == len(images)
        return [CompatibilityCheck(
            id="image-alt",
            name="Alt en imágenes",
            status=CheckStatus.PASS if complete else CheckStatus.WARNING,
            message=f"{with_alt}/{len(images)} imágenes tienen alt text",
            suggestion=None if complete else "Agrega alt text descriptivo a todas las imágenes",
        )]

    def check_unsubscribe(self, doc: EmailDocument) -> CompatibilityCheck:
        footer = next((block for block in doc.blocks if block.type == "footer"), None)
        has_unsubscribe = footer is not None and footer.include_unsubscribe
        return CompatibilityCheck(
            id="unsubscribe",
            name="Link de baja",
            status=CheckStatus.PASS if has_unsubscribe else CheckStatus.WARNING,
            message="Link de baja incluido" if has_unsubscribe else "Sin link de baja explícito",
            suggestion=(
                None if has_unsubscribe
                else "Los emails comerciales requieren un enlace de unsubscribe visible"
            ),
        )

    def structural_checks(self, brand_kit: BrandKit) -> List[CompatibilityCheck]:
        """Properties the renderer guarantees for every document."""
        primary_font = brand_kit.typography.font_stack.split(",")[0]
        return [
            CompatibilityCheck(
                id="table-layout",
                name="Layout con tablas",
                status=CheckStatus.PASS,
                message="HTML generado usa tablas para compatibilidad",
            ),
            CompatibilityCheck(
                id="inline-styles",
                name="Estilos inline",
                status=CheckStatus.PASS,
                message="CSS inline aplicado automáticamente",
            ),
            CompatibilityCheck(
                id="font-stack",
                name="Tipografía",
                status=CheckStatus.PASS,
                message=f"Font stack: {primary_font}",
                suggestion="Usando fuentes web-safe con fallbacks",
            ),
            # Reports the default policy, not doc.content_width
            CompatibilityCheck(
                id="width",
                name="Ancho de email",
                status=CheckStatus.PASS,
                message="Ancho fijo 600px con responsive",
            ),
        ]

    def check(self, doc: EmailDocument, brand_kit: BrandKit) -> List[CompatibilityCheck]:
        """
        Run every check against a document.

        Args:
            doc: Email document to evaluate
            brand_kit: Brand kit applied to the document

        Returns:
            Ordered list of CompatibilityCheck results
        """
        checks = [
            self.check_preheader(doc),
            self.check_subject(doc),
            self.check_presence(
                doc, "header", "header", "Encabezado",
                "Email tiene encabezado", "Sin encabezado/logo",
                "Considera agregar un header con logo para reforzar la marca",
            ),
            self.check_presence(
                doc, "button", "cta", "Call to Action",
                "CTA button presente", "Sin botón CTA",
                "Un botón CTA claro mejora la tasa de conversión",
            ),
        ]
        checks.extend(self.check_image_alt(doc))
        checks.append(self.check_presence(
            doc, "footer", "footer", "Footer",
            "Footer presente", "Sin footer",
            "Agrega un footer con información de contacto y unsubscribe",
        ))
        checks.append(self.check_unsubscribe(doc))
        checks.extend(self.structural_checks(brand_kit))

        warnings = sum(1 for c in checks if c.status != CheckStatus.PASS)
        logger.debug(f"Compatibility check for {doc.id}: {len(checks)} checks, {warnings} warnings")
        return checks


def check_compatibility(doc: EmailDocument, brand_kit: BrandKit) -> List[CompatibilityCheck]:
    """Run the compatibility checks with default thresholds."""
    return EmailCompatibilityChecker().check(doc, brand_kit)
