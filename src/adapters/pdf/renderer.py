"""
Registration pass renderer - Implements PassRenderer protocol.

PDF generation is an infrastructure detail (Jinja2 + WeasyPrint); the
domain only hands over PassFields and gets bytes back. Photo and signature
are data URIs and are embedded directly as <img> sources.
"""

import logging

from jinja2 import TemplateError

from src.adapters.templating import get_environment
from src.domain.exceptions import PassRenderingError
from src.domain.models import PassFields

logger = logging.getLogger(__name__)

PASS_TEMPLATE = "pass.html"


def render_pass_html(fields: PassFields) -> str:
    """Render the self-contained HTML for a registration pass."""
    template = get_environment().get_template(PASS_TEMPLATE)
    return template.render(
        name=fields.name,
        phone=fields.phone,
        category=fields.category,
        photo=fields.photo,
        signature=fields.signature,
    )


class WeasyPrintPassRenderer:
    """
    Renders the one-page A4 pass as PDF bytes.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Synchronous: WeasyPrint is local CPU work.
    """

    def render(self, fields: PassFields) -> bytes:
        """
        Produce the pass PDF.

        Raises:
            PassRenderingError: If the template or the PDF conversion failed
        """
        try:
            html = render_pass_html(fields)
        except TemplateError as e:
            raise PassRenderingError("Pass template failed") from e

        try:
            # WeasyPrint loads pango/cairo on import; keep that off the app import path.
            from weasyprint import HTML

            document = HTML(string=html).write_pdf()
        except Exception as e:
            raise PassRenderingError("PDF conversion failed") from e

        logger.info("Pass rendered: %d bytes", len(document))
        return document
