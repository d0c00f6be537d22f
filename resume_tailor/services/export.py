"""
Single-page A4 PDF export of a rendered resume (WeasyPrint).
"""

from __future__ import annotations
import logging
import re

from resume_tailor.models.schema import ResumeDocument
from resume_tailor.services.errors import ExportError
from resume_tailor.services.render import render_resume_css, render_resume_html

logger = logging.getLogger(__name__)

# Colour functions WeasyPrint's CSS parser rejects
UNSUPPORTED_CSS_FUNCTIONS = ("oklch", "oklab", "lch", "lab", "color-mix")

# Preview-only decoration that must not reach the page
PREVIEW_ONLY_PROPERTIES = ("box-shadow",)

PAGE_RULE = "@page { size: A4; margin: 0; }\n"

_DECLARATION_RE = re.compile(r"(?P<prop>[-a-zA-Z]+)\s*:\s*(?P<value>[^;{}]*)(?:;|(?=\}))")
_FUNCTION_RE = re.compile(r"(?<![-\w])(?:%s)\s*\(" % "|".join(re.escape(f) for f in UNSUPPORTED_CSS_FUNCTIONS), re.I)


def strip_unsupported_css(css: str) -> str:
    """Drop declarations the rasterizer cannot parse plus preview-only decoration."""

    def _keep(m: re.Match) -> str:
        prop = m.group("prop").lower()
        if prop in PREVIEW_ONLY_PROPERTIES or _FUNCTION_RE.search(m.group("value")):
            return ""
        return m.group(0)

    return _DECLARATION_RE.sub(_keep, css)


def _write_single_page_pdf(html: str) -> bytes:
    # Imported lazily: WeasyPrint needs Pango at import time
    from weasyprint import HTML

    document = HTML(string=html).render()
    if len(document.pages) > 1:
        logger.warning("export: layout overflowed to %d pages; keeping the first", len(document.pages))
    return document.copy(document.pages[:1]).write_pdf()


def export_resume_pdf(resume: ResumeDocument) -> bytes:
    css = strip_unsupported_css(render_resume_css()) + PAGE_RULE
    html = render_resume_html(resume, for_export=True, css=css)
    try:
        pdf = _write_single_page_pdf(html)
    except Exception as e:
        logger.exception("export_failed")
        raise ExportError() from e
    logger.info("export: done bytes=%d", len(pdf))
    return pdf
