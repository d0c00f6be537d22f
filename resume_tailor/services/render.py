from __future__ import annotations
from jinja2 import Environment, FileSystemLoader, select_autoescape
from resume_tailor.config import VIEWS_DIR
from resume_tailor.models.schema import ResumeDocument
from resume_tailor.services.styles import load_theme

RESUME_TEMPLATE = "resume.html.j2"
RESUME_STYLESHEET = "resume.css.j2"


def _env() -> Environment:
	return Environment(
		loader=FileSystemLoader(str(VIEWS_DIR)),
		autoescape=select_autoescape(["html", "xml", "html.j2"]),
		trim_blocks=True,
		lstrip_blocks=True,
	)


def render_resume_css(theme: dict | None = None) -> str:
	return _env().get_template(RESUME_STYLESHEET).render(theme=theme or load_theme())


def render_resume_html(resume: ResumeDocument, *, for_export: bool = False, css: str | None = None) -> str:
	"""Render the fixed A4 layout for a resume.

	Section order is header, Summary, Work Experience, Education,
	Certifications (only when present) and Skills. `css` replaces the themed
	stylesheet, which is how export injects its sanitized copy; `for_export`
	marks the body so the page drops its preview centring.
	"""
	stylesheet = css if css is not None else render_resume_css()
	return _env().get_template(RESUME_TEMPLATE).render(
		resume=resume,
		info=resume.personal_info,
		stylesheet=stylesheet,
		for_export=for_export,
	)
