import json
import logging
from pathlib import Path
from resume_tailor.config import THEME_PATH

logger = logging.getLogger(__name__)

DEFAULT_THEME = {
	"accent": "#1a3a5a",
	"header_text": "#ffffff",
	"body_text": "#111827",
	"background": "#ffffff",
	"heading_font": "Georgia, serif",
	"contact_font": "Inter, system-ui, sans-serif",
	"section_title_size": "1.25rem",
	"body_size": "10pt",
	"bullet_size": "9.5pt",
}


def load_theme(path: Path = THEME_PATH) -> dict:
	theme = DEFAULT_THEME.copy()
	if path.exists():
		try:
			user_theme = json.loads(path.read_text())
			if isinstance(user_theme, dict):
				theme.update({k: str(v) for k, v in user_theme.items() if k in DEFAULT_THEME})
		except (OSError, ValueError):
			logger.warning("styles: ignoring unreadable theme at %s", path)
	return theme
