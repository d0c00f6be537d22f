import os
import sys
import json
from pathlib import Path
from dotenv import load_dotenv
from appdirs import user_config_dir

# Constants
APP_NAME = "Resume Tailor"

# Project root (source dev mode). In bundled (PyInstaller) mode, resources are under sys._MEIPASS.
def _source_project_root() -> Path:
	return Path(__file__).resolve().parent.parent

def resource_path(relative_path: str) -> Path:
	"""Return a Path to a bundled resource (PyInstaller) or source path (dev)."""
	base = getattr(sys, "_MEIPASS", None)
	if base:
		return Path(base) / relative_path
	return _source_project_root() / relative_path

# Load .env in dev mode (from repository root) for convenience
_DEV_ENV = _source_project_root() / ".env"
if _DEV_ENV.exists():
	load_dotenv(_DEV_ENV)

# Per-user writable location for the saved API key and theme overrides
USER_CONFIG_DIR = Path(user_config_dir(APP_NAME))
USER_CONFIG_DIR.mkdir(parents=True, exist_ok=True)

CONFIG_PATH = USER_CONFIG_DIR / "config.json"
THEME_PATH = USER_CONFIG_DIR / "theme.json"

API_KEY_SETTING = "RESUME_TAILOR_OPENAI_API_KEY"

def _read_config_file() -> dict:
	try:
		if CONFIG_PATH.exists():
			return json.loads(CONFIG_PATH.read_text() or "{}")
	except (OSError, ValueError):
		print(f"[warn] unreadable config at {CONFIG_PATH}; ignoring")
	return {}

def _write_config_file(cfg: dict) -> None:
	try:
		CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
		CONFIG_PATH.write_text(json.dumps(cfg, indent=2))
	except OSError:
		print("[warn] failed to write config.json")

def get_saved_api_key() -> str:
	cfg = _read_config_file()
	return (cfg.get(API_KEY_SETTING) or "").strip()

def save_api_key(key: str) -> None:
	cfg = _read_config_file()
	cfg[API_KEY_SETTING] = key.strip()
	_write_config_file(cfg)

def _env_float(name: str, default: float) -> float:
	raw = os.getenv(name)
	if not raw:
		return default
	try:
		return float(raw)
	except ValueError:
		print(f"[warn] {name}={raw!r} is not a number; using {default}")
		return default

# Resolve OpenAI key precedence: env var overrides saved config
OPENAI_API_KEY = os.getenv(API_KEY_SETTING) or get_saved_api_key()
if not OPENAI_API_KEY:
	print(f"[warn] {API_KEY_SETTING} is not set; tailoring will fail until provided")

# Generation backend
MODEL = os.getenv("RESUME_TAILOR_MODEL", "gpt-4o-mini")
REQUEST_TIMEOUT_SECONDS = _env_float("RESUME_TAILOR_TIMEOUT", 120.0)
MAX_RETRIES = int(_env_float("RESUME_TAILOR_MAX_RETRIES", 2))

# Low temperatures keep structure stable; tailoring gets a little more room to rewrite
PARSE_TEMPERATURE = 0.1
TAILOR_TEMPERATURE = 0.3
REVIEW_TEMPERATURE = 0.2

# In-memory sessions: idle ones expire; past MAX_SESSIONS the least recently used go first
SESSION_TTL_SECONDS = _env_float("RESUME_TAILOR_SESSION_TTL", 2 * 60 * 60)
MAX_SESSIONS = int(_env_float("RESUME_TAILOR_MAX_SESSIONS", 32))
MAX_UPLOAD_MB = 10
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024

# Resource directories (bundled-safe)
VIEWS_DIR = resource_path("resume_tailor/views")

# Export artifact
EXPORT_FILENAME = "Tailored_Resume.pdf"

# Increment per release
APP_VERSION = "0.1.0"
