import logging
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

import resume_tailor.config as cfg
from resume_tailor.routers.tailor import router as tailor_router
from resume_tailor.services.errors import (
	ExportError,
	InputValidationError,
	PipelineBusyError,
	TailorError,
)

# Configure logging
logging.basicConfig(
	level=logging.INFO,
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Resume Tailor", version=cfg.APP_VERSION)

templates = Jinja2Templates(directory=str(cfg.VIEWS_DIR))

# Errors raised by session operations inside request handlers
ERROR_STATUS = {
	InputValidationError: 400,
	PipelineBusyError: 409,
	ExportError: 500,
}

@app.exception_handler(TailorError)
async def tailor_error_handler(request: Request, exc: TailorError):
	status_code = next((code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)), 500)
	logger.info("request_rejected path=%s status=%d reason=%s", request.url.path, status_code, exc.message)
	return JSONResponse({"detail": exc.message}, status_code=status_code)

@app.on_event("startup")
async def on_startup():
	logger.info("startup: version=%s model=%s", cfg.APP_VERSION, cfg.MODEL)
	logger.info("startup: openai_key_present=%s config_dir=%s", bool(cfg.OPENAI_API_KEY), cfg.USER_CONFIG_DIR)

@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
	if not cfg.OPENAI_API_KEY:
		return RedirectResponse(url="/setup", status_code=302)
	return templates.TemplateResponse(request, "index.html", {"version": cfg.APP_VERSION})

@app.get("/setup", response_class=HTMLResponse)
async def setup(request: Request):
	return templates.TemplateResponse(
		request,
		"setup.html",
		{"version": cfg.APP_VERSION, "key_present": bool(cfg.OPENAI_API_KEY)},
	)

app.include_router(tailor_router, prefix="/api")
