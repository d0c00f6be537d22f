import logging
import os
from typing import Dict
from fastapi import APIRouter, BackgroundTasks, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, Response
from starlette.concurrency import run_in_threadpool

import resume_tailor.config as cfg
from resume_tailor.config import APP_VERSION, EXPORT_FILENAME, save_api_key
from resume_tailor.models.schema import PipelineStatus
from resume_tailor.services.errors import ExportError
from resume_tailor.services.export import export_resume_pdf
from resume_tailor.services.llm import reset_openai_client
from resume_tailor.services.pipeline import SessionStore, TailorSession
from resume_tailor.services.render import render_resume_html

logger = logging.getLogger(__name__)

router = APIRouter()

sessions = SessionStore()


def _snapshot(session: TailorSession, status_code: int = 200) -> JSONResponse:
	return JSONResponse(session.snapshot().model_dump(by_alias=True, mode="json"), status_code=status_code)


def _get_session(session_id: str) -> TailorSession:
	session = sessions.get(session_id)
	if session is None:
		raise HTTPException(status_code=404, detail="Session not found")
	return session


@router.get("/health")
async def health():
	return {"status": "ok", "version": APP_VERSION}


@router.get("/openai_key/status")
async def openai_key_status() -> Dict[str, bool]:
	return {"present": bool(cfg.OPENAI_API_KEY)}


@router.post("/openai_key")
async def set_openai_key(payload: Dict[str, str]):
	key = (payload or {}).get("api_key", "").strip()
	if not key:
		raise HTTPException(status_code=400, detail="api_key is required")
	try:
		# Keep env var for the current process; persist in per-user config
		os.environ[cfg.API_KEY_SETTING] = key
		save_api_key(key)
		cfg.OPENAI_API_KEY = key
		reset_openai_client()
		logger.info("openai_key: updated and client reset")
		return {"ok": True}
	except Exception as e:
		logger.exception("openai_key_update_failed")
		raise HTTPException(status_code=500, detail=f"Failed to set key: {e}")


@router.post("/sessions")
async def create_session():
	session = sessions.create()
	logger.info("session: created id=%s", session.session_id)
	return _snapshot(session, status_code=201)


@router.get("/sessions/{session_id}")
async def get_session(session_id: str):
	return _snapshot(_get_session(session_id))


@router.post("/sessions/{session_id}/file")
async def upload_file(session_id: str, file: UploadFile = File(...)):
	session = _get_session(session_id)
	# One byte past the cap is enough to reject an oversized file
	content = await file.read(cfg.MAX_UPLOAD_BYTES + 1)
	session.select_file(file.filename or "resume.pdf", file.content_type or "", content)
	return _snapshot(session)


@router.post("/sessions/{session_id}/tailor")
async def tailor(session_id: str, background_tasks: BackgroundTasks, job_requirements: str = Form("")):
	session = _get_session(session_id)
	# Validation errors surface here, before any background work is scheduled
	session.begin(job_requirements)
	background_tasks.add_task(session.run, job_requirements)
	return _snapshot(session, status_code=202)


@router.get("/sessions/{session_id}/preview", response_class=HTMLResponse)
async def preview(session_id: str):
	session = _get_session(session_id)
	if session.resume_data is None:
		raise HTTPException(status_code=404, detail="No resume to preview yet")
	return HTMLResponse(render_resume_html(session.resume_data))


@router.get("/sessions/{session_id}/download")
async def download(session_id: str):
	session = _get_session(session_id)
	if session.status != PipelineStatus.SUCCESS or session.resume_data is None:
		raise HTTPException(status_code=409, detail="The resume is not ready for download yet")
	try:
		pdf = await run_in_threadpool(export_resume_pdf, session.resume_data)
	except ExportError as e:
		session.error_message = e.message
		raise
	return Response(
		content=pdf,
		media_type="application/pdf",
		headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
	)
