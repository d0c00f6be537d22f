"""
Session state machine driving extract -> parse -> tailor -> review.

A TailorSession holds the selected file, the pipeline status and a single
"current resume" slot that is replaced after every stage, so callers can show
intermediate results while the pipeline is still running.
"""

from __future__ import annotations
import logging
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from starlette.concurrency import run_in_threadpool

import resume_tailor.config as cfg
from resume_tailor.models.schema import PipelineStatus, ResumeDocument, SessionSnapshot
from resume_tailor.services.errors import InputValidationError, PipelineBusyError
from resume_tailor.services.extraction import parse_resume_structure
from resume_tailor.services.pdf_ingest import extract_text_from_pdf
from resume_tailor.services.review import review_and_self_correct
from resume_tailor.services.tailor import tailor_resume_draft

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"

INVALID_PDF_MESSAGE = "Please upload a valid PDF file."
MISSING_FILE_MESSAGE = "Please upload your resume PDF first."
FILE_TOO_LARGE_MESSAGE = f"Please upload a PDF smaller than {cfg.MAX_UPLOAD_MB} MB."
MISSING_REQUIREMENTS_MESSAGE = "Please paste the job requirements."
GENERIC_FAILURE_MESSAGE = "An error occurred during the tailoring process."


@dataclass(frozen=True)
class UploadedFile:
    name: str
    data: bytes

    @property
    def size_mb(self) -> float:
        return round(len(self.data) / 1024 / 1024, 2)


class TailorSession:
    """One browser's tailoring workflow."""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or uuid.uuid4().hex
        self.status = PipelineStatus.IDLE
        self.error_message = ""
        self.file: Optional[UploadedFile] = None
        self.resume_data: Optional[ResumeDocument] = None
        self.progress_callback: Optional[Callable[[PipelineStatus], None]] = None

    @property
    def busy(self) -> bool:
        return self.status.busy

    def set_progress_callback(self, callback: Callable[[PipelineStatus], None]) -> None:
        """Set a callback that receives every status transition."""
        self.progress_callback = callback

    def _set_status(self, status: PipelineStatus) -> None:
        self.status = status
        logger.info("pipeline: session=%s status=%s", self.session_id, status.value)
        if self.progress_callback:
            try:
                self.progress_callback(status)
            except Exception:
                logger.exception("pipeline: progress callback failed")

    def _reject(self, message: str) -> None:
        self.error_message = message
        raise InputValidationError(message)

    def select_file(self, name: str, content_type: str, data: bytes) -> None:
        if self.busy:
            raise PipelineBusyError()
        if (content_type or "").split(";")[0].strip().lower() != PDF_MIME_TYPE:
            logger.info("upload: rejected name=%s content_type=%s", name, content_type)
            self._reject(INVALID_PDF_MESSAGE)
        if len(data) > cfg.MAX_UPLOAD_BYTES:
            logger.info("upload: rejected name=%s bytes=%d", name, len(data))
            self._reject(FILE_TOO_LARGE_MESSAGE)
        self.file = UploadedFile(name=name, data=data)
        self.error_message = ""
        self.resume_data = None
        self.status = PipelineStatus.IDLE
        logger.info("upload: accepted name=%s bytes=%d", name, len(data))

    def begin(self, job_requirements: str) -> None:
        """Validate a trigger and move to `extracting`; status is unchanged on rejection."""
        if self.busy:
            raise PipelineBusyError()
        if self.file is None:
            self._reject(MISSING_FILE_MESSAGE)
        if not (job_requirements or "").strip():
            self._reject(MISSING_REQUIREMENTS_MESSAGE)
        self.error_message = ""
        self._set_status(PipelineStatus.EXTRACTING)

    async def run(self, job_requirements: str) -> Optional[ResumeDocument]:
        """Run all stages after begin(); returns the final resume or None on failure."""
        try:
            raw_text = await run_in_threadpool(extract_text_from_pdf, self.file.data)
            logger.info("ingest: extracted_chars=%d", len(raw_text))

            self._set_status(PipelineStatus.PARSING)
            parsed = await run_in_threadpool(parse_resume_structure, raw_text)
            self.resume_data = parsed

            self._set_status(PipelineStatus.DRAFTING)
            draft = await run_in_threadpool(tailor_resume_draft, parsed, job_requirements)
            self.resume_data = draft

            self._set_status(PipelineStatus.REVIEWING)
            final = await run_in_threadpool(review_and_self_correct, draft, job_requirements)
            self.resume_data = final

            self._set_status(PipelineStatus.SUCCESS)
            return final
        except Exception as e:
            logger.exception("pipeline_failed session=%s stage=%s", self.session_id, self.status.value)
            self.error_message = str(e) or GENERIC_FAILURE_MESSAGE
            self._set_status(PipelineStatus.ERROR)
            return None

    async def tailor(self, job_requirements: str) -> Optional[ResumeDocument]:
        self.begin(job_requirements)
        return await self.run(job_requirements)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            status=self.status,
            status_label=self.status.label,
            busy=self.busy,
            error_message=self.error_message,
            file_name=self.file.name if self.file else None,
            file_size_mb=self.file.size_mb if self.file else None,
            resume=self.resume_data,
        )


class SessionStore:
    """In-memory sessions; nothing outlives the process.

    Sessions untouched for `ttl_seconds` are dropped, and once `max_sessions`
    is reached the least recently used idle session makes room for a new one.
    A session with a pipeline in flight is never evicted.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = cfg.SESSION_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self.max_sessions = cfg.MAX_SESSIONS if max_sessions is None else max_sessions
        self._clock = clock
        self._sessions: "OrderedDict[str, TailorSession]" = OrderedDict()
        self._touched: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def _touch(self, session_id: str) -> None:
        self._touched[session_id] = self._clock()
        self._sessions.move_to_end(session_id)

    def _drop(self, session_id: str, reason: str) -> None:
        del self._sessions[session_id]
        del self._touched[session_id]
        logger.info("session: evicted id=%s reason=%s", session_id, reason)

    def evict(self) -> None:
        now = self._clock()
        for session_id, session in list(self._sessions.items()):
            if not session.busy and now - self._touched[session_id] > self.ttl_seconds:
                self._drop(session_id, "idle")
        while len(self._sessions) >= self.max_sessions:
            # Oldest first; busy sessions are skipped even if that leaves the store over the bound
            victim = next((sid for sid, s in self._sessions.items() if not s.busy), None)
            if victim is None:
                break
            self._drop(victim, "capacity")

    def create(self) -> TailorSession:
        self.evict()
        session = TailorSession()
        self._sessions[session.session_id] = session
        self._touch(session.session_id)
        return session

    def get(self, session_id: str) -> Optional[TailorSession]:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if not session.busy and self._clock() - self._touched[session_id] > self.ttl_seconds:
            self._drop(session_id, "idle")
            return None
        self._touch(session_id)
        return session
