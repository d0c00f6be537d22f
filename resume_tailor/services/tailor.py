from __future__ import annotations
import json
import logging
import resume_tailor.config as cfg
from resume_tailor.models.schema import ResumeDocument
from resume_tailor.services.extraction import FORMAT_RULES
from resume_tailor.services.llm import generate_structured
from resume_tailor.services.normalize import carry_over_identity, coerce_resume_payload

logger = logging.getLogger(__name__)

CONTENT_RULES = (
    "You tailor resumes to a specific job. Rewrite the resume JSON you are given so it targets the job requirements.\n"
    "Strict content rules:\n"
    "1) SUMMARY: 2-3 sentences, approximately 40-50 words, focused on key expertise and the technical keywords of the job.\n"
    "2) EXPERIENCE: every job MUST have exactly 3-4 high-impact bullets.\n"
    "3) BULLET LENGTH: at most 18 words per bullet.\n"
    "4) ALL SECTIONS: you MUST include personalInfo, summary, experience, education, certifications and skills.\n"
    "5) PERSONAL INFO: do NOT change or swap the personalInfo fields.\n"
    "6) ONE PAGE: the whole resume must fit on a single A4 page. Be ruthless with word choice.\n"
    "7) Do not invent employers, degrees, certifications or metrics that are not in the resume.\n"
)

SYSTEM_PROMPT = CONTENT_RULES + FORMAT_RULES + "Return only valid JSON matching the schema."


def tailor_resume_draft(parsed: ResumeDocument, job_requirements: str) -> ResumeDocument:
    logger.info("tailor: start roles=%d requirements_chars=%d", len(parsed.experience), len(job_requirements))
    user = (
        f"Job Requirements:\n{job_requirements}\n\n"
        f"Resume JSON:\n{json.dumps(parsed.to_wire(), ensure_ascii=False)}"
    )
    data = generate_structured("tailor", SYSTEM_PROMPT, user, temperature=cfg.TAILOR_TEMPERATURE)
    draft = carry_over_identity(parsed, coerce_resume_payload("tailor", data))
    logger.info("tailor: done roles=%d summary_words=%d", len(draft.experience), len(draft.summary.split()))
    return draft
