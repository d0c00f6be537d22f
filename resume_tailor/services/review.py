from __future__ import annotations
import json
import logging
import resume_tailor.config as cfg
from resume_tailor.models.schema import ResumeDocument
from resume_tailor.services.extraction import FORMAT_RULES
from resume_tailor.services.llm import generate_structured
from resume_tailor.services.normalize import audit_resume, carry_over_identity, coerce_resume_payload

logger = logging.getLogger(__name__)

CHECKLIST = (
    "You critically review a tailored resume and correct it. Strict checklist:\n"
    "1) Are ALL sections present (personalInfo, summary, experience, education, certifications, skills)?\n"
    "2) Is the SUMMARY between 40 and 50 words?\n"
    "3) Does every job have EXACTLY 3-4 bullets?\n"
    "4) Is every bullet under 18 words?\n"
    "5) DATA INTEGRITY: are the personalInfo fields correct, with phone and location not swapped?\n"
    "6) CURRENT JOBS: do current jobs have an empty string \"\" as 'endDate'?\n"
    "7) Is the content tailored to the job requirements?\n"
    "8) ONE PAGE FIT: the resume MUST fit on one A4 page. If it looks too long, cut words and bullets. Keep at most the 3 most relevant jobs if necessary.\n"
    "Rewrite the JSON so it complies with every rule. Do not omit sections.\n"
)

SYSTEM_PROMPT = CHECKLIST + FORMAT_RULES + "Return only valid JSON matching the schema."


def review_and_self_correct(draft: ResumeDocument, job_requirements: str) -> ResumeDocument:
    """Single self-audit pass over the tailored draft.

    This is the terminal stage: its output is what gets rendered and exported.
    Remaining policy violations are logged, not retried.
    """
    logger.info("review: start roles=%d", len(draft.experience))
    user = (
        f"Job Requirements:\n{job_requirements}\n\n"
        f"Draft Tailored Resume JSON:\n{json.dumps(draft.to_wire(), ensure_ascii=False)}"
    )
    data = generate_structured("review", SYSTEM_PROMPT, user, temperature=cfg.REVIEW_TEMPERATURE)
    final = carry_over_identity(draft, coerce_resume_payload("review", data))
    issues = audit_resume(final)
    for issue in issues:
        logger.warning("review: residual issue: %s", issue)
    logger.info("review: done roles=%d issues=%d", len(final.experience), len(issues))
    return final
