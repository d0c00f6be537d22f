import logging
import resume_tailor.config as cfg
from resume_tailor.models.schema import ResumeDocument
from resume_tailor.services.llm import generate_structured
from resume_tailor.services.normalize import coerce_resume_payload

logger = logging.getLogger(__name__)

FORMAT_RULES = (
    "Formatting rules for 'personalInfo':\n"
    "1) 'phone' MUST be formatted exactly as (555) 123-4567.\n"
    "2) 'location' MUST contain only the city/state (e.g. 'Austin, TX' or 'FL'). Never put the phone, email or anything else in it, and never swap phone and location.\n"
    "Rules for current jobs:\n"
    "1) If a job is current, its 'endDate' MUST be an empty string \"\". Never write 'Present', 'Current' or similar.\n"
)

SYSTEM_PROMPT = (
    "You are an expert resume parser. Extract the entire resume into a single JSON object strictly matching the provided schema.\n"
    "Rules for sections:\n"
    "1) You MUST return ALL sections: personalInfo, summary, experience, education, certifications and skills. Never omit a section; use an empty string or empty list when nothing is found.\n"
    "2) Only use these sections: Summary, Experience, Education, Certifications and Skills. Fold anything else into the closest of them or drop it.\n"
    "3) Keep jobs and schools in the order they appear in the resume.\n"
    "Rules for 'experience':\n"
    "1) Ensure every work experience entry has exactly 3-4 bullet points in 'bullets'. Combine or split the original bullets as needed, keeping their facts.\n"
    "2) Keep dates as written in the resume (e.g. 'Jan 2021').\n"
    "Rules for 'skills':\n"
    "1) Return a single flat list of strings. Do not categorize.\n"
    + FORMAT_RULES
    + "Return only valid JSON."
)


def parse_resume_structure(raw_text: str) -> ResumeDocument:
	logger.info("parse: start chars=%d", len(raw_text or ""))
	data = generate_structured(
		"parse",
		SYSTEM_PROMPT,
		f"Here is the full resume text:\n\n{raw_text}",
		temperature=cfg.PARSE_TEMPERATURE,
	)
	resume = coerce_resume_payload("parse", data)
	logger.info("parse: done roles=%d schools=%d skills=%d", len(resume.experience), len(resume.education), len(resume.skills))
	return resume
