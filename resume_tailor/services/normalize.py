from __future__ import annotations
from typing import Any, Dict, List
import logging
import re
from pydantic import ValidationError
from rapidfuzz import fuzz
from resume_tailor.models.schema import ResumeDocument
from resume_tailor.services.errors import ParseError

logger = logging.getLogger(__name__)

PRESENT_TERMS = {
	"present", "current", "currently", "now", "till now", "till date", "to date",
	"until now", "till present", "ongoing", "today",
}

_PERSONAL_FIELDS = ("name", "email", "phone", "location")
_EXPERIENCE_FIELDS = ("company", "position", "startDate", "endDate", "location")
_EDUCATION_FIELDS = ("institution", "degree", "startDate", "endDate", "location")

# Near-duplicate threshold for skills after punctuation is stripped
SKILL_DUP_RATIO = 95

SUMMARY_WORDS = (40, 50)
BULLETS_PER_JOB = (3, 4)
MAX_BULLET_WORDS = 18


def _text(value: Any) -> str:
	if value is None:
		return ""
	return str(value).strip()


def _text_list(value: Any) -> List[str]:
	if not isinstance(value, list):
		return []
	return [_text(v) for v in value if _text(v)]


def _records(value: Any, fields: tuple, lists: tuple = ()) -> List[Dict[str, Any]]:
	if not isinstance(value, list):
		return []
	out = []
	for item in value:
		if not isinstance(item, dict):
			continue
		rec = {k: _text(item.get(k)) for k in fields}
		for k in lists:
			rec[k] = _text_list(item.get(k))
		out.append(rec)
	return out


def _fill_defaults(data: Dict[str, Any]) -> Dict[str, Any]:
	# Every section present, nulls replaced by empty values
	personal = data.get("personalInfo")
	personal = personal if isinstance(personal, dict) else {}
	info = {k: _text(personal.get(k)) for k in _PERSONAL_FIELDS}
	for k in ("linkedin", "website"):
		if _text(personal.get(k)):
			info[k] = _text(personal.get(k))
	return {
		"personalInfo": info,
		"summary": _text(data.get("summary")),
		"experience": _records(data.get("experience"), _EXPERIENCE_FIELDS, lists=("bullets",)),
		"education": _records(data.get("education"), _EDUCATION_FIELDS),
		"certifications": _text_list(data.get("certifications")),
		"skills": _text_list(data.get("skills")),
	}


def normalize_end_date(s: str) -> str:
	s = (s or "").strip()
	if re.sub(r"[\.,]$", "", s.lower()) in PRESENT_TERMS:
		return ""
	return s


def normalize_phone(s: str) -> str:
	"""Reformat a plain 10-digit (or 1 + 10-digit) number as (NNN) NNN-NNNN."""
	s = (s or "").strip()
	digits = re.sub(r"\D", "", s)
	if len(digits) == 11 and digits.startswith("1"):
		digits = digits[1:]
	if len(digits) != 10 or re.search(r"[A-Za-z]", s):
		return s
	return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def _clean_bullet(b: str) -> str:
	return b.strip().lstrip("-•·*▪◦ ").strip()


def _skill_key(s: str) -> str:
	return re.sub(r"[^a-z0-9+#]", "", s.lower())


def dedupe_skills(skills: List[str]) -> List[str]:
	kept: List[str] = []
	keys: List[str] = []
	for s in skills:
		key = _skill_key(s)
		if not key:
			continue
		if any(key == k or fuzz.ratio(key, k) >= SKILL_DUP_RATIO for k in keys):
			continue
		keys.append(key)
		kept.append(s)
	return kept


def coerce_resume_payload(stage: str, data: Any) -> ResumeDocument:
	"""Validate a backend payload at the boundary and return a normalized ResumeDocument.

	Missing sections are filled with empty values so that all six sections are
	always present. Current-job end dates, phone format, bullet glyphs and
	duplicate skills are normalized deterministically.
	"""
	if not isinstance(data, dict):
		raise ParseError(f"{stage.capitalize()} failed: the AI service returned malformed JSON.")
	missing = [k for k in ("personalInfo", "summary", "experience", "education", "certifications", "skills") if k not in data]
	if missing:
		logger.warning("%s: backend omitted sections=%s; filling defaults", stage, ",".join(missing))
	filled = _fill_defaults(data)

	filled["personalInfo"]["phone"] = normalize_phone(filled["personalInfo"]["phone"])
	for role in filled["experience"]:
		role["endDate"] = normalize_end_date(role["endDate"])
		role["bullets"] = [_clean_bullet(b) for b in role["bullets"] if _clean_bullet(b)]
	for edu in filled["education"]:
		edu["endDate"] = normalize_end_date(edu["endDate"])
	filled["skills"] = dedupe_skills(filled["skills"])

	try:
		return ResumeDocument.model_validate(filled)
	except ValidationError as e:
		logger.exception("%s: validation_failed", stage)
		raise ParseError(f"{stage.capitalize()} failed: the AI service returned an invalid resume.") from e


def carry_over_identity(source: ResumeDocument, result: ResumeDocument) -> ResumeDocument:
	"""Return `result` with the whole personal info block copied from `source`."""
	if result.personal_info == source.personal_info:
		return result
	changed = sorted(
		field
		for field, value in source.personal_info.model_dump().items()
		if getattr(result.personal_info, field) != value
	)
	logger.warning("identity: backend altered personal info; restoring fields=%s", ",".join(changed))
	return result.model_copy(update={"personal_info": source.personal_info})


def _words(s: str) -> int:
	return len(s.split())


def audit_resume(resume: ResumeDocument) -> List[str]:
	"""List content-policy violations without changing anything."""
	issues: List[str] = []
	lo, hi = SUMMARY_WORDS
	n = _words(resume.summary)
	if not lo <= n <= hi:
		issues.append(f"summary has {n} words (expected {lo}-{hi})")
	blo, bhi = BULLETS_PER_JOB
	for role in resume.experience:
		if not blo <= len(role.bullets) <= bhi:
			issues.append(f"{role.company or 'job'} has {len(role.bullets)} bullets (expected {blo}-{bhi})")
		for b in role.bullets:
			if _words(b) > MAX_BULLET_WORDS:
				issues.append(f"{role.company or 'job'} bullet exceeds {MAX_BULLET_WORDS} words: {b[:40]}")
	return issues
