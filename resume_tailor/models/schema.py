from __future__ import annotations
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
	# camelCase on the wire (LLM + browser), snake_case in Python; instances are never mutated
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

	def to_wire(self) -> dict:
		return self.model_dump(by_alias=True, exclude_none=True)


class PersonalInfo(_WireModel):
	name: str = ""
	email: str = ""
	phone: str = ""
	# City/state only
	location: str = ""
	linkedin: Optional[str] = None
	website: Optional[str] = None


class ExperienceItem(_WireModel):
	company: str = ""
	position: str = ""
	start_date: str = ""
	# Empty when the position is current
	end_date: str = ""
	location: str = ""
	bullets: List[str] = Field(default_factory=list)


class EducationItem(_WireModel):
	institution: str = ""
	degree: str = ""
	start_date: str = ""
	end_date: str = ""
	location: str = ""


class ResumeDocument(_WireModel):
	personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
	summary: str = ""
	experience: List[ExperienceItem] = Field(default_factory=list)
	education: List[EducationItem] = Field(default_factory=list)
	certifications: List[str] = Field(default_factory=list)
	skills: List[str] = Field(default_factory=list)


class PipelineStatus(str, Enum):
	IDLE = "idle"
	EXTRACTING = "extracting"
	PARSING = "parsing"
	DRAFTING = "drafting"
	REVIEWING = "reviewing"
	SUCCESS = "success"
	ERROR = "error"

	@property
	def busy(self) -> bool:
		return self in BUSY_STATUSES

	@property
	def label(self) -> str:
		return STATUS_LABELS.get(self, "Tailor My Resume")


BUSY_STATUSES = frozenset({
	PipelineStatus.EXTRACTING,
	PipelineStatus.PARSING,
	PipelineStatus.DRAFTING,
	PipelineStatus.REVIEWING,
})

STATUS_LABELS = {
	PipelineStatus.EXTRACTING: "Reading PDF...",
	PipelineStatus.PARSING: "Analyzing Structure...",
	PipelineStatus.DRAFTING: "Drafting Tailored Content...",
	PipelineStatus.REVIEWING: "Verifying Alignment...",
	PipelineStatus.SUCCESS: "Ready!",
}


class SessionSnapshot(_WireModel):
	session_id: str
	status: PipelineStatus
	status_label: str
	busy: bool
	error_message: str = ""
	file_name: Optional[str] = None
	file_size_mb: Optional[float] = None
	resume: Optional[ResumeDocument] = None
