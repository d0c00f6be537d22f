# JSON Schema handed to the generation backend by all three stages.
# Keys mirror ResumeDocument's wire aliases.

_STRING = {"type": "string"}
_STRING_LIST = {"type": "array", "items": _STRING}

SECTION_KEYS = ("personalInfo", "summary", "experience", "education", "certifications", "skills")

RESUME_JSON_SCHEMA = {
	"type": "object",
	"properties": {
		"personalInfo": {
			"type": "object",
			"properties": {
				"name": _STRING,
				"email": _STRING,
				"phone": _STRING,
				"location": _STRING,
				"linkedin": _STRING,
				"website": _STRING,
			},
			"required": ["name", "email", "phone", "location"],
		},
		"summary": _STRING,
		"experience": {
			"type": "array",
			"items": {
				"type": "object",
				"properties": {
					"company": _STRING,
					"position": _STRING,
					"startDate": _STRING,
					"endDate": _STRING,
					"location": _STRING,
					"bullets": _STRING_LIST,
				},
				"required": ["company", "position", "startDate", "endDate", "bullets"],
			},
		},
		"education": {
			"type": "array",
			"items": {
				"type": "object",
				"properties": {
					"institution": _STRING,
					"degree": _STRING,
					"startDate": _STRING,
					"endDate": _STRING,
					"location": _STRING,
				},
				"required": ["institution", "degree", "startDate", "endDate"],
			},
		},
		"certifications": _STRING_LIST,
		"skills": _STRING_LIST,
	},
	"required": list(SECTION_KEYS),
}


def response_format(name: str = "resume_document") -> dict:
	"""OpenAI `response_format` payload describing the resume schema.

	Not sent in strict mode: strict schemas must list every property as
	required, which would force `linkedin`, `website` and per-entry `location`
	onto every resume. The backend treats the schema as guidance, so every
	payload still goes through `normalize.coerce_resume_payload`.
	"""
	return {
		"type": "json_schema",
		"json_schema": {"name": name, "schema": RESUME_JSON_SCHEMA},
	}
