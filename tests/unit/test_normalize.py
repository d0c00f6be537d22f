"""Unit tests for boundary validation and normalization of backend payloads."""

import pytest

from resume_tailor.services.errors import ParseError
from resume_tailor.services.normalize import (
    audit_resume,
    carry_over_identity,
    coerce_resume_payload,
    dedupe_skills,
    normalize_end_date,
    normalize_phone,
)


@pytest.mark.unit
def test_missing_sections_are_filled():
    resume = coerce_resume_payload("parse", {"personalInfo": {"name": "Jane Doe"}})

    wire = resume.to_wire()
    assert set(wire) == {"personalInfo", "summary", "experience", "education", "certifications", "skills"}
    assert wire["experience"] == []
    assert wire["summary"] == ""
    assert resume.personal_info.email == ""


@pytest.mark.unit
def test_nulls_become_empty_values():
    resume = coerce_resume_payload("parse", {
        "personalInfo": None,
        "summary": None,
        "experience": [{"company": "Acme", "position": None, "bullets": None}],
        "skills": ["Python", None, ""],
    })

    assert resume.experience[0].position == ""
    assert resume.experience[0].bullets == []
    assert resume.skills == ["Python"]


@pytest.mark.unit
def test_non_object_payload_raises_parse_error():
    with pytest.raises(ParseError):
        coerce_resume_payload("parse", ["not", "an", "object"])


@pytest.mark.unit
@pytest.mark.parametrize("value", ["Present", "present", "Current", "Now.", " ongoing "])
def test_current_end_dates_become_empty(value):
    assert normalize_end_date(value) == ""


@pytest.mark.unit
def test_real_end_date_is_kept():
    assert normalize_end_date("Dec 2020") == "Dec 2020"


@pytest.mark.unit
def test_present_never_survives_coercion(payloads):
    parsed, _, _ = payloads
    parsed["experience"][0]["endDate"] = "Present"

    resume = coerce_resume_payload("parse", parsed)

    assert resume.experience[0].end_date == ""
    assert resume.experience[1].end_date == "Dec 2020"


@pytest.mark.unit
@pytest.mark.parametrize("raw, expected", [
    ("555-123-4567", "(555) 123-4567"),
    ("555.123.4567", "(555) 123-4567"),
    ("+1 555 123 4567", "(555) 123-4567"),
    ("(555) 123-4567", "(555) 123-4567"),
])
def test_phone_is_reformatted(raw, expected):
    assert normalize_phone(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["+44 20 7946 0958", "555-1234", "555-123-4567 ext 9", ""])
def test_unrecognized_phone_is_left_alone(raw):
    assert normalize_phone(raw) == raw.strip()


@pytest.mark.unit
def test_bullet_glyphs_are_stripped():
    resume = coerce_resume_payload("parse", {
        "experience": [{"company": "Acme", "bullets": ["• Built APIs", "- Led team", "   ", "Shipped v2"]}],
    })

    assert resume.experience[0].bullets == ["Built APIs", "Led team", "Shipped v2"]


@pytest.mark.unit
def test_skills_dedupe_keeps_first_spelling():
    assert dedupe_skills(["Node.js", "Python", "NodeJS", "python", "Java", "JavaScript"]) == [
        "Node.js", "Python", "Java", "JavaScript",
    ]


@pytest.mark.unit
def test_carry_over_identity_restores_all_personal_info(payloads):
    parsed, tailored, _ = payloads
    parsed["personalInfo"]["linkedin"] = "linkedin.com/in/janedoe"
    source = coerce_resume_payload("parse", parsed)
    tailored["personalInfo"].update(
        name="J. Doe",
        email="j.doe@example.org",
        phone="Austin, TX",
        location="(555) 123-4567",
        website="janedoe.dev",
    )
    result = coerce_resume_payload("tailor", tailored)

    fixed = carry_over_identity(source, result)

    assert fixed.personal_info == source.personal_info
    assert fixed.personal_info.phone == "(555) 123-4567"
    assert fixed.personal_info.location == "Austin, TX"
    assert fixed.personal_info.linkedin == "linkedin.com/in/janedoe"
    assert fixed.personal_info.website is None
    assert fixed.summary == result.summary
    assert result.personal_info.name == "J. Doe"


@pytest.mark.unit
def test_carry_over_identity_returns_untouched_result(payloads):
    parsed, tailored, _ = payloads
    source = coerce_resume_payload("parse", parsed)
    result = coerce_resume_payload("tailor", tailored)

    assert carry_over_identity(source, result) is result


@pytest.mark.unit
def test_audit_reports_policy_violations(payloads):
    parsed, _, _ = payloads
    resume = coerce_resume_payload("parse", parsed)

    issues = audit_resume(resume)

    assert any(i.startswith("summary has 8 words") for i in issues)
    assert "Acme Corp has 2 bullets (expected 3-4)" in issues
    assert "Globex has 1 bullets (expected 3-4)" in issues


@pytest.mark.unit
def test_audit_passes_compliant_resume(payloads):
    _, tailored, _ = payloads
    assert audit_resume(coerce_resume_payload("review", tailored)) == []
