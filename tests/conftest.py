"""Shared fixtures: a scripted stand-in for the OpenAI client and sample payloads."""

import copy
import json
from types import SimpleNamespace

import pytest

import resume_tailor.services.llm as llm


PARSED = {
    "personalInfo": {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "(555) 123-4567",
        "location": "Austin, TX",
    },
    "summary": "Backend engineer with eight years of Python experience.",
    "experience": [
        {
            "company": "Acme Corp",
            "position": "Senior Engineer",
            "startDate": "Jan 2021",
            "endDate": "",
            "location": "Austin, TX",
            "bullets": ["Built billing APIs", "Led migration to Postgres"],
        },
        {
            "company": "Globex",
            "position": "Engineer",
            "startDate": "Jun 2016",
            "endDate": "Dec 2020",
            "location": "Dallas, TX",
            "bullets": ["Maintained ETL jobs"],
        },
    ],
    "education": [
        {
            "institution": "UT Austin",
            "degree": "B.S. Computer Science",
            "startDate": "2012",
            "endDate": "2016",
            "location": "Austin, TX",
        }
    ],
    "certifications": [],
    "skills": ["Python", "PostgreSQL", "AWS"],
}

# 42 words
TAILORED_SUMMARY = (
    "Backend engineer with eight years building Python services, REST APIs and data pipelines on AWS. "
    "Led Postgres migrations and billing platforms serving millions of requests daily. "
    "Known for pragmatic design, strong testing habits and mentoring engineers across distributed, "
    "fast moving product teams."
)

TAILORED = {
    "personalInfo": dict(PARSED["personalInfo"]),
    "summary": TAILORED_SUMMARY,
    "experience": [
        {
            "company": "Acme Corp",
            "position": "Senior Engineer",
            "startDate": "Jan 2021",
            "endDate": "",
            "location": "Austin, TX",
            "bullets": [
                "Built billing APIs in FastAPI handling 2M daily requests",
                "Led zero-downtime migration from MySQL to Postgres",
                "Cut AWS spend 30% by rightsizing ECS services",
            ],
        },
        {
            "company": "Globex",
            "position": "Engineer",
            "startDate": "Jun 2016",
            "endDate": "Dec 2020",
            "location": "Dallas, TX",
            "bullets": [
                "Maintained nightly ETL jobs in Python and Airflow",
                "Automated data quality checks across 40 pipelines",
                "Introduced pytest suites raising coverage to 85%",
            ],
        },
    ],
    "education": copy.deepcopy(PARSED["education"]),
    "certifications": ["AWS Certified Developer"],
    "skills": ["Python", "FastAPI", "PostgreSQL", "AWS"],
}

REVIEWED = copy.deepcopy(TAILORED)
REVIEWED["experience"][0]["bullets"].append("Mentored four engineers on API design")


def chat_response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    """Replays scripted responses; dicts are sent as JSON text, exceptions are raised."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if not self.responses:
            raise AssertionError("unexpected extra call to the generation backend")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, dict):
            item = json.dumps(item)
        return chat_response(item)


class FakeOpenAI:
    def __init__(self, responses):
        self.chat = SimpleNamespace(completions=FakeCompletions(responses))


@pytest.fixture
def fake_llm(monkeypatch):
    """Install a FakeOpenAI client; returns a function taking the scripted responses."""

    def install(*responses):
        client = FakeOpenAI(responses)
        monkeypatch.setattr(llm, "get_openai_client", lambda: client)
        return client.chat.completions

    return install


@pytest.fixture
def payloads():
    return copy.deepcopy(PARSED), copy.deepcopy(TAILORED), copy.deepcopy(REVIEWED)


def build_pdf(text: str) -> bytes:
    """Minimal single-page PDF showing `text` in Helvetica."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1") if text else b""
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for i, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{i} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += f"{off:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture
def resume_pdf():
    return build_pdf("Jane Doe Senior Engineer Acme Corp")


@pytest.fixture
def pdf_builder():
    return build_pdf
