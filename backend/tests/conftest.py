"""Shared test configuration, fixtures and pytest markers."""

import copy
import json

import pytest

from services import gemini_client

SAMPLE_ANALYSIS = {
    "matchScore": 72,
    "matchScoreReason": "Strong React background, slightly short on leadership experience.",
    "optimizedResume": "JOHN DOE\nSenior React Developer\n\nSUMMARY\nFive years building React apps.",
    "keyChanges": ["Added a summary section", "Moved React keywords to the top"],
    "skillGaps": [
        {"skill": "TypeScript", "importance": "high", "suggestion": "Ship a side project in TypeScript"},
    ],
    "atsFlags": [
        {"issue": "Two-column layout", "severity": "medium", "fix": "Use a single column"},
    ],
    "coverLetter": "Dear Hiring Manager,\n\nI am excited to apply...",
    "topKeywords": ["React", "JavaScript"],
    "missingKeywords": ["TypeScript", "Redux"],
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


def build_pdf(*pages: str) -> bytes:
    """Build a minimal single-font PDF with one line of text per page."""
    n = len(pages)
    page_ids = [4 + 2 * i for i in range(n)]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {n} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for pid, text in zip(page_ids, pages):
        escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        stream = f"BT /F1 14 Tf 72 720 Td ({escaped}) Tj ET".encode("latin-1")
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>"
            ).encode()
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{num} 0 obj\n".encode() + body + b"\nendobj\n"
    xref = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += f"{off:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref}\n%%EOF\n"
    ).encode()
    return bytes(out)


class FakeGemini:
    """Stands in for gemini_client.generate_text and records every prompt."""

    def __init__(self, reply: str):
        self.reply = reply
        self.error: Exception | None = None
        self.prompts: list[str] = []

    async def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def sample_analysis() -> dict:
    return copy.deepcopy(SAMPLE_ANALYSIS)


@pytest.fixture
def fake_gemini(monkeypatch) -> FakeGemini:
    fake = FakeGemini(json.dumps(SAMPLE_ANALYSIS))
    monkeypatch.setattr(gemini_client, "generate_text", fake.generate_text)
    return fake


@pytest.fixture
def make_pdf():
    return build_pdf
