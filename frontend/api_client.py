"""HTTP client for the ResumeAI backend."""

import logging

import requests

from frontend.settings import ui_settings
from frontend.wizard import LOADING_STEPS

logger = logging.getLogger(__name__)

MIN_RESUME_CHARS = 50
EMPTY_TEXT_MESSAGE = "Could not extract text from PDF. Please try a different file."
UNEXPECTED_REPLY_MESSAGE = "The server sent an unexpected reply. Please try again."


class ApiError(Exception):
    """A backend call failed; the message is safe to show to the user."""


def error_message(exc: requests.RequestException) -> str | None:
    """Prefer the server's {error} field, then the transport message."""
    response = exc.response
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
    return str(exc) or None


class ResumeApiClient:
    def __init__(self, base_url: str | None = None, session: requests.Session | None = None,
                 timeout: float | None = None):
        self.base_url = (base_url or ui_settings.resume_api_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else ui_settings.resume_api_timeout

    def _post(self, path: str, **kwargs) -> dict:
        try:
            r = self.session.post(f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
            r.raise_for_status()
        except requests.RequestException as e:
            logger.error("POST %s failed: %s", path, e)
            raise ApiError(error_message(e) or "") from e
        try:
            body = r.json()
        except ValueError as e:
            logger.error("POST %s returned a non-JSON body", path)
            raise ApiError(UNEXPECTED_REPLY_MESSAGE) from e
        if not isinstance(body, dict):
            raise ApiError(UNEXPECTED_REPLY_MESSAGE)
        return body

    def parse_resume(self, filename: str, data: bytes, content_type: str = "application/pdf") -> dict:
        return self._post("/parse-resume", files={"resume": (filename, data, content_type)})

    def analyze(self, resume_text: str, job_description: str) -> dict:
        return self._post(
            "/analyze",
            json={"resumeText": resume_text, "jobDescription": job_description},
        )

    def rewrite_section(self, section_text: str, job_description: str,
                        section_type: str | None = None) -> str:
        payload = {"sectionText": section_text, "jobDescription": job_description}
        if section_type:
            payload["sectionType"] = section_type
        body = self._post("/rewrite-section", json=payload)
        if not isinstance(body.get("rewritten"), str):
            raise ApiError(UNEXPECTED_REPLY_MESSAGE)
        return body["rewritten"]

    def run_analysis(self, filename: str, data: bytes, job_description: str,
                     on_progress=None) -> dict:
        """Parse the PDF, then analyze it. `on_progress(step)` marks each finished round trip."""
        parsed = self.parse_resume(filename, data)
        resume_text = parsed.get("text")
        if not isinstance(resume_text, str):
            resume_text = ""
        if len(resume_text.strip()) < MIN_RESUME_CHARS:
            raise ApiError(EMPTY_TEXT_MESSAGE)
        if on_progress:
            on_progress(1)

        results = self.analyze(resume_text, job_description)
        if on_progress:
            on_progress(len(LOADING_STEPS) - 1)
        return results
