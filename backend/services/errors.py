"""Error taxonomy shared by the services and the HTTP layer.

Each error carries the HTTP status it maps to. Messages are exposed to the
client verbatim.
"""


class ResumeAIError(Exception):
    status_code: int = 500
    prefix: str = ""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        if self.prefix:
            return f"{self.prefix}: {self.message}"
        return self.message


class ValidationError(ResumeAIError):
    """A required input is missing or empty."""

    status_code = 400


class ExtractionError(ResumeAIError):
    """The uploaded bytes are not a parseable PDF."""

    prefix = "Failed to parse PDF"


class TransportError(ResumeAIError):
    """The Gemini API could not be reached or refused the request."""


class ParseError(ResumeAIError):
    """The completion is not valid JSON or does not match the result schema."""
