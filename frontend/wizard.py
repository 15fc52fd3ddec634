"""Client-side wizard: an explicit state machine over one analysis session.

Every user action is a pure function taking a WizardState and returning the
next one. The Streamlit page only stores the current state and renders it.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

PDF_CONTENT_TYPE = "application/pdf"

MISSING_INPUT_MESSAGE = "Please upload your resume and paste the job description."
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."

STEP_LABELS = ("Upload Resume", "Add Job Description", "Get Analysis")

LOADING_STEPS = (
    "Parsing your resume...",
    "Analyzing job description...",
    "Calculating match score...",
    "Optimizing resume content...",
    "Running ATS simulation...",
    "Generating cover letter...",
)
LOADING_STEP_SECONDS = 2.0


class Phase(str, Enum):
    IDLE = "idle"
    READY = "ready"
    LOADING = "loading"
    RESULTS = "results"


@dataclass(frozen=True)
class ResumeFile:
    name: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class WizardState:
    phase: Phase = Phase.IDLE
    resume_file: ResumeFile | None = None
    job_description: str = ""
    results: dict[str, Any] | None = None
    error: str = ""


def _input_phase(resume_file: ResumeFile | None, job_description: str) -> Phase:
    return Phase.READY if resume_file or job_description else Phase.IDLE


def select_file(state: WizardState, resume_file: ResumeFile | None) -> WizardState:
    """Pick a résumé. Anything that is not a PDF leaves the state untouched."""
    if state.phase in (Phase.LOADING, Phase.RESULTS):
        return state
    if resume_file is None or resume_file.content_type != PDF_CONTENT_TYPE:
        return state
    return replace(
        state,
        resume_file=resume_file,
        phase=_input_phase(resume_file, state.job_description),
    )


def clear_file(state: WizardState) -> WizardState:
    if state.phase in (Phase.LOADING, Phase.RESULTS) or state.resume_file is None:
        return state
    return replace(state, resume_file=None, phase=_input_phase(None, state.job_description))


def set_job_description(state: WizardState, text: str) -> WizardState:
    if state.phase in (Phase.LOADING, Phase.RESULTS):
        return state
    return replace(
        state,
        job_description=text,
        phase=_input_phase(state.resume_file, text),
    )


def can_submit(state: WizardState) -> bool:
    return state.resume_file is not None and bool(state.job_description.strip())


def submit(state: WizardState) -> WizardState:
    """Start the analysis, or show the validation banner if inputs are missing."""
    if state.phase in (Phase.LOADING, Phase.RESULTS):
        return state
    if not can_submit(state):
        return replace(state, phase=Phase.READY, error=MISSING_INPUT_MESSAGE)
    return replace(state, phase=Phase.LOADING, error="")


def succeed(state: WizardState, results: dict[str, Any]) -> WizardState:
    if state.phase is not Phase.LOADING:
        return state
    return replace(state, phase=Phase.RESULTS, results=results, error="")


def fail(state: WizardState, message: str | None = None) -> WizardState:
    if state.phase is not Phase.LOADING:
        return state
    return replace(state, phase=Phase.READY, error=message or GENERIC_ERROR_MESSAGE)


def reset(state: WizardState) -> WizardState:
    """Start over: clear the file, the job description and any results."""
    return WizardState()


def step_index(state: WizardState) -> int:
    """Position in the three-step progress bar (3 means all done)."""
    return {
        Phase.IDLE: 0,
        Phase.READY: 1,
        Phase.LOADING: 2,
        Phase.RESULTS: 3,
    }[state.phase]


def loading_step_at(elapsed_seconds: float) -> int:
    """Loading label for a given time in flight, capped at the last label."""
    step = int(max(0.0, elapsed_seconds) // LOADING_STEP_SECONDS)
    return min(step, len(LOADING_STEPS) - 1)


def indicator_step(elapsed_seconds: float, reached: int = 0) -> int:
    """Step to highlight: the timer's step, never behind a finished round trip."""
    reached = min(max(0, reached), len(LOADING_STEPS) - 1)
    return max(loading_step_at(elapsed_seconds), reached)


def is_new_upload(current: ResumeFile | None, candidate: ResumeFile) -> bool:
    """Same-named replacements count as new when the bytes differ."""
    if current is None:
        return True
    return (current.name, current.data) != (candidate.name, candidate.data)
