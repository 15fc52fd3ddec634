"""Tests for the wizard state machine."""

import pytest

from frontend import wizard
from frontend.wizard import (
    GENERIC_ERROR_MESSAGE,
    LOADING_STEPS,
    MISSING_INPUT_MESSAGE,
    Phase,
    ResumeFile,
    WizardState,
)

PDF = ResumeFile("resume.pdf", "application/pdf", b"%PDF-1.4")
DOCX = ResumeFile(
    "resume.docx",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    b"PK",
)


def _ready() -> WizardState:
    state = wizard.select_file(WizardState(), PDF)
    return wizard.set_job_description(state, "Senior React Developer")


def _loading() -> WizardState:
    return wizard.submit(_ready())


class TestInputs:
    def test_starts_idle(self):
        state = WizardState()
        assert state.phase is Phase.IDLE
        assert wizard.step_index(state) == 0

    def test_pdf_selected(self):
        state = wizard.select_file(WizardState(), PDF)
        assert state.resume_file == PDF
        assert state.phase is Phase.READY

    def test_non_pdf_does_not_populate_file(self):
        state = wizard.select_file(WizardState(), DOCX)
        assert state.resume_file is None
        assert state.phase is Phase.IDLE

    def test_non_pdf_keeps_previous_pdf(self):
        state = wizard.select_file(WizardState(), PDF)
        assert wizard.select_file(state, DOCX).resume_file == PDF

    def test_text_only_is_ready(self):
        state = wizard.set_job_description(WizardState(), "React")
        assert state.phase is Phase.READY

    def test_clearing_everything_goes_back_to_idle(self):
        state = wizard.set_job_description(WizardState(), "React")
        assert wizard.set_job_description(state, "").phase is Phase.IDLE

    def test_clear_file(self):
        state = wizard.clear_file(_ready())
        assert state.resume_file is None
        assert state.phase is Phase.READY

    def test_transitions_do_not_mutate(self):
        before = WizardState()
        wizard.select_file(before, PDF)
        assert before == WizardState()


class TestSubmit:
    def test_file_only_shows_banner(self):
        state = wizard.submit(wizard.select_file(WizardState(), PDF))
        assert state.phase is Phase.READY
        assert state.error == MISSING_INPUT_MESSAGE

    def test_blank_description_shows_banner(self):
        state = wizard.set_job_description(wizard.select_file(WizardState(), PDF), "   ")
        assert wizard.submit(state).phase is not Phase.LOADING

    def test_text_only_shows_banner(self):
        state = wizard.submit(wizard.set_job_description(WizardState(), "React"))
        assert state.phase is Phase.READY
        assert state.error == MISSING_INPUT_MESSAGE

    def test_both_inputs_start_loading(self):
        state = wizard.submit(_ready())
        assert state.phase is Phase.LOADING
        assert state.error == ""
        assert wizard.step_index(state) == 2

    def test_banner_cleared_on_valid_submit(self):
        state = wizard.submit(wizard.select_file(WizardState(), PDF))
        state = wizard.set_job_description(state, "React")
        assert wizard.submit(state).error == ""


class TestOutcome:
    def test_success_shows_results(self):
        results = {"matchScore": 80}
        state = wizard.succeed(_loading(), results)
        assert state.phase is Phase.RESULTS
        assert state.results == results
        assert wizard.step_index(state) == 3

    def test_failure_returns_to_ready_with_message(self):
        state = wizard.fail(_loading(), "Analysis failed: quota exceeded")
        assert state.phase is Phase.READY
        assert state.error == "Analysis failed: quota exceeded"
        assert state.resume_file == PDF

    def test_failure_without_message_uses_fallback(self):
        assert wizard.fail(_loading(), "").error == GENERIC_ERROR_MESSAGE
        assert wizard.fail(_loading()).error == GENERIC_ERROR_MESSAGE

    def test_outcome_ignored_unless_loading(self):
        state = _ready()
        assert wizard.succeed(state, {"matchScore": 1}) is state
        assert wizard.fail(state, "boom") is state

    def test_inputs_locked_while_loading(self):
        state = _loading()
        assert wizard.set_job_description(state, "other") is state
        assert wizard.submit(state) is state

    def test_start_over_clears_everything(self):
        state = wizard.reset(wizard.succeed(_loading(), {"matchScore": 80}))
        assert state == WizardState()
        assert state.phase is Phase.IDLE


class TestLoadingSteps:
    @pytest.mark.parametrize(
        "elapsed,step",
        [(0, 0), (1.9, 0), (2.0, 1), (7.5, 3), (10.0, 5), (60.0, 5), (-1, 0)],
    )
    def test_step_at_elapsed_time(self, elapsed, step):
        assert wizard.loading_step_at(elapsed) == step

    def test_indicator_follows_timer(self):
        assert wizard.indicator_step(4.1) == 2
        assert wizard.indicator_step(600.0) == len(LOADING_STEPS) - 1

    def test_indicator_never_behind_real_progress(self):
        assert wizard.indicator_step(0.5, reached=1) == 1
        assert wizard.indicator_step(0.5, reached=len(LOADING_STEPS) - 1) == len(LOADING_STEPS) - 1

    def test_indicator_ignores_out_of_range_progress(self):
        assert wizard.indicator_step(0.0, reached=99) == len(LOADING_STEPS) - 1
        assert wizard.indicator_step(0.0, reached=-3) == 0


class TestUploadChange:
    def test_first_upload_is_new(self):
        assert wizard.is_new_upload(None, PDF)

    def test_same_file_is_not_new(self):
        assert not wizard.is_new_upload(PDF, ResumeFile("resume.pdf", "application/pdf", b"%PDF-1.4"))

    def test_same_name_different_bytes_is_new(self):
        replacement = ResumeFile("resume.pdf", "application/pdf", b"%PDF-1.7 updated")
        assert wizard.is_new_upload(PDF, replacement)
        state = wizard.select_file(wizard.select_file(WizardState(), PDF), replacement)
        assert state.resume_file.data == b"%PDF-1.7 updated"
