# frontend/app.py: run with `streamlit run frontend/app.py`
import logging
import time
from concurrent.futures import ThreadPoolExecutor

import streamlit as st

from frontend import wizard
from frontend.api_client import ApiError, ResumeApiClient
from frontend.results import (
    NO_ATS_FLAGS_MESSAGE,
    NO_SKILL_GAPS_MESSAGE,
    RESULT_TABS,
    level_label,
    match_score,
    score_color,
)
from frontend.wizard import LOADING_STEPS, STEP_LABELS, Phase, ResumeFile

logger = logging.getLogger(__name__)

POLL_SECONDS = 0.25

st.set_page_config(page_title="ResumeAI", page_icon="📄", layout="wide")

# -------------------- SESSION STATE --------------------
if "wizard" not in st.session_state:
    st.session_state.wizard = wizard.WizardState()

# Bumped on "start over" so the upload and text widgets come back empty
if "form_nonce" not in st.session_state:
    st.session_state.form_nonce = 0

if "client" not in st.session_state:
    st.session_state.client = ResumeApiClient()


def _apply(transition, *args):
    st.session_state.wizard = transition(st.session_state.wizard, *args)


def _step_icon(i: int, active: int) -> str:
    if i < active:
        return "✓"
    return "●" if i == active else "○"


# -------------------- HEADER --------------------
st.title("📄 ResumeAI")
st.caption("Powered by Gemini AI")

state: wizard.WizardState = st.session_state.wizard


# ==================== INPUT (idle / ready) ====================
def render_inputs(state: wizard.WizardState):
    st.markdown("## Land More Interviews with **AI-Optimized** Resumes")
    st.markdown(
        "Upload your resume and paste the job description. Our AI analyzes, rewrites, "
        "and tailors your resume to beat ATS systems and impress recruiters."
    )

    current = wizard.step_index(state)
    cols = st.columns(len(STEP_LABELS))
    for i, (col, label) in enumerate(zip(cols, STEP_LABELS)):
        col.markdown(f"**{'✓' if current > i else i + 1}** {label}")

    if state.error:
        st.error(f"⚠️ {state.error}")

    nonce = st.session_state.form_nonce
    left, right = st.columns(2)
    with left:
        st.subheader("📄 Your Resume")
        upload = st.file_uploader(
            "Upload your current resume as a PDF (max 10MB)",
            type=["pdf"],
            key=f"resume_{nonce}",
        )
        if upload is not None:
            candidate = ResumeFile(upload.name, upload.type, upload.getvalue())
            if wizard.is_new_upload(state.resume_file, candidate):
                _apply(wizard.select_file, candidate)
        elif state.resume_file is not None:
            _apply(wizard.clear_file)
    with right:
        st.subheader("💼 Job Description")
        text = st.text_area(
            "Paste the full job posting you're applying to",
            height=220,
            placeholder="We're looking for a Senior Software Engineer with 5+ years of experience...",
            key=f"job_description_{nonce}",
        )
        if text != state.job_description:
            _apply(wizard.set_job_description, text)

    if st.button("✨ Analyze & Enhance My Resume", type="primary"):
        _apply(wizard.submit)
        st.rerun()


# ==================== LOADING ====================
def render_loading(state: wizard.WizardState):
    st.subheader("Analyzing Your Resume")
    st.caption("Gemini AI is working its magic...")
    placeholder = st.empty()

    def show(active: int):
        placeholder.markdown(
            "\n".join(f"- {_step_icon(i, active)} {label}" for i, label in enumerate(LOADING_STEPS))
        )

    client: ResumeApiClient = st.session_state.client
    # Worker thread only records progress; all rendering stays on this thread
    reached = {"step": 0}
    started = time.monotonic()
    try:
        with st.spinner("Waiting for the analysis..."), ThreadPoolExecutor(max_workers=1) as pool:
            future = pool.submit(
                client.run_analysis,
                state.resume_file.name,
                state.resume_file.data,
                state.job_description,
                on_progress=lambda step: reached.update(step=step),
            )
            while not future.done():
                show(wizard.indicator_step(time.monotonic() - started, reached["step"]))
                time.sleep(POLL_SECONDS)
            results = future.result()
    except ApiError as e:
        _apply(wizard.fail, str(e))
    except Exception:
        logger.exception("Analysis request failed")
        _apply(wizard.fail, wizard.GENERIC_ERROR_MESSAGE)
    else:
        _apply(wizard.succeed, results)
    st.rerun()


# ==================== RESULTS ====================
def render_results(state: wizard.WizardState):
    data = state.results or {}
    score = match_score(data)
    color = score_color(score)

    with st.container(border=True):
        left, right = st.columns([1, 3])
        left.markdown(
            f"<h1 style='color:{color};margin:0'>{score}</h1><span>/ 100</span>",
            unsafe_allow_html=True,
        )
        right.markdown("### Resume Match Score")
        right.write(data.get("matchScoreReason", ""))
        right.progress(score / 100)

    tabs = st.tabs([label for _, label in RESULT_TABS])
    panels = dict(zip((tab_id for tab_id, _ in RESULT_TABS), tabs))

    with panels["resume"]:
        st.code(data.get("optimizedResume", ""), language=None)
        st.download_button("⬇ Download resume", data.get("optimizedResume", ""), "optimized_resume.txt")

    with panels["changes"]:
        st.caption("What the AI improved in your resume")
        for change in data.get("keyChanges") or []:
            st.markdown(f"- {change}")

    with panels["skills"]:
        st.caption("Skills to acquire to better match this role")
        gaps = data.get("skillGaps") or []
        if not gaps:
            st.success(NO_SKILL_GAPS_MESSAGE)
        for gap in gaps:
            st.markdown(f"**{gap.get('skill', '')}** · {level_label(gap.get('importance', ''))}")
            st.write(gap.get("suggestion", ""))

    with panels["ats"]:
        st.caption("Issues that may cause ATS rejection")
        flags = data.get("atsFlags") or []
        if not flags:
            st.success(NO_ATS_FLAGS_MESSAGE)
        for flag in flags:
            st.markdown(f"{level_label(flag.get('severity', ''))} **{flag.get('issue', '')}**")
            st.info(f"💡 Fix: {flag.get('fix', '')}")

    with panels["keywords"]:
        top = data.get("topKeywords") or []
        missing = data.get("missingKeywords") or []
        if top:
            st.markdown("Top job keywords:")
            st.markdown(" ".join(f":green[`{k}`]" for k in top))
        if missing:
            st.markdown("Missing keywords:")
            st.markdown(" ".join(f":red[`{k}`]" for k in missing))

    with panels["cover"]:
        st.code(data.get("coverLetter", ""), language=None)
        st.download_button("⬇ Download cover letter", data.get("coverLetter", ""), "cover_letter.txt")

    with st.expander("✍️ Rewrite a single section"):
        section_type = st.selectbox("Section", ["summary", "experience", "skills", "education"])
        section_text = st.text_area("Section text", key="rewrite_section_text")
        if st.button("Rewrite section"):
            client: ResumeApiClient = st.session_state.client
            try:
                with st.spinner("Rewriting..."):
                    rewritten = client.rewrite_section(section_text, state.job_description, section_type)
            except ApiError as e:
                st.error(f"⚠️ {str(e) or wizard.GENERIC_ERROR_MESSAGE}")
            else:
                st.code(rewritten, language=None)

    if st.button("← Start Over with New Resume"):
        _apply(wizard.reset)
        st.session_state.form_nonce += 1
        st.rerun()


if state.phase is Phase.LOADING:
    render_loading(state)
elif state.phase is Phase.RESULTS:
    render_results(state)
else:
    render_inputs(state)
