"""Presentation helpers for the results view."""

RESULT_TABS = (
    ("resume", "✨ Optimized Resume"),
    ("changes", "📝 Key Changes"),
    ("skills", "🎯 Skill Gaps"),
    ("ats", "🤖 ATS Analysis"),
    ("keywords", "🔑 Keywords"),
    ("cover", "✉️ Cover Letter"),
)

SCORE_COLORS = {"good": "#34d399", "fair": "#f59e0b", "poor": "#f87171"}
LEVEL_ICONS = {"high": "🔴", "medium": "🟠", "low": "🟢"}

NO_SKILL_GAPS_MESSAGE = "🎉 No significant skill gaps detected!"
NO_ATS_FLAGS_MESSAGE = "✅ Your resume looks ATS-friendly!"


def match_score(results: dict) -> int:
    score = results.get("matchScore") or 0
    return min(100, max(0, int(score)))


def score_band(score: int) -> str:
    if score >= 75:
        return "good"
    if score >= 50:
        return "fair"
    return "poor"


def score_color(score: int) -> str:
    return SCORE_COLORS[score_band(score)]


def level_label(level: str) -> str:
    return f"{LEVEL_ICONS.get(level, '⚪')} {level.upper()}"
