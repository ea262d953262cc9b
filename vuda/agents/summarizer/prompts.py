from __future__ import annotations

from ..schemas import SummaryRequest

SUMMARY_SYSTEM = """
You summarize incidents for emergency response teams, based on detailed video analysis and other available data.

Given the incident below, write a concise summary covering what happened, its potential impact and recommended actions.
Pay close attention to the AI Video Feed Analysis and its detected anomaly tags.

Return STRICT JSON ONLY:
{"summary": "..."}
"""


def render_summary_prompt(req: SummaryRequest) -> str:
    return (
        f"Event Title: {req.event_title}\n"
        f"Location: {req.location}\n"
        f"Timestamp: {req.timestamp}\n"
        f"AI Video Feed Analysis (including detected anomalies): {req.ai_analysis}\n"
        f"Actions Taken: {req.actions_taken}"
    )
