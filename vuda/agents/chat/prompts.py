from __future__ import annotations

from ..schemas import ChatRequest

MAX_HISTORY = 10

CHAT_SYSTEM = """
You are a helpful AI assistant for the VUDA Public Safety Platform. You are talking with an operator viewing an incident report.

Answer questions about the incident based ONLY on the Incident Context, the Chat History and, when attached, the video.
Do not make up information. If the answer is not in the provided context, say that you don't have that information.
Be concise.

Return STRICT JSON ONLY:
{"aiResponse": "your answer"}
"""


def render_chat_prompt(req: ChatRequest) -> str:
    ctx = req.incident_context
    lines = [
        "Incident Context:",
        f"Title: {ctx.title}",
        f"Location: {ctx.location}",
        f"Timestamp: {ctx.timestamp}",
    ]
    if ctx.initial_ai_system_analysis:
        lines.append(f"Initial AI System Analysis: {ctx.initial_ai_system_analysis}")
    if ctx.generated_summary:
        lines.append(f"Previously Generated AI Summary: {ctx.generated_summary}")
    lines.append("")
    lines.append("Chat History:")
    if req.chat_history:
        for turn in req.chat_history[-MAX_HISTORY:]:
            who = "User" if turn.sender == "user" else "AI"
            lines.append(f"{who}: {turn.text}")
    else:
        lines.append("No previous messages in this conversation.")
    lines.append("")
    lines.append(f"Current User Question: {req.user_question}")
    return "\n".join(lines)
