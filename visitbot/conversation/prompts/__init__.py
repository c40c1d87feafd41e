"""Indonesian message templates for the visit conversation."""

from visitbot.conversation.prompts.states import STATE_PROMPTS, render_prompt
from visitbot.conversation.prompts.summaries import (
    VISIT_TYPE_LABELS,
    build_group_notice,
    build_reminder_message,
    build_success_message,
)

__all__ = [
    "STATE_PROMPTS",
    "VISIT_TYPE_LABELS",
    "build_group_notice",
    "build_reminder_message",
    "build_success_message",
    "render_prompt",
]
