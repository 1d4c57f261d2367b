# services/chat.py
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from healthbuddy.core.config import settings
from healthbuddy.schemas.chat import ChatContext, ChatRequest
from healthbuddy.services.completion_client import CompletionClient

logger = logging.getLogger(__name__)

MAX_RECENT_ACTIVITIES = 5

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(value: Optional[datetime]) -> datetime:
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_date(value: datetime) -> str:
    """US short date, e.g. 3/7/2025."""
    return f"{value.month}/{value.day}/{value.year}"


def format_context(context: ChatContext) -> str:
    """
    Flatten the client's context into the text block sent as the second
    system message.
    """
    formatted = ""

    if context.recent_activities:
        recent = sorted(
            context.recent_activities, key=lambda a: _sort_key(a.date), reverse=True
        )[:MAX_RECENT_ACTIVITIES]
        formatted += "Recent activities:\n"
        for activity in recent:
            when = f" ({format_date(activity.date)})" if activity.date else ""
            formatted += f"• {activity.description}{when}\n"
        formatted += "\n"

    if context.things_to_keep_in_mind:
        formatted += "Things to keep in mind:\n"
        formatted += context.things_to_keep_in_mind + "\n\n"

    if context.goals:
        formatted += "Current goals:\n"
        for goal in context.goals:
            formatted += f"• {goal.description}\n"
        formatted += "\n"

    if context.day_of_week or context.time_of_day:
        parts = [p for p in (context.day_of_week, context.time_of_day) if p]
        formatted += f"Current time: {', '.join(parts)}\n"

    return formatted


def build_prompt(request: ChatRequest) -> List[Dict[str, str]]:
    """System prompt, formatted context, user message. Always three messages."""
    return [
        {"role": "system", "content": request.system_prompt or settings.SYSTEM_PROMPT},
        {"role": "system", "content": format_context(request.context)},
        {"role": "user", "content": request.message},
    ]


class ChatService:
    """Completion proxy: builds the prompt and forwards it upstream."""

    def reply(self, request: ChatRequest, completion_client: CompletionClient) -> str:
        messages = build_prompt(request)
        logger.debug(f"Formatted context: {messages[1]['content']!r}")
        return completion_client.complete(messages)


chat_service = ChatService()
