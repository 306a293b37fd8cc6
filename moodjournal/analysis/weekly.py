import datetime
import logging
from typing import Iterable, List, Optional

import moodjournal.analysis.prompts.weekly_prompts_templates as prompts
from moodjournal.analysis.ai_providers.openai import REFLECTION_TEMPERATURE, ChatGateway
from moodjournal.analysis.schemas import WeeklyEntry, WeeklyReflection
from moodjournal.analysis.validator import parse_json_reply

logger = logging.getLogger(__name__)


def window_start(today: Optional[datetime.date] = None) -> datetime.date:
    today = today or datetime.date.today()
    return today - datetime.timedelta(days=prompts.WEEKLY_WINDOW_DAYS)


def entries_in_window(entries: Iterable[WeeklyEntry], today: Optional[datetime.date] = None) -> List[WeeklyEntry]:
    start = window_start(today)
    return [e for e in entries if e.entry_date >= start]


def build_weekly_prompt(entries: List[WeeklyEntry]) -> str:
    entries_summary = "\n\n".join(
        prompts.WEEKLY_ENTRY_LINE_TEMPLATE.format(
            entry_date=e.entry_date.isoformat(), entry_text=e.entry_text, mood=e.mood.value
        )
        for e in entries
    )
    return prompts.WEEKLY_REFLECTION_TEMPLATE.format(entries_summary=entries_summary)


def summarize_week(
    gateway: ChatGateway,
    entries: Iterable[WeeklyEntry],
    today: Optional[datetime.date] = None,
) -> WeeklyReflection:
    """
    Summarizes the last seven days of entries in one model call.

    Args:
        gateway (ChatGateway): Chat completion gateway.
        entries (Iterable[WeeklyEntry]): Candidate entries; older ones are dropped.
        today (Optional[date]): Reference day, defaults to the current date.

    Returns:
        WeeklyReflection: `summary` is None when there was nothing to summarize
        or the reply could not be parsed.
    """
    recent = entries_in_window(entries, today)
    if not recent:
        return WeeklyReflection(summary=None)

    raw = gateway.complete(
        [{"role": "user", "content": build_weekly_prompt(recent)}],
        temperature=REFLECTION_TEMPERATURE,
    )
    try:
        data = parse_json_reply(raw)
    except ValueError:
        logger.warning(f"Failed to parse weekly reflection: {raw!r}")
        return WeeklyReflection(summary=None)

    summary = data.get("summary") if isinstance(data, dict) else None
    if not isinstance(summary, str) or not summary.strip():
        logger.warning("Weekly reflection reply had no summary")
        return WeeklyReflection(summary=None)
    return WeeklyReflection(summary=summary.strip())
