"""Unit tests for the weekly reflection summarizer"""

from __future__ import annotations

import datetime

from moodjournal.analysis.schemas import Mood, WeeklyEntry
from moodjournal.analysis.weekly import build_weekly_prompt, summarize_week
from tests.fakes import FakeGateway

TODAY = datetime.date(2026, 10, 19)


def _entry(days_ago, text, mood=Mood.HAPPY):
    return WeeklyEntry(entry_date=TODAY - datetime.timedelta(days=days_ago), entry_text=text, mood=mood)


def test_no_entries_never_calls_ai():
    gateway = FakeGateway()

    result = summarize_week(gateway, [], today=TODAY)

    assert result.summary is None
    assert gateway.calls == []


def test_only_old_entries_never_calls_ai():
    gateway = FakeGateway()

    result = summarize_week(gateway, [_entry(8, "Long ago")], today=TODAY)

    assert result.summary is None
    assert gateway.calls == []


def test_window_includes_seventh_day():
    gateway = FakeGateway('```json\n{"summary": "A steady week."}\n```')
    entries = [_entry(7, "Edge of the window"), _entry(9, "Too old"), _entry(0, "Today", Mood.NERVOUS)]

    result = summarize_week(gateway, entries, today=TODAY)

    assert result.summary == "A steady week."
    prompt = gateway.calls[0]["messages"][0]["content"]
    assert "2026-10-12: Edge of the window (Mood: happy)" in prompt
    assert "2026-10-19: Today (Mood: nervous)" in prompt
    assert "Too old" not in prompt
    assert gateway.calls[0]["temperature"] == 0.7


def test_entry_lines_are_separated_by_blank_lines():
    prompt = build_weekly_prompt([_entry(1, "One"), _entry(0, "Two", Mood.SAD)])
    assert "2026-10-18: One (Mood: happy)\n\n2026-10-19: Two (Mood: sad)" in prompt


def test_unparseable_summary_is_absent():
    gateway = FakeGateway("What a week!")

    result = summarize_week(gateway, [_entry(1, "Something")], today=TODAY)

    assert result.summary is None
