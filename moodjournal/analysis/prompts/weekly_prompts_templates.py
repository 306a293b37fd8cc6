WEEKLY_REFLECTION_TEMPLATE: str = (
    "You are a supportive life coach reading someone's journal entries from the past week. "
    "Give a brief, warm reflection on their week in 2-3 sentences that captures the essence of their "
    "emotional journey and offers one actionable insight.\n\n"
    "Journal entries from the past week:\n"
    "{entries_summary}\n\n"
    "Keep it concise and uplifting. Return ONLY valid JSON in exactly this format:\n"
    '{{"summary": "Your week mixed highs and lows, with moments of excitement balanced by some stress. '
    'Try taking more breaks between intense activities to keep your energy up."}}'
)

WEEKLY_ENTRY_LINE_TEMPLATE: str = "{entry_date}: {entry_text} (Mood: {mood})"

WEEKLY_WINDOW_DAYS: int = 7
