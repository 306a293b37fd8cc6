NAMES_INTENT_SYSTEM_PROMPT: str = (
    "Extract PERSON NAMES and intent from a short diary entry.\n"
    "Return STRICT JSON ONLY:\n"
    '{ "people": string[], "intent": "share" | "apologize" | "none" }\n\n'
    "Rules:\n"
    '- "people": first names or name-like tokens you are confident are persons (e.g., "Shreya", "Alex").\n'
    '- "share": the entry celebrates, describes time spent together, or a positive moment worth sharing.\n'
    '- "apologize": the entry shows the user upset or hurt someone, or wants to repair things.\n'
    '- "none": no clear outreach intent.\n'
    "- Max 3 names. No extra text outside the JSON."
)

NAMES_INTENT_USER_TEMPLATE: str = 'ENTRY:\n"""{journal_text}"""'

CONFLICT_DETECTION_TEMPLATE: str = (
    "Analyze this journal entry for interpersonal conflicts and person names.\n\n"
    'Journal entry: "{journal_text}"\n\n'
    "Your job:\n"
    "1) Detect whether the entry involves:\n"
    "   - a conflict (fight, argument, tension, breakup, disagreement, hurt feelings, being upset with someone)\n"
    "   - a positive moment (hanging out with someone, doing something fun, having a good time)\n"
    "2) Extract the name of the person involved (a proper noun that is likely a name; pick the most relevant one).\n"
    "3) Write a short, informal message in the user's voice that fits the entry. The message should:\n"
    "   - sound casual and friendly, never robotic or formal\n"
    "   - match the vibe (warm/light if happy, soft/apologetic if conflict)\n"
    "   - contain no questions, though it can sound open-ended\n"
    '   - open with the person\'s name in a friendly way ("Hey", "Heyy", "Hey Rishika")\n\n'
    "Return ONLY one of these JSON shapes:\n\n"
    "Conflict:\n"
    '{{"hasConflict": true, "hasPositive": false, "personName": "Chirag", "conflictType": "argument", '
    '"message": "Hey Chirag. I\'m sorry about what happened today and I think we should talk about it.."}}\n\n'
    "Positive:\n"
    '{{"hasConflict": false, "hasPositive": true, "personName": "Rishika", '
    '"message": "Heyy Rishika, today was fun! Let\'s hang out again soon!"}}\n\n'
    "Neither:\n"
    '{{"hasConflict": false, "hasPositive": false}}\n\n'
    "Guidelines:\n"
    '- "personName" is a single capitalized proper noun.\n'
    '- "conflictType" is a short label such as "fight", "argument", "tension", "disagreement", "breakup".\n'
    "- Contractions and small jokes are fine.\n"
    "- No text before or after the JSON."
)

OUTREACH_MESSAGE_TEMPLATE: str = (
    "Write a short text message from me to {person_name}. Context: my journal entry "
    '"{journal_text}" describes a {interaction} moment and I am feeling {mood}. '
    "I want to {action}. Keep it to 1-2 casual, warm sentences in my own voice, start with "
    "a friendly greeting using their name, and do not ask any questions. Return only the message text."
)

# actionType -> what the user wants the message to do
OUTREACH_ACTIONS: dict[str, str] = {
    "apologize": "apologize and mend things",
    "space": "let them know I'm taking some space to reflect, without sounding cold",
    "talk": "ask to talk things through when they're free",
    "share-joy": "share the good vibes from today",
    "plan-hangout": "suggest we hang out again soon",
    "thank": "thank them and say how much today meant to me",
}

CRISIS_KEYWORDS: tuple[str, ...] = (
    "suicide",
    "kill myself",
    "end my life",
    "want to die",
    "self harm",
    "hurt myself",
    "no reason to live",
)

# Capitalized words that open clauses but are not names
NAME_STOPWORDS: frozenset[str] = frozenset(
    {
        "The", "Today", "Tonight", "Tomorrow", "Yesterday", "This", "That", "Then",
        "And", "But", "When", "After", "Before", "Also", "Just", "Maybe", "Still",
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
        "Mom", "Dad", "God", "Anyway", "Later", "Morning", "Evening",
    }
)

APOLOGY_KEYWORDS: tuple[str, ...] = (
    "sorry", "apologize", "apologise", "fight", "fought", "argument", "argued",
    "yelled", "upset", "mad at", "angry at", "my fault", "hurt her", "hurt him", "hurt them",
)

CELEBRATION_KEYWORDS: tuple[str, ...] = (
    "fun", "great time", "amazing", "awesome", "celebrate", "celebrated", "hung out",
    "hang out", "had a blast", "loved", "birthday", "party", "best day", "so good",
)

MAX_PEOPLE: int = 3
