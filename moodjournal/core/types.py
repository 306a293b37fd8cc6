from sqlalchemy import Enum
from moodjournal.analysis.schemas import Mood

# Shared by every table with a mood column so PostgreSQL sees a single enum type
MoodType = Enum(Mood, values_callable=lambda e: [m.value for m in e], name="mood")
