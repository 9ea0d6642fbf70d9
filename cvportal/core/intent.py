"""
Coarse intent routing for chat questions.

Keyword match only; the first matching intent wins.

Dependencies: None
System role: Chooses the response strategy for a question
"""

from enum import Enum

from cvportal.models.chunk import ChunkSection


class ChatIntent(str, Enum):
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    GENERAL = "general"


INTENT_KEYWORDS: tuple[tuple[ChatIntent, tuple[str, ...]], ...] = (
    (ChatIntent.EXPERIENCE, ("experience", "work")),
    (ChatIntent.EDUCATION, ("education", "study")),
    (ChatIntent.SKILLS, ("skill", "ability")),
)

# Sections an intent draws its answer from; GENERAL uses everything retrieved.
INTENT_SECTIONS: dict[ChatIntent, frozenset[ChunkSection]] = {
    ChatIntent.EXPERIENCE: frozenset({ChunkSection.EXPERIENCE}),
    ChatIntent.EDUCATION: frozenset({ChunkSection.EDUCATION}),
    ChatIntent.SKILLS: frozenset({ChunkSection.SKILLS}),
}


def detect_intent(text: str) -> ChatIntent:
    lowered = (text or "").lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return intent
    return ChatIntent.GENERAL
