"""
Follow-up question suggestions.

Each catalogue question is tagged with the CV sections it asks about and
is only offered when one of those sections appears in the retrieved
content, so no suggestion points at a section with no data.

Dependencies: cvportal.models
System role: Suggested follow-up questions for chat responses
"""

from cvportal.models.chunk import ChunkSection

GENERIC_SUGGESTIONS: tuple[str, ...] = (
    "Can you tell me about the work experience?",
    "What skills does this person have?",
    "What is their educational background?",
)

SUGGESTION_CATALOGUE: tuple[tuple[str, frozenset[ChunkSection]], ...] = (
    ("Can you tell me more about the work experience?", frozenset({ChunkSection.EXPERIENCE})),
    ("What educational qualifications does this person have?", frozenset({ChunkSection.EDUCATION})),
    ("What are the key technical skills?", frozenset({ChunkSection.SKILLS})),
    (
        "What achievements or accomplishments are highlighted?",
        frozenset({ChunkSection.EXPERIENCE, ChunkSection.PROJECTS}),
    ),
    ("How many years of experience does this person have?", frozenset({ChunkSection.EXPERIENCE})),
    ("Which projects has this person worked on?", frozenset({ChunkSection.PROJECTS})),
    ("What certifications does this person hold?", frozenset({ChunkSection.CERTIFICATIONS})),
    ("Which tools and technologies does this person use most?", frozenset({ChunkSection.SKILLS})),
    ("How would you summarize this person's professional profile?", frozenset({ChunkSection.SUMMARY})),
)


def suggest_questions(
    sections: list[str],
    question: str = "",
    limit: int = 3,
) -> list[str]:
    """
    Pick follow-up questions about the given sections.

    Args:
        sections: Section labels present in the retrieved content
        question: The question just asked (never suggested back)
        limit: Maximum suggestions

    Returns:
        list[str]: Suggestions in catalogue order
    """
    available = {section for section in sections}
    asked = question.strip().lower()
    picked = [
        text
        for text, tags in SUGGESTION_CATALOGUE
        if any(tag.value in available for tag in tags) and text.lower() != asked
    ]
    return picked[:limit]


def generic_suggestions(limit: int = 3) -> list[str]:
    return list(GENERIC_SUGGESTIONS[:limit])
