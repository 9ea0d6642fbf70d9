"""
Grounded answer construction.

One strategy per intent. Each strategy selects the retrieved passages
relevant to the intent and renders a template answer built only from
their content. The same selection gives the LLM prompt its focus.

Dependencies: cvportal.core.intent
System role: Template answers and prompt focus for the chat orchestrator
"""

from dataclasses import dataclass, field

from cvportal.core.intent import INTENT_SECTIONS, ChatIntent, detect_intent
from cvportal.models.retrieval import RetrievalResult

NOT_AVAILABLE_RESPONSE = (
    "I don't have specific information to answer that question based on this CV. "
    "Please try asking about work experience, education, or skills."
)

APOLOGY_RESPONSE = (
    "I apologize, but I encountered an error while processing your question. "
    "Please try again."
)


@dataclass(frozen=True)
class AnswerTemplate:
    prefix: str
    missing: str


TEMPLATES: dict[ChatIntent, AnswerTemplate] = {
    ChatIntent.EXPERIENCE: AnswerTemplate(
        prefix="Based on the CV, here's the work experience information: ",
        missing="I don't see specific work experience information in the available CV data.",
    ),
    ChatIntent.EDUCATION: AnswerTemplate(
        prefix="Based on the CV, here's the educational background: ",
        missing="I don't see specific educational background information in the available CV data.",
    ),
    ChatIntent.SKILLS: AnswerTemplate(
        prefix="Based on the CV, here are the key skills: ",
        missing="I don't see specific skills information in the available CV data.",
    ),
    ChatIntent.GENERAL: AnswerTemplate(
        prefix="Based on the CV information, ",
        missing=NOT_AVAILABLE_RESPONSE,
    ),
}


@dataclass
class ResponsePlan:
    """Intent, the passages it focuses on, and the template answer."""

    intent: ChatIntent
    focus: list[RetrievalResult] = field(default_factory=list)
    answer: str = ""

    @property
    def focus_sections(self) -> list[str]:
        return list(dict.fromkeys(result.section for result in self.focus))


class ResponseBuilder:
    """Route a question to its strategy and build the grounded answer."""

    def plan(self, question: str, results: list[RetrievalResult]) -> ResponsePlan:
        intent = detect_intent(question)
        focus = self.select(intent, results)
        return ResponsePlan(intent=intent, focus=focus, answer=self.render(intent, focus))

    @staticmethod
    def select(intent: ChatIntent, results: list[RetrievalResult]) -> list[RetrievalResult]:
        sections = INTENT_SECTIONS.get(intent)
        if sections is None:
            return list(results)
        return [r for r in results if r.embedding.metadata.section in sections]

    @staticmethod
    def render(intent: ChatIntent, focus: list[RetrievalResult]) -> str:
        template = TEMPLATES[intent]
        if not focus:
            return template.missing
        return template.prefix + " ".join(result.content for result in focus)
