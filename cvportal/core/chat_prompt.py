"""
Chat prompt templates.

System prompt for answering questions about one CV, and the user message
that carries retrieved context. Context is truncated to a fixed length
with a visible marker.

Dependencies: langchain_core.prompts
System role: Prompt templates for CV chat completions
"""

from langchain_core.prompts import PromptTemplate

CONTEXT_TRUNCATION_MARKER = "\n...[content truncated]"

SYSTEM_PROMPT = PromptTemplate.from_template(
    """You are an AI assistant representing the professional whose CV this is.
You answer visitors' questions using only the CV excerpts you are given.

## Instructions
1. Answer questions about their professional background accurately
2. Provide specific examples from the CV excerpts when relevant
3. Maintain a {response_style} tone throughout the conversation
4. Only discuss information that is present in the excerpts
5. If the excerpts don't contain the answer, say so politely
6. Politely redirect off-topic questions back to the professional background

## Available CV sections
{available_sections}

Be concise but informative."""
)

USER_PROMPT = PromptTemplate.from_template(
    """Context from CV:
{context}

Focus on: {focus}

Question: {question}"""
)


def truncate_context(context: str, max_length: int) -> str:
    if len(context) <= max_length:
        return context
    return context[:max_length] + CONTEXT_TRUNCATION_MARKER


def build_system_prompt(
    response_style: str,
    available_sections: list[str],
) -> str:
    return SYSTEM_PROMPT.format(
        response_style=response_style,
        available_sections=", ".join(available_sections) if available_sections else "none",
    )


def build_user_message(
    question: str,
    context: str,
    focus_sections: list[str],
    max_context_length: int = 8000,
) -> str:
    """
    Render the user turn sent to the language model.

    Args:
        question: Visitor question
        context: Section-labelled retrieved passages
        focus_sections: Sections the answer should concentrate on
        max_context_length: Character limit for ``context``
    """
    return USER_PROMPT.format(
        context=truncate_context(context, max_context_length),
        focus=", ".join(focus_sections) if focus_sections else "all retrieved sections",
        question=question,
    )
