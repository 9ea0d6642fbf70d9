"""
Citation extraction and formatting.

Builds source citations from the top retrieval results for answer
grounding.

Dependencies: cvportal.models
System role: Citation formatting business logic
"""

from cvportal.models.chat import SourceCitation
from cvportal.models.retrieval import RetrievalResult


class CitationBuilder:
    """Citation building business logic."""

    def __init__(self, max_citations: int = 3, excerpt_length: int = 200) -> None:
        """
        Initialize citation builder.

        Args:
            max_citations: Maximum citations per response
            excerpt_length: Characters of content kept in each excerpt
        """
        self.max_citations = max_citations
        self.excerpt_length = excerpt_length

    def build_citations(self, results: list[RetrievalResult]) -> list[SourceCitation]:
        """
        Build citations from the highest-ranked results.

        Args:
            results: Retrieval results in descending similarity

        Returns:
            list[SourceCitation]: At most ``max_citations`` citations
        """
        return [self.format_citation(result) for result in results[: self.max_citations]]

    def format_citation(self, result: RetrievalResult) -> SourceCitation:
        return SourceCitation(
            section=result.section,
            content=self.excerpt(result.content),
            confidence=result.similarity,
        )

    def excerpt(self, content: str) -> str:
        if len(content) <= self.excerpt_length:
            return content
        return content[: self.excerpt_length] + "..."
