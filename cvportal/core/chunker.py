"""
CV chunker.

Splits a parsed CV into bounded, overlapping text chunks with ids that
are reproducible from (section key, item index, chunk index), so
re-chunking identical input yields identical ids.

Dependencies: cvportal.models
System role: First stage of CV ingestion
"""

import logging
import math
import warnings

from cvportal.core.exceptions import ChunkingWarning
from cvportal.models.chunk import ChunkSection, ContentChunk
from cvportal.models.cv import ParsedCV

logger = logging.getLogger(__name__)


class CVChunker:
    """Chunk CV sections into token-bounded windows."""

    def __init__(
        self,
        max_chunk_tokens: int = 500,
        overlap_tokens: int = 50,
        words_per_token: float = 0.75,
        max_chunks_per_item: int = 100,
    ) -> None:
        """
        Initialize chunker.

        Args:
            max_chunk_tokens: Estimated token budget per chunk
            overlap_tokens: Estimated tokens shared by consecutive windows
            words_per_token: Heuristic ratio used for token estimation
            max_chunks_per_item: Safety cap on windows per section item

        Raises:
            ValueError: When a size parameter is out of range
        """
        if max_chunk_tokens < 1:
            raise ValueError("max_chunk_tokens must be positive")
        if overlap_tokens < 0:
            raise ValueError("overlap_tokens must not be negative")
        if words_per_token <= 0:
            raise ValueError("words_per_token must be positive")
        if max_chunks_per_item < 1:
            raise ValueError("max_chunks_per_item must be positive")

        self.max_chunk_tokens = max_chunk_tokens
        self.overlap_tokens = overlap_tokens
        self.words_per_token = words_per_token
        self.max_chunks_per_item = max_chunks_per_item

    @property
    def window_words(self) -> int:
        return max(math.floor(self.max_chunk_tokens * self.words_per_token), 1)

    @property
    def overlap_words(self) -> int:
        return math.floor(self.overlap_tokens * self.words_per_token)

    def estimate_tokens(self, text: str) -> int:
        """Rough token count: ``ceil(words / words_per_token)``."""
        words = len(text.split())
        return math.ceil(words / self.words_per_token)

    def chunk(self, cv: ParsedCV) -> list[ContentChunk]:
        """
        Chunk every populated CV section in fixed section order.

        Array sections are chunked item by item so one oversized entry
        cannot crowd out the others.

        Args:
            cv: Parsed CV

        Returns:
            list[ContentChunk]: Chunks in section, item, window order
        """
        chunks: list[ContentChunk] = []

        for section_key, section, value in cv.sections():
            if isinstance(value, list):
                for item_index, item in enumerate(value):
                    chunks.extend(
                        self._chunk_text(
                            owner_id=cv.id,
                            text=item.extract_text(),
                            section=section,
                            section_key=section_key,
                            item_index=item_index,
                        )
                    )
            else:
                text = value if isinstance(value, str) else value.extract_text()
                chunks.extend(
                    self._chunk_text(
                        owner_id=cv.id,
                        text=text,
                        section=section,
                        section_key=section_key,
                        item_index=None,
                    )
                )

        logger.info(
            f"{__name__}:chunk - Created {len(chunks)} chunks",
            extra={"owner_id": cv.id, "sections": sorted({c.section.value for c in chunks})},
        )
        return chunks

    def split_text(self, text: str) -> list[str]:
        """
        Split text into overlapping word windows.

        Text within the token budget comes back whole (trimmed). Longer
        text is windowed; the loop stops at ``max_chunks_per_item`` or when
        the window stops advancing, issuing a ChunkingWarning.

        Args:
            text: Free text

        Returns:
            list[str]: Window texts, empty for blank input
        """
        stripped = text.strip()
        if not stripped:
            return []
        if self.estimate_tokens(stripped) <= self.max_chunk_tokens:
            return [stripped]

        words = stripped.split()
        window = self.window_words
        step = window - self.overlap_words
        pieces: list[str] = []
        start = 0

        while start < len(words):
            if len(pieces) >= self.max_chunks_per_item:
                self._warn(
                    f"Chunk cap of {self.max_chunks_per_item} reached; "
                    f"{len(words) - start} words dropped"
                )
                break

            pieces.append(" ".join(words[start:start + window]))
            if start + window >= len(words):
                break

            next_start = start + step
            if next_start <= start:
                self._warn(
                    f"Chunk window stopped advancing (window={window} words, "
                    f"overlap={self.overlap_words} words)"
                )
                break
            start = next_start

        return pieces

    def _chunk_text(
        self,
        owner_id: str,
        text: str,
        section: ChunkSection,
        section_key: str,
        item_index: int | None,
    ) -> list[ContentChunk]:
        base_id = section_key if item_index is None else f"{section_key}_{item_index}"
        return [
            ContentChunk(
                id=f"{base_id}_chunk_{chunk_index}",
                owner_id=owner_id,
                content=piece,
                section=section,
                section_key=section_key,
                item_index=item_index,
                chunk_index=chunk_index,
                token_count_estimate=self.estimate_tokens(piece),
            )
            for chunk_index, piece in enumerate(self.split_text(text))
        ]

    def _warn(self, message: str) -> None:
        logger.warning(f"{__name__}:split_text - {message}")
        warnings.warn(message, ChunkingWarning, stacklevel=3)
