"""
Confidence scorer.

Pure function of the retrieved results and the generated answer:

- semantic: supporting passage count, saturating at ``semantic_saturation``
- factual: share of passages whose similarity exceeds ``factual_threshold``
- completeness: answer length, saturating at ``completeness_saturation``
- overall: weighted sum of the three

All values are clamped to [0, 1] and rounded half up to two decimals.

Dependencies: pydantic
System role: Answer confidence for chat responses
"""

import math

from pydantic import BaseModel, Field, model_validator

from cvportal.models.retrieval import ConfidenceScore, RetrievalResult


def round_half_up(value: float, digits: int = 2) -> float:
    """Round halves away from zero, matching the scores reported to clients."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def _clamp(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


class ConfidenceWeights(BaseModel):
    """Weights of the three sub-scores; must sum to 1."""

    semantic: float = Field(default=0.4, ge=0.0, le=1.0)
    factual: float = Field(default=0.4, ge=0.0, le=1.0)
    completeness: float = Field(default=0.2, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _sum_to_one(self) -> "ConfidenceWeights":
        total = self.semantic + self.factual + self.completeness
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"confidence weights must sum to 1, got {total}")
        return self


class ConfidenceScorer:
    """Compute ConfidenceScore from retrieval signal and answer length."""

    def __init__(
        self,
        weights: ConfidenceWeights | None = None,
        semantic_saturation: int = 3,
        factual_threshold: float = 0.8,
        completeness_saturation: int = 200,
    ) -> None:
        if semantic_saturation < 1 or completeness_saturation < 1:
            raise ValueError("saturation points must be positive")
        self.weights = weights or ConfidenceWeights()
        self.semantic_saturation = semantic_saturation
        self.factual_threshold = factual_threshold
        self.completeness_saturation = completeness_saturation

    def score(
        self,
        results: list[RetrievalResult],
        query: str,
        response_text: str,
    ) -> ConfidenceScore:
        """
        Score one answer.

        ``query`` is accepted for interface stability; the current formula
        does not depend on it.
        """
        count = len(results)
        semantic = _clamp(count / self.semantic_saturation)
        reliable = sum(1 for r in results if r.similarity > self.factual_threshold)
        factual = _clamp(reliable / max(count, 1))
        completeness = _clamp(len(response_text or "") / self.completeness_saturation)

        overall = _clamp(
            self.weights.semantic * semantic
            + self.weights.factual * factual
            + self.weights.completeness * completeness
        )

        return ConfidenceScore(
            overall=round_half_up(overall),
            semantic=round_half_up(semantic),
            factual=round_half_up(factual),
            completeness=round_half_up(completeness),
        )
