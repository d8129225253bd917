"""
Scoring result models.

Immutable records produced by the scoring pipeline: the trust evaluation,
the extracted fraud features and the per-business score a renderer consumes.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Tuple


@dataclass(frozen=True)
class TrustResult:
    """
    Output of the trust score model for one business.
    """
    score: int  # Rounded trust score, 0-100
    raw_average: float  # Plain mean of the rating scores
    bayesian_average: float  # Mean smoothed toward the dataset average
    entropy_normalized: float  # Shannon entropy / ln(5), 0-1
    final_trust_score: float  # Pre-rounding score
    rating_count: int  # Number of ratings the result was computed from
    ratings_key: Tuple = ()  # The exact ratings the result was computed from

    @classmethod
    def empty(cls) -> "TrustResult":
        """Result for a business without ratings."""
        return cls(
            score=0,
            raw_average=0.0,
            bayesian_average=0.0,
            entropy_normalized=0.0,
            final_trust_score=0.0,
            rating_count=0
        )


@dataclass(frozen=True)
class FeatureVector:
    """
    Fraud features extracted from a business. Ephemeral, never stored.
    """
    five_star_ratio: float
    volatility: float
    entropy: float
    recent_five_ratio: float


@dataclass(frozen=True)
class BusinessScore:
    """
    Full read-only scoring result for one business.

    `fraud_confidence` and `volatility` are None for a business without
    ratings: both are undefined there, while the trust score is 0.
    """
    name: str
    category: str
    trust_score: int
    fraud_confidence: Optional[float]
    raw_average: float
    entropy_normalized: float
    volatility: Optional[float]
    rating_count: int

    @property
    def has_ratings(self) -> bool:
        return self.rating_count > 0

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return asdict(self)
