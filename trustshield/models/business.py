"""
Business and rating data models.

Represents a business and the raw ratings ingested for it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from trustshield.models.results import TrustResult


@dataclass(frozen=True)
class Rating:
    """
    A single user rating. Immutable once ingested.
    """
    score: int  # 1-5 star rating
    date: datetime  # When the rating was left

    def __post_init__(self):
        # Validate score
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise ValueError(f"Invalid score: {self.score!r}. Must be an integer")
        if not (1 <= self.score <= 5):
            raise ValueError(f"Invalid score: {self.score}. Must be 1-5")

        # Validate date
        if not isinstance(self.date, datetime):
            raise ValueError(f"Invalid date: {self.date!r}. Must be a datetime")


@dataclass
class Business:
    """
    A rated business.

    `name` is the identity key within a dataset. `trust` is the only derived
    field; it is written by the trust score model and overwritten on every
    evaluation.
    """
    name: str
    category: str
    ratings: List[Rating] = field(default_factory=list)
    trust: Optional[TrustResult] = field(default=None, compare=False, repr=False)

    @property
    def rating_count(self) -> int:
        return len(self.ratings)

    @property
    def scores(self) -> List[int]:
        return [r.score for r in self.ratings]

    @property
    def raw_average(self) -> Optional[float]:
        return self.trust.raw_average if self.trust else None

    @property
    def entropy_normalized(self) -> Optional[float]:
        return self.trust.entropy_normalized if self.trust else None

    @property
    def final_trust_score(self) -> Optional[float]:
        return self.trust.final_trust_score if self.trust else None
