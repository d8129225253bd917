"""
Global rating statistics.

Computes the dataset-wide average rating that Bayesian smoothing blends
toward, and packages it with the businesses as a Dataset.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from trustshield.models.business import Business
from trustshield.scoring.errors import InsufficientDataError

logger = logging.getLogger(__name__)


def compute_global_average(businesses: Iterable[Business]) -> float:
    """
    Compute the mean score over every rating of every business.

    Args:
        businesses: Businesses in the dataset

    Returns:
        Arithmetic mean of all rating scores

    Raises:
        InsufficientDataError: If the dataset holds no ratings at all
    """
    total = 0
    count = 0
    for business in businesses:
        for rating in business.ratings:
            total += rating.score
            count += 1

    if count == 0:
        raise InsufficientDataError(
            "Cannot compute global average: dataset contains no ratings"
        )

    return total / count


@dataclass(frozen=True)
class Dataset:
    """
    A loaded set of businesses together with its global average rating.

    Reloading data produces a new Dataset; the global average is never
    updated in place.
    """
    businesses: Tuple[Business, ...]
    global_average: float

    def __len__(self) -> int:
        return len(self.businesses)

    @property
    def total_ratings(self) -> int:
        return sum(b.rating_count for b in self.businesses)

    def get_business(self, name: str) -> Optional[Business]:
        """Retrieve business by name. Returns None if not found."""
        for business in self.businesses:
            if business.name == name:
                return business
        return None

    def categories(self) -> List[str]:
        """Distinct categories in first-seen order."""
        seen = []
        for business in self.businesses:
            if business.category not in seen:
                seen.append(business.category)
        return seen


def load_dataset(businesses: Iterable[Business]) -> Dataset:
    """
    Build a Dataset and compute its global average.

    Raises:
        InsufficientDataError: If the businesses hold no ratings at all
    """
    businesses = tuple(businesses)
    global_average = compute_global_average(businesses)

    dataset = Dataset(businesses=businesses, global_average=global_average)
    logger.info(
        f"Loaded dataset: {len(dataset)} businesses, "
        f"{dataset.total_ratings} ratings, global average {global_average:.3f}"
    )
    return dataset
