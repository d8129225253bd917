"""
Feature Extractor.

Derives fraud features from a business and its trust evaluation.
"""

import logging
from typing import Optional

from trustshield.models.business import Business
from trustshield.models.results import FeatureVector, TrustResult
from trustshield.scoring.errors import EvaluationOrderError
from trustshield.scoring.volatility import calculate_volatility

logger = logging.getLogger(__name__)


def resolve_trust_result(
    business: Business,
    trust_result: Optional[TrustResult] = None
) -> TrustResult:
    """
    Pick the trust result to read from: the explicit one, else the cache.

    Raises:
        EvaluationOrderError: If the business was never evaluated, or the
            result was computed from different ratings
    """
    result = trust_result if trust_result is not None else business.trust

    if result is None:
        raise EvaluationOrderError(
            f"Trust score for '{business.name}' must be evaluated before "
            f"extracting features"
        )

    if result.rating_count != business.rating_count:
        raise EvaluationOrderError(
            f"Stale trust result for '{business.name}': computed from "
            f"{result.rating_count} ratings, business has {business.rating_count}"
        )

    if result.ratings_key != tuple(business.ratings):
        raise EvaluationOrderError(
            f"Stale trust result for '{business.name}': ratings changed since "
            f"the trust score was evaluated"
        )

    return result


class FeatureExtractor:
    """
    Extracts the features consumed by the fraud confidence simulator:
    - Five-star ratio over all ratings
    - Rating volatility
    - Normalized entropy (from the trust evaluation)
    - Five-star ratio over the most recent ratings
    """

    def __init__(self, recent_window: int = 10):
        """
        Initialize feature extractor.

        Args:
            recent_window: Number of most recent ratings forming the recent window
        """
        if recent_window <= 0:
            raise ValueError(f"Invalid recent window: {recent_window}. Must be positive")
        self.recent_window = recent_window

    def extract(
        self,
        business: Business,
        trust_result: Optional[TrustResult] = None
    ) -> FeatureVector:
        """
        Extract features for a business.

        Args:
            business: Business to analyze
            trust_result: Trust evaluation of the business. Defaults to the
                result cached on the business.

        Returns:
            FeatureVector

        Raises:
            EvaluationOrderError: If no current trust result is available
            InsufficientDataError: If the business has no ratings
        """
        trust = resolve_trust_result(business, trust_result)

        volatility = calculate_volatility(business)
        scores = business.scores
        five_star_ratio = scores.count(5) / len(scores)

        features = FeatureVector(
            five_star_ratio=five_star_ratio,
            volatility=volatility,
            entropy=trust.entropy_normalized,
            recent_five_ratio=self.recent_five_ratio(business)
        )

        logger.debug(f"Features for '{business.name}': {features}")
        return features

    def recent_five_ratio(self, business: Business) -> float:
        """
        Five-star ratio among the most recent ratings.

        Ratings are ordered by date ascending; ties keep their original order.
        Returns 0.0 for a business without ratings.
        """
        ordered = sorted(business.ratings, key=lambda r: r.date)
        recent = ordered[-self.recent_window:]

        if not recent:
            return 0.0

        return sum(1 for r in recent if r.score == 5) / len(recent)


_default_extractor = FeatureExtractor()


def extract_features(
    business: Business,
    trust_result: Optional[TrustResult] = None
) -> FeatureVector:
    """Extract features with the default recent window."""
    return _default_extractor.extract(business, trust_result)
