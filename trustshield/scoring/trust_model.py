"""
Trust Score Model.

Combines a Bayesian-smoothed average with rating distribution entropy
into a 0-100 trust score.
"""

import logging
import math
from collections import Counter

from trustshield.models.business import Business
from trustshield.models.results import TrustResult

logger = logging.getLogger(__name__)


class TrustScoreModel:
    """
    Scores a business from its ratings and the dataset-wide average.

    The score blends two signals:
    1. Bayesian average: the business's mean pulled toward the global
       average, harder the fewer ratings it has
    2. Normalized entropy: how evenly ratings spread over 1-5 stars

    Evaluating a business caches the TrustResult on it (overwriting any
    previous result), so repeated evaluation of unchanged ratings is
    idempotent.
    """

    def __init__(
        self,
        prior_weight: int = 15,
        rating_scale: int = 5,
        categories: int = 5,
        bayes_weight: float = 80,
        entropy_weight: float = 20
    ):
        """
        Initialize trust score model.

        Args:
            prior_weight: Bayesian prior weight m, in ratings
            rating_scale: Maximum star rating
            categories: Number of histogram buckets (1..categories stars)
            bayes_weight: Points of the score driven by the smoothed average
            entropy_weight: Points of the score driven by entropy
        """
        if prior_weight <= 0:
            raise ValueError(f"Invalid prior weight: {prior_weight}. Must be positive")

        self.prior_weight = prior_weight
        self.rating_scale = rating_scale
        self.categories = categories
        self.bayes_weight = bayes_weight
        self.entropy_weight = entropy_weight
        self.max_score = bayes_weight + entropy_weight

    def evaluate(self, business: Business, global_average: float) -> TrustResult:
        """
        Evaluate the trust score of a business.

        Args:
            business: Business to score
            global_average: Mean rating across the whole dataset

        Returns:
            TrustResult, also cached on business.trust
        """
        scores = business.scores
        v = len(scores)

        if v == 0:
            logger.debug(f"No ratings for '{business.name}', trust score is 0")
            result = TrustResult.empty()
            business.trust = result
            return result

        raw_average = sum(scores) / v
        bayes = self.bayesian_average(raw_average, v, global_average)
        entropy = self.normalized_entropy(scores)

        final = (bayes / self.rating_scale) * self.bayes_weight + entropy * self.entropy_weight

        result = TrustResult(
            score=self._round_score(final),
            raw_average=raw_average,
            bayesian_average=bayes,
            entropy_normalized=entropy,
            final_trust_score=final,
            rating_count=v,
            ratings_key=tuple(business.ratings)
        )
        business.trust = result

        logger.debug(
            f"Trust for '{business.name}': score={result.score} "
            f"(R={raw_average:.2f}, bayes={bayes:.2f}, entropy={entropy:.3f}, v={v})"
        )
        return result

    def bayesian_average(self, raw_average: float, count: int, global_average: float) -> float:
        """Blend the raw average toward the global average by sample size."""
        m = self.prior_weight
        return (count / (count + m)) * raw_average + (m / (count + m)) * global_average

    def normalized_entropy(self, scores) -> float:
        """
        Shannon entropy of the star histogram, divided by its maximum.

        Returns 0.0 when all scores fall in one bucket and 1.0 when every
        bucket holds the same share.
        """
        v = len(scores)
        if v == 0:
            return 0.0

        counts = Counter(scores)
        entropy = 0.0
        for star in range(1, self.categories + 1):
            c = counts.get(star, 0)
            if c > 0:
                p = c / v
                entropy -= p * math.log(p)

        return entropy / math.log(self.categories)

    def _round_score(self, final: float) -> int:
        # Halves round up, not to even
        rounded = math.floor(final + 0.5)
        return int(min(max(rounded, 0), self.max_score))


_default_model = TrustScoreModel()


def evaluate_trust(business: Business, global_average: float) -> TrustResult:
    """Evaluate a business with the default model parameters."""
    return _default_model.evaluate(business, global_average)
