"""
Rating volatility.

Population standard deviation of a business's scores. Large swings can
point to incentivized or coordinated rating bursts.
"""

import math

from trustshield.models.business import Business
from trustshield.scoring.errors import InsufficientDataError


def calculate_volatility(business: Business) -> float:
    """
    Population standard deviation of the business's rating scores.

    Raises:
        InsufficientDataError: If the business has no ratings
    """
    scores = business.scores
    if not scores:
        raise InsufficientDataError(
            f"Cannot compute volatility for '{business.name}': no ratings"
        )

    mean = sum(scores) / len(scores)
    variance = sum((s - mean) ** 2 for s in scores) / len(scores)
    return math.sqrt(variance)
