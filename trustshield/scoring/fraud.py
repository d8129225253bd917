"""
Fraud Confidence Simulator.

Fixed-weight two-layer feed-forward formula over the extracted features.
The weights are hand-chosen constants; nothing here is trained.
"""

import logging
import math
from typing import Optional, Tuple

from trustshield.models.business import Business
from trustshield.models.results import FeatureVector, TrustResult
from trustshield.scoring.features import FeatureExtractor

logger = logging.getLogger(__name__)


def sigmoid(x: float) -> float:
    return 1 / (1 + math.exp(-x))


def simulated_fraud_score(features: FeatureVector) -> float:
    """
    Fraud confidence between 0 and 1 for a feature vector.

    hidden1 = five_star_ratio*0.8 + recent_five_ratio*1.2 + (1-entropy)*0.6
    hidden2 = hidden1*0.7 + (0.5-volatility)*0.9
    output  = sigmoid(hidden2), clamped to [0, 1]
    """
    hidden1 = (
        (features.five_star_ratio * 0.8) +
        (features.recent_five_ratio * 1.2) +
        ((1 - features.entropy) * 0.6)
    )

    hidden2 = (
        (hidden1 * 0.7) +
        ((0.5 - features.volatility) * 0.9)
    )

    output = sigmoid(hidden2)
    return min(max(output, 0.0), 1.0)


class FraudConfidenceSimulator:
    """
    Predicts fraud confidence for a business.

    Requires the business's trust score to be evaluated first; the entropy
    feature comes from that evaluation.
    """

    def __init__(self, feature_extractor: Optional[FeatureExtractor] = None):
        self.feature_extractor = feature_extractor or FeatureExtractor()

    def evaluate(
        self,
        business: Business,
        trust_result: Optional[TrustResult] = None
    ) -> Tuple[FeatureVector, float]:
        """
        Extract features and predict fraud confidence in one pass.

        Returns:
            (features, fraud confidence)

        Raises:
            EvaluationOrderError: If no current trust result is available
            InsufficientDataError: If the business has no ratings
        """
        features = self.feature_extractor.extract(business, trust_result)
        confidence = simulated_fraud_score(features)

        logger.debug(f"Fraud confidence for '{business.name}': {confidence:.4f}")
        return features, confidence

    def predict(
        self,
        business: Business,
        trust_result: Optional[TrustResult] = None
    ) -> float:
        """Predict fraud confidence for a business."""
        _, confidence = self.evaluate(business, trust_result)
        return confidence


_default_simulator = FraudConfidenceSimulator()


def predict_fraud_confidence(
    business: Business,
    trust_result: Optional[TrustResult] = None
) -> float:
    """Predict fraud confidence with the default feature extractor."""
    return _default_simulator.predict(business, trust_result)
