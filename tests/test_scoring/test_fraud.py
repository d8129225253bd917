"""
Unit tests for the Fraud Confidence Simulator.
"""

import math
import pytest
from datetime import datetime, timedelta

from trustshield.models.business import Business, Rating
from trustshield.models.results import FeatureVector
from trustshield.scoring.errors import EvaluationOrderError
from trustshield.scoring.fraud import (
    FraudConfidenceSimulator,
    predict_fraud_confidence,
    sigmoid,
    simulated_fraud_score
)
from trustshield.scoring.trust_model import TrustScoreModel


def make_business(scores, name="Test Business"):
    """Create a business with one rating per day."""
    start = datetime(2024, 6, 1)
    ratings = [Rating(score=s, date=start + timedelta(days=i)) for i, s in enumerate(scores)]
    return Business(name=name, category="restaurant", ratings=ratings)


def expected_score(five, volatility, entropy, recent):
    """Reference evaluation of the fixed-weight formula."""
    hidden1 = five * 0.8 + recent * 1.2 + (1 - entropy) * 0.6
    hidden2 = hidden1 * 0.7 + (0.5 - volatility) * 0.9
    return 1 / (1 + math.exp(-hidden2))


def test_sigmoid():
    """Test sigmoid midpoint and symmetry."""
    assert sigmoid(0) == pytest.approx(0.5)
    assert sigmoid(2.0) + sigmoid(-2.0) == pytest.approx(1.0)


def test_simulated_fraud_score_all_fives():
    """Test the formula for a pure five-star profile."""
    features = FeatureVector(
        five_star_ratio=1.0,
        volatility=0.0,
        entropy=0.0,
        recent_five_ratio=1.0
    )

    # hidden1 = 2.6, hidden2 = 1.82 + 0.45 = 2.27
    assert simulated_fraud_score(features) == pytest.approx(1 / (1 + math.exp(-2.27)))


def test_simulated_fraud_score_spread_profile():
    """Test the formula for an evenly spread, volatile profile."""
    features = FeatureVector(
        five_star_ratio=0.2,
        volatility=math.sqrt(2),
        entropy=1.0,
        recent_five_ratio=0.2
    )

    result = simulated_fraud_score(features)

    assert result == pytest.approx(expected_score(0.2, math.sqrt(2), 1.0, 0.2))
    assert result < 0.5


def test_predict_worked_example():
    """Test a uniform five-star business is flagged above 0.75."""
    business = make_business([5, 5, 5, 5, 5])
    trust = TrustScoreModel().evaluate(business, global_average=3.0)

    confidence = predict_fraud_confidence(business, trust)

    assert confidence == pytest.approx(1 / (1 + math.exp(-2.27)))
    assert confidence > 0.75


def test_predict_bounds():
    """Test fraud confidence stays within 0-1 for varied businesses."""
    model = TrustScoreModel()
    simulator = FraudConfidenceSimulator()

    for scores in ([1], [1, 5] * 20, [3, 3, 4], [5] * 30, [1, 2, 3, 4, 5] * 3):
        business = make_business(scores)
        trust = model.evaluate(business, global_average=3.2)

        confidence = simulator.predict(business, trust)

        assert 0.0 <= confidence <= 1.0


def test_predict_before_trust_evaluation():
    """Test that predicting before trust evaluation raises."""
    business = make_business([5, 5, 4])

    with pytest.raises(EvaluationOrderError):
        predict_fraud_confidence(business)


def test_predict_is_deterministic():
    """Test repeated predictions are identical."""
    business = make_business([5, 4, 5, 1, 5, 5])
    TrustScoreModel().evaluate(business, global_average=3.0)

    assert predict_fraud_confidence(business) == predict_fraud_confidence(business)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
