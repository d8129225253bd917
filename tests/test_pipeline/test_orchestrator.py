"""
Integration tests for the Scoring Orchestrator.
"""

import os
import pytest
from datetime import datetime, timedelta
from unittest.mock import patch

from trustshield.models.business import Business, Rating
from trustshield.orchestrator import ScoringOrchestrator
from trustshield.scoring.errors import InsufficientDataError
from trustshield.scoring.volatility import calculate_volatility


def make_business(name, scores, category="restaurant"):
    """Create a business with one rating per day."""
    start = datetime(2024, 6, 1)
    ratings = [Rating(score=s, date=start + timedelta(days=i)) for i, s in enumerate(scores)]
    return Business(name=name, category=category, ratings=ratings)


@pytest.fixture
def orchestrator(tmp_path):
    return ScoringOrchestrator(output_root=str(tmp_path / "output"), use_mock_data=False)


@pytest.fixture
def businesses():
    # Global average of all ten ratings is exactly 3.0
    return [
        make_business("All Fives", [5, 5, 5, 5, 5]),
        make_business("All Ones", [1, 1, 1, 1, 1], category="health"),
        make_business("Brand New", [])
    ]


def test_load_dataset(orchestrator, businesses):
    """Test loading computes the global average."""
    dataset = orchestrator.load_dataset(businesses)

    assert dataset.global_average == pytest.approx(3.0)
    assert orchestrator.dataset is dataset


def test_load_dataset_without_ratings(orchestrator):
    """Test that a dataset with no ratings cannot be loaded."""
    with pytest.raises(InsufficientDataError):
        orchestrator.load_dataset([make_business("Brand New", [])])


def test_score_before_load(orchestrator):
    """Test scoring without a dataset raises."""
    with pytest.raises(RuntimeError):
        orchestrator.score_business(make_business("A", [5]))


def test_score_business_worked_example(orchestrator, businesses):
    """Test the full result for the five-star business."""
    orchestrator.load_dataset(businesses)

    result = orchestrator.score_business(businesses[0])

    assert result.trust_score == 56
    assert result.raw_average == pytest.approx(5.0)
    assert result.entropy_normalized == pytest.approx(0.0)
    assert result.volatility == pytest.approx(0.0)
    assert result.fraud_confidence > 0.75
    assert businesses[0].trust.score == 56


def test_score_business_computes_volatility_once(orchestrator, businesses):
    """Test volatility is taken from the extracted features."""
    orchestrator.load_dataset(businesses)
    mixed = make_business("Mixed", [1, 3, 5, 5])

    with patch(
        'trustshield.scoring.features.calculate_volatility',
        wraps=calculate_volatility
    ) as mock_volatility:
        result = orchestrator.score_business(mixed)

    assert mock_volatility.call_count == 1
    assert result.volatility == pytest.approx(calculate_volatility(mixed))


def test_score_business_without_ratings(orchestrator, businesses):
    """Test a zero-rating business scores 0 without raising."""
    orchestrator.load_dataset(businesses)

    result = orchestrator.score_business(businesses[2])

    assert result.trust_score == 0
    assert result.fraud_confidence is None
    assert result.volatility is None
    assert result.has_ratings is False


def test_score_all_bounds_and_idempotence(orchestrator, businesses):
    """Test every score is bounded and repeat scoring is identical."""
    orchestrator.load_dataset(businesses)

    first = orchestrator.score_all()
    second = orchestrator.score_all()

    assert first == second
    assert [s.name for s in first] == ["All Fives", "All Ones", "Brand New"]
    for score in first:
        assert 0 <= score.trust_score <= 100
        if score.has_ratings:
            assert 0.0 <= score.fraud_confidence <= 1.0


def test_reload_resets_global_average(orchestrator, businesses):
    """Test that loading new data replaces the global average."""
    orchestrator.load_dataset(businesses)
    before = orchestrator.score_business(businesses[0]).trust_score

    orchestrator.load_dataset([businesses[0]])
    after = orchestrator.score_business(businesses[0]).trust_score

    assert orchestrator.dataset.global_average == pytest.approx(5.0)
    assert after > before


def test_breakdown(orchestrator, businesses):
    """Test breakdown lookup by name."""
    orchestrator.load_dataset(businesses)

    breakdown = orchestrator.breakdown("All Fives")

    assert breakdown["trust_score"] == 56
    assert breakdown["high_risk"] is True
    assert orchestrator.breakdown("Nobody") is None


def test_export_mock_dataset(orchestrator, tmp_path):
    """Test the mock dataset can be saved and loaded back."""
    dataset_path = str(tmp_path / "data" / "mock.json")

    count = orchestrator.export_mock_dataset(dataset_path)
    dataset = orchestrator.load_from_source(dataset_path)

    assert count == len(dataset)
    assert dataset.get_business("Golden Spoon") is not None
    records = orchestrator.ingestion_agent.generate_mock_records()
    assert [b.name for b in dataset.businesses] == [r["name"] for r in records]
    assert dataset.businesses[0].scores == [r["score"] for r in records[0]["ratings"]]


def test_run_with_mock_data(tmp_path):
    """Test the end-to-end run on mock data."""
    orchestrator = ScoringOrchestrator(output_root=str(tmp_path / "output"), use_mock_data=True)

    output_path = orchestrator.run(category="restaurant", sort="low")

    assert os.path.exists(output_path)
    assert os.path.exists(output_path.replace('.csv', '_metadata.json'))


def test_run_with_dataset_file(tmp_path):
    """Test the end-to-end run on the bundled sample dataset."""
    dataset_path = os.path.join(os.path.dirname(__file__), "..", "..", "data", "businesses.json")
    orchestrator = ScoringOrchestrator(output_root=str(tmp_path / "output"), use_mock_data=False)

    output_path = orchestrator.run(dataset_path=dataset_path)

    assert os.path.exists(output_path)
    assert len(orchestrator.dataset) == 5


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
