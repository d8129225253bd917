"""
Scoring Orchestrator.

Coordinates dataset loading and the per-business scoring pipeline.
"""

import logging
from typing import Iterable, List, Optional

from trustshield.agents.aggregation import ScoreboardAggregator
from trustshield.agents.ingestion import DatasetIngestionAgent
from trustshield.models.business import Business
from trustshield.models.results import BusinessScore
from trustshield.scoring.features import FeatureExtractor
from trustshield.scoring.fraud import FraudConfidenceSimulator
from trustshield.scoring.statistics import Dataset, load_dataset
from trustshield.scoring.trust_model import TrustScoreModel
from trustshield.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


class ScoringOrchestrator:
    """
    Orchestrates trust and fraud scoring.

    Per dataset: Global Statistics (once)
    Per business: 1. Trust Score Model → 2. Feature Extraction
    → 3. Fraud Confidence Simulation

    Trust evaluation always runs first and its result is handed explicitly
    to the later stages.
    """

    def __init__(self, output_root: Optional[str] = None, use_mock_data: Optional[bool] = None):
        """
        Initialize scoring orchestrator.

        Args:
            output_root: Directory for reports, defaults to settings.OUTPUT_ROOT
            use_mock_data: Generate mock businesses, defaults to settings.USE_MOCK_DATA
        """
        logger.info("Initializing scoring components...")

        self.storage = StorageManager(str(output_root or settings.OUTPUT_ROOT))

        self.ingestion_agent = DatasetIngestionAgent(
            storage=self.storage,
            use_mock_data=settings.USE_MOCK_DATA if use_mock_data is None else use_mock_data,
            mock_business_count=settings.MOCK_BUSINESS_COUNT,
            mock_ratings_per_business=settings.MOCK_RATINGS_PER_BUSINESS,
            mock_start_date=settings.MOCK_START_DATE
        )

        self.trust_model = TrustScoreModel(
            prior_weight=settings.PRIOR_WEIGHT,
            rating_scale=settings.RATING_SCALE,
            categories=settings.RATING_CATEGORIES,
            bayes_weight=settings.BAYES_WEIGHT,
            entropy_weight=settings.ENTROPY_WEIGHT
        )

        self.feature_extractor = FeatureExtractor(recent_window=settings.RECENT_WINDOW)
        self.fraud_simulator = FraudConfidenceSimulator(self.feature_extractor)

        self.scoreboard = ScoreboardAggregator(
            storage=self.storage,
            high_threshold=settings.HIGH_TRUST_THRESHOLD,
            medium_threshold=settings.MEDIUM_TRUST_THRESHOLD,
            fraud_threshold=settings.FRAUD_FLAG_THRESHOLD,
            band_colors=settings.BAND_COLORS
        )

        self.dataset: Optional[Dataset] = None

        logger.info("Scoring pipeline initialized successfully")

    def load_dataset(self, businesses: Iterable[Business]) -> Dataset:
        """
        Load businesses and recompute the global average.

        Replaces any previously loaded dataset.

        Raises:
            InsufficientDataError: If the businesses hold no ratings at all
        """
        self.dataset = load_dataset(businesses)
        return self.dataset

    def load_from_source(self, dataset_path: Optional[str] = None) -> Dataset:
        """Fetch businesses through the ingestion agent and load them."""
        businesses = self.ingestion_agent.fetch_businesses(dataset_path)
        return self.load_dataset(businesses)

    def export_mock_dataset(self, filepath: str) -> int:
        """
        Write the generated mock dataset as a JSON file.

        The file can be edited and fed back through --dataset.

        Returns:
            Number of businesses written
        """
        records = self.ingestion_agent.generate_mock_records()
        self.storage.save_dataset(records, filepath)
        return len(records)

    def score_business(self, business: Business) -> BusinessScore:
        """
        Run the full pipeline for one business.

        A business without ratings scores 0 with undefined (None) volatility
        and fraud confidence.

        Raises:
            RuntimeError: If no dataset has been loaded
        """
        dataset = self._require_dataset()

        trust = self.trust_model.evaluate(business, dataset.global_average)

        if business.rating_count == 0:
            volatility = None
            fraud_confidence = None
        else:
            features, fraud_confidence = self.fraud_simulator.evaluate(business, trust)
            volatility = features.volatility

        return BusinessScore(
            name=business.name,
            category=business.category,
            trust_score=trust.score,
            fraud_confidence=fraud_confidence,
            raw_average=trust.raw_average,
            entropy_normalized=trust.entropy_normalized,
            volatility=volatility,
            rating_count=business.rating_count
        )

    def score_all(self) -> List[BusinessScore]:
        """Score every business of the loaded dataset once, in dataset order."""
        dataset = self._require_dataset()

        scores = [self.score_business(b) for b in dataset.businesses]

        logger.info(f"Scored {len(scores)} businesses")
        return scores

    def breakdown(self, name: str) -> Optional[dict]:
        """
        Analysis summary of a single business by name.

        Returns:
            Breakdown dict, or None if the business is not in the dataset
        """
        dataset = self._require_dataset()

        business = dataset.get_business(name)
        if business is None:
            logger.warning(f"Business not found: '{name}'")
            return None

        return self.scoreboard.breakdown(self.score_business(business))

    def run(
        self,
        dataset_path: Optional[str] = None,
        category: str = "all",
        sort: str = "high",
        output_dir: Optional[str] = None
    ) -> str:
        """
        Load, score and export a scoreboard.

        Returns:
            Path to generated scoreboard CSV
        """
        dataset = self.load_from_source(dataset_path)

        if category != "all" and category not in dataset.categories():
            logger.warning(f"Category '{category}' not present in dataset")

        scores = self.score_all()
        output_path = self.scoreboard.generate_scoreboard(
            scores=scores,
            global_average=dataset.global_average,
            category=category,
            sort=sort,
            output_dir=output_dir
        )

        logger.info(f"Scoring complete! Scoreboard: {output_path}")
        return output_path

    def _require_dataset(self) -> Dataset:
        if self.dataset is None:
            raise RuntimeError("No dataset loaded; call load_dataset() first")
        return self.dataset
