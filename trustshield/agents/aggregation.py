"""
Scoreboard Aggregator.

Builds the ranked scoreboard table from per-business scores and exports it.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pandas as pd

from trustshield.models.results import BusinessScore
from trustshield.utils.storage import StorageManager

logger = logging.getLogger(__name__)

SCOREBOARD_COLUMNS = [
    'Business', 'Category', 'Trust Score', 'Band', 'Color', 'Fraud %',
    'High Risk', 'Average', 'Entropy %', 'Volatility', 'Ratings'
]


class ScoreboardAggregator:
    """
    Aggregates business scores into a filtered, sorted scoreboard.

    Applies the presentation policy:
    - Trust band: high / medium / low by score threshold
    - Fraud flag: confidence strictly above the flag threshold
    """

    def __init__(
        self,
        storage: StorageManager,
        high_threshold: int = 80,
        medium_threshold: int = 50,
        fraud_threshold: float = 0.75,
        band_colors: Optional[Dict[str, str]] = None
    ):
        """
        Initialize scoreboard aggregator.

        Args:
            storage: Storage manager for metadata output
            high_threshold: Minimum trust score of the "high" band
            medium_threshold: Minimum trust score of the "medium" band
            fraud_threshold: Fraud confidence above which a business is flagged
            band_colors: Display color per band
        """
        self.storage = storage
        self.high_threshold = high_threshold
        self.medium_threshold = medium_threshold
        self.fraud_threshold = fraud_threshold
        self.band_colors = band_colors or {
            "high": "#10b981",
            "medium": "#f59e0b",
            "low": "#ef4444"
        }

    def trust_band(self, trust_score: int) -> str:
        """Band name for a trust score."""
        if trust_score >= self.high_threshold:
            return "high"
        if trust_score >= self.medium_threshold:
            return "medium"
        return "low"

    def is_high_risk(self, score: BusinessScore) -> bool:
        """True when the fraud confidence exceeds the flag threshold."""
        return (
            score.fraud_confidence is not None
            and score.fraud_confidence > self.fraud_threshold
        )

    def build_table(
        self,
        scores: List[BusinessScore],
        category: str = "all",
        sort: str = "high"
    ) -> pd.DataFrame:
        """
        Build the scoreboard DataFrame.

        Args:
            scores: Scores of every business in the dataset
            category: Category to keep, or "all"
            sort: "high" for best first, "low" for worst first

        Returns:
            DataFrame with SCOREBOARD_COLUMNS, one row per business
        """
        if sort not in ("high", "low"):
            raise ValueError(f"Invalid sort: {sort}. Must be 'high' or 'low'")

        if category != "all":
            scores = [s for s in scores if s.category == category]

        rows = []
        for s in scores:
            band = self.trust_band(s.trust_score)
            rows.append({
                'Business': s.name,
                'Category': s.category,
                'Trust Score': s.trust_score,
                'Band': band,
                'Color': self.band_colors[band],
                'Fraud %': None if s.fraud_confidence is None else round(s.fraud_confidence * 100, 1),
                'High Risk': self.is_high_risk(s),
                'Average': round(s.raw_average, 2),
                'Entropy %': round(s.entropy_normalized * 100, 1),
                'Volatility': None if s.volatility is None else round(s.volatility, 2),
                'Ratings': s.rating_count
            })

        df = pd.DataFrame(rows, columns=SCOREBOARD_COLUMNS)

        if df.empty:
            logger.warning(f"No businesses match category '{category}'")
            return df

        # Stable sort keeps dataset order among equal scores
        df = df.sort_values(
            'Trust Score',
            ascending=(sort == "low"),
            kind='mergesort'
        ).reset_index(drop=True)

        return df

    def generate_scoreboard(
        self,
        scores: List[BusinessScore],
        global_average: float,
        category: str = "all",
        sort: str = "high",
        output_dir: Optional[str] = None
    ) -> str:
        """
        Build the scoreboard and save it as CSV with a metadata file.

        Returns:
            Path to generated CSV file
        """
        df = self.build_table(scores, category=category, sort=sort)

        output_dir = output_dir or self.storage.output_root
        os.makedirs(output_dir, exist_ok=True)

        stamp = self._unique_stamp(output_dir)
        output_path = os.path.join(output_dir, f"scoreboard_{stamp}.csv")
        df.to_csv(output_path, index=False)

        flagged = int(df['High Risk'].sum()) if not df.empty else 0
        logger.info(
            f"Scoreboard saved to {output_path} "
            f"({len(df)} businesses, {flagged} flagged high risk)"
        )

        band_counts = df['Band'].value_counts().to_dict() if not df.empty else {}
        metadata = {
            "category": category,
            "sort": sort,
            "total_businesses": len(df),
            "flagged_high_risk": flagged,
            "bands": {band: int(band_counts.get(band, 0)) for band in ("high", "medium", "low")},
            "global_average": global_average,
            "generated_at": datetime.now(timezone.utc).isoformat()
        }

        self.storage.save_metadata(
            metadata,
            f"scoreboard_{stamp}_metadata.json",
            directory=output_dir
        )

        return output_path

    def _unique_stamp(self, output_dir: str) -> str:
        """Timestamp for report file names, suffixed when already taken."""
        base = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S_%f")
        stamp = base
        counter = 1
        while os.path.exists(os.path.join(output_dir, f"scoreboard_{stamp}.csv")):
            stamp = f"{base}_{counter}"
            counter += 1
        return stamp

    def breakdown(self, score: BusinessScore) -> Dict:
        """
        Analysis summary of one business.

        Returns:
            Dict with display-ready figures (percentages already scaled)
        """
        return {
            "name": score.name,
            "category": score.category,
            "trust_score": score.trust_score,
            "band": self.trust_band(score.trust_score),
            "average_rating": round(score.raw_average, 2),
            "entropy_percent": round(score.entropy_normalized * 100, 1),
            "volatility": None if score.volatility is None else round(score.volatility, 2),
            "fraud_percent": None if score.fraud_confidence is None else round(score.fraud_confidence * 100, 1),
            "high_risk": self.is_high_risk(score),
            "ratings": score.rating_count
        }
