"""
Ingestion Agent.

Turns raw business records into Business objects.
Supports loading a JSON dataset and generating mock data for demos.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

import pandas as pd

from trustshield.models.business import Business, Rating
from trustshield.utils.storage import StorageManager

logger = logging.getLogger(__name__)


def parse_date(value) -> datetime:
    """
    Parse a rating date into a naive datetime.

    Accepts ISO-8601 strings, any other string pandas can parse, and
    date/datetime objects. Timezone-aware values are converted to UTC and
    made naive so every rating date compares with every other.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("Missing rating date")

    try:
        timestamp = pd.Timestamp(value)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Unparseable rating date: {value!r}") from e

    if pd.isna(timestamp):
        raise ValueError(f"Unparseable rating date: {value!r}")

    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert("UTC").tz_localize(None)

    return timestamp.to_pydatetime()


class DatasetIngestionAgent:
    """
    Builds Business objects from JSON-shaped records:

        {"name": ..., "category": ..., "ratings": [{"score": 1-5, "date": ...}]}

    For testing/demo:
    - Use mock mode to generate a deterministic synthetic dataset
    """

    def __init__(
        self,
        storage: Optional[StorageManager] = None,
        use_mock_data: bool = False,
        mock_business_count: int = 12,
        mock_ratings_per_business: int = 40,
        mock_start_date: str = "2024-01-01"
    ):
        """
        Initialize ingestion agent.

        Args:
            storage: Storage manager used to read dataset files
            use_mock_data: If True, generate mock businesses instead of reading files
            mock_business_count: Number of mock businesses to generate
            mock_ratings_per_business: Ratings per mock business
            mock_start_date: Date of the first mock rating (YYYY-MM-DD)
        """
        self.storage = storage
        self.use_mock_data = use_mock_data
        self.mock_business_count = mock_business_count
        self.mock_ratings_per_business = mock_ratings_per_business
        self.mock_start_date = mock_start_date

        if use_mock_data:
            logger.info("Initialized DatasetIngestionAgent in MOCK mode")
        else:
            logger.info("Initialized DatasetIngestionAgent in FILE mode")

    def fetch_businesses(self, dataset_path: Optional[str] = None) -> List[Business]:
        """
        Fetch the businesses to score.

        Args:
            dataset_path: JSON dataset path (ignored in mock mode)

        Returns:
            List of Business objects

        Raises:
            FileNotFoundError: If the dataset file doesn't exist
            ValueError: If any record is malformed
        """
        if self.use_mock_data:
            return self.parse_businesses(self.generate_mock_records())

        if not dataset_path:
            raise ValueError("dataset_path is required when mock data is disabled")
        if self.storage is None:
            raise ValueError("A StorageManager is required to read dataset files")

        records = self.storage.load_dataset(dataset_path)
        if records is None:
            raise FileNotFoundError(f"Dataset not found: {dataset_path}")

        return self.parse_businesses(records)

    def parse_businesses(self, records: Iterable[Dict]) -> List[Business]:
        """
        Convert raw records into Business objects.

        Raises:
            ValueError: If a record is malformed or a business name repeats
        """
        businesses = []
        seen_names = set()

        for index, record in enumerate(records):
            business = self._parse_business(record, index)

            if business.name in seen_names:
                raise ValueError(f"Duplicate business name: '{business.name}'")
            seen_names.add(business.name)

            businesses.append(business)

        logger.info(
            f"Ingested {len(businesses)} businesses "
            f"({sum(b.rating_count for b in businesses)} ratings)"
        )
        return businesses

    def _parse_business(self, record: Dict, index: int) -> Business:
        """Parse one business record."""
        if not isinstance(record, dict):
            raise ValueError(f"Business record {index} must be an object")

        try:
            name = record["name"]
            category = record["category"]
        except KeyError as e:
            raise ValueError(f"Business record {index} missing field {e}") from e

        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Business record {index} has an empty name")

        raw_ratings = record.get("ratings") or []
        ratings = []
        for r_index, raw in enumerate(raw_ratings):
            try:
                ratings.append(Rating(score=raw["score"], date=parse_date(raw["date"])))
            except (KeyError, TypeError) as e:
                raise ValueError(
                    f"Rating {r_index} of '{name}' is malformed: {e}"
                ) from e
            except ValueError as e:
                raise ValueError(f"Rating {r_index} of '{name}': {e}") from e

        return Business(name=name, category=str(category), ratings=ratings)

    def generate_mock_records(self) -> List[Dict]:
        """
        Generate synthetic business records for demos.

        Creates realistic patterns:
        - Honest businesses with ratings spread over several stars
        - Suspicious businesses ending in a burst of five-star ratings
        - Polarized businesses swinging between 1 and 5 stars
        """
        start = datetime.strptime(self.mock_start_date, "%Y-%m-%d")

        # (name, category, rating cycle, burst)
        templates = [
            ("Harbor Bistro", "restaurant", [4, 5, 3, 4, 4, 5, 2, 4], False),
            ("Golden Spoon", "restaurant", [5, 5, 5, 5, 4, 5, 5, 5], True),
            ("Corner Deli", "restaurant", [3, 4, 2, 3, 5, 1, 4, 3], False),
            ("Bright Smile Dental", "health", [5, 4, 5, 4, 5, 3, 5, 4], False),
            ("QuickFix Clinic", "health", [1, 5, 1, 5, 2, 5, 1, 5], False),
            ("Peak Fitness", "fitness", [4, 4, 3, 5, 4, 2, 4, 5], False),
            ("Iron Temple Gym", "fitness", [2, 3, 2, 1, 3, 2, 4, 2], True),
            ("Velvet Salon", "beauty", [5, 4, 4, 5, 3, 4, 5, 4], False),
            ("Glow Studio", "beauty", [3, 3, 4, 3, 2, 3, 3, 4], True),
            ("Metro Auto Repair", "automotive", [2, 1, 3, 2, 4, 1, 2, 3], False),
            ("Shiny Wheels", "automotive", [5, 5, 4, 5, 5, 5, 5, 4], True),
            ("Page Turner Books", "retail", [4, 5, 4, 3, 5, 4, 4, 5], False),
        ]

        records = []
        for i in range(self.mock_business_count):
            name, category, cycle, burst = templates[i % len(templates)]
            if i >= len(templates):
                name = f"{name} #{i // len(templates) + 1}"

            ratings = []
            for j in range(self.mock_ratings_per_business):
                score = cycle[(j + i) % len(cycle)]
                # Suspicious businesses close with a run of five-star ratings
                if burst and j >= self.mock_ratings_per_business - 10:
                    score = 5
                date = start + timedelta(days=j * 3 + i)
                ratings.append({"score": score, "date": date.strftime("%Y-%m-%d")})

            records.append({"name": name, "category": category, "ratings": ratings})

        logger.info(f"Generated {len(records)} mock businesses")
        return records
