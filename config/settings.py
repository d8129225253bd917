"""
Configuration settings for TrustShield.

Centralized configuration for the scoring pipeline, reporting and CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("TRUSTSHIELD_DATA_ROOT", PROJECT_ROOT / "data"))
OUTPUT_ROOT = Path(os.getenv("TRUSTSHIELD_OUTPUT_ROOT", PROJECT_ROOT / "output"))
DEFAULT_DATASET_PATH = DATA_ROOT / "businesses.json"

# Trust Score Model
PRIOR_WEIGHT = 15  # Bayesian prior weight (m), in ratings
RATING_SCALE = 5  # Maximum star rating
RATING_CATEGORIES = 5  # Histogram buckets for entropy (1..5 stars)
BAYES_WEIGHT = 80  # Share of the score from the smoothed average
ENTROPY_WEIGHT = 20  # Share of the score from distribution entropy

# Feature Extraction
RECENT_WINDOW = 10  # Most recent ratings used for the recent five-star ratio

# Presentation policy (consumed by the scoreboard)
HIGH_TRUST_THRESHOLD = 80
MEDIUM_TRUST_THRESHOLD = 50
FRAUD_FLAG_THRESHOLD = 0.75  # Flag strictly above this confidence
BAND_COLORS = {
    "high": "#10b981",
    "medium": "#f59e0b",
    "low": "#ef4444"
}

# Ingestion
USE_MOCK_DATA = os.getenv("TRUSTSHIELD_USE_MOCK_DATA", "false").lower() == "true"
MOCK_BUSINESS_COUNT = 12  # Number of mock businesses to generate
MOCK_RATINGS_PER_BUSINESS = 40
MOCK_START_DATE = "2024-01-01"

# Reporting
DEFAULT_CATEGORY_FILTER = "all"
DEFAULT_SORT = "high"  # "high" (descending) or "low" (ascending)

# Logging
LOG_LEVEL = os.getenv("TRUSTSHIELD_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "trustshield.log"
