"""
Storage utility.

File I/O helpers for rating datasets and scoreboard metadata.
"""

import json
import os
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file I/O for datasets and reports.

    Handles:
    - Rating datasets (JSON list of businesses)
    - Scoreboard metadata (output/scoreboard_*_metadata.json)
    """

    def __init__(self, output_root: str):
        """
        Initialize storage manager.

        Args:
            output_root: Directory for generated reports
        """
        self.output_root = output_root
        os.makedirs(self.output_root, exist_ok=True)

        logger.info(f"Initialized StorageManager with output_root={output_root}")

    def load_dataset(self, filepath: str) -> Optional[List[Dict]]:
        """
        Load a business dataset.

        Args:
            filepath: Path to a JSON file holding a list of business records

        Returns:
            List of business dicts, or None if the file doesn't exist

        Raises:
            ValueError: If the file is not a JSON list
        """
        if not os.path.exists(filepath):
            logger.warning(f"No dataset found at {filepath}")
            return None

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse dataset {filepath}: {e}")
            raise ValueError(f"Dataset {filepath} is not valid JSON: {e}") from e

        if not isinstance(records, list):
            raise ValueError(
                f"Dataset {filepath} must contain a list of businesses, "
                f"got {type(records).__name__}"
            )

        logger.debug(f"Loaded {len(records)} business records from {filepath}")
        return records

    def save_dataset(self, records: List[Dict], filepath: str) -> None:
        """
        Save a business dataset.

        Args:
            records: Business dicts with ISO-8601 date strings
            filepath: Destination JSON path
        """
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2)
            logger.info(f"Saved {len(records)} business records to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save dataset to {filepath}: {e}")
            raise

    def save_metadata(
        self,
        metadata: Dict,
        filename: str,
        directory: Optional[str] = None
    ) -> str:
        """
        Save report metadata next to the report.

        Args:
            metadata: JSON-serializable dict
            filename: File name of the metadata file
            directory: Target directory, defaults to output_root

        Returns:
            Path to the written file
        """
        directory = directory or self.output_root
        os.makedirs(directory, exist_ok=True)
        filepath = os.path.join(directory, filename)

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(metadata, f, indent=2)
            logger.info(f"Metadata saved to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save metadata to {filepath}: {e}")
            raise

        return filepath
