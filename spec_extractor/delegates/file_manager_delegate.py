# spec_extractor/delegates/file_manager_delegate.py
import json
import logging
from pathlib import Path
from typing import List
from ..models import SpecRecord

logger = logging.getLogger(__name__)

class FileManagerDelegate:
    """Writes extracted records to disk when the caller asks for a file."""
    def __init__(self, output_path: Path):
        self.output_path = output_path
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def save_records(self, records: List[SpecRecord]) -> Path:
        """Saves all records as one JSON array, in extraction order."""
        try:
            logger.debug("Attempting to save %d records to JSON.", len(records))
            with self.output_path.open("w", encoding="utf-8") as f:
                json.dump([r.to_dict() for r in records], f, indent=2, ensure_ascii=False)
            logger.info("Saved %d records to: %s", len(records), self.output_path)
            return self.output_path
        except OSError as e:
            logger.error("Failed to save records to %s: %s", self.output_path, e, exc_info=True)
            raise
