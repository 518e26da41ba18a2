"""
Reader for report texts already extracted from PDF/Excel sources.
"""

from pathlib import Path
from typing import Optional
import logging

from ..config import ReconConfig
from ..models.source import SourceDocument
from ..utils.exceptions import SourceReadError

logger = logging.getLogger(__name__)


class SourceReader:
    """Loads extracted report texts into SourceDocument objects."""

    def __init__(self, config: Optional[ReconConfig] = None):
        """
        Initialize the reader with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config or ReconConfig()

    def read(self, key: str, file_path: Path) -> SourceDocument:
        """
        Read one report text.

        Args:
            key: Canonical source key (e.g. "ledger")
            file_path: Path to the plain-text file

        Returns:
            Source document with the full text

        Raises:
            SourceReadError: If the file cannot be read or decoded
        """
        logger.info(f"Reading {key} text: {file_path}")

        try:
            with open(file_path, "r", encoding=self.config.input.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {key} text: {e}")
            raise SourceReadError(f"Failed to read {key} text {file_path}: {e}") from e

        if not text.strip():
            logger.warning(f"{key} text is empty: {file_path}")

        return SourceDocument(
            key=key,
            text=text,
            original_name=Path(file_path).name,
            kind="text",
        )

    def read_many(self, paths_by_key: dict[str, Path]) -> dict[str, SourceDocument]:
        """
        Read several report texts.

        Args:
            paths_by_key: Source key to file path

        Returns:
            Source key to source document, in input order
        """
        known = set(self.config.sources.keys)
        documents: dict[str, SourceDocument] = {}

        for key, path in paths_by_key.items():
            if key not in known:
                logger.warning(
                    f"Source '{key}' is not one of {sorted(known)}; it will not be compared"
                )
            documents[key] = self.read(key, path)

        return documents
