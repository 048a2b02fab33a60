"""CSV data source shared by the repositories.

Reads header-driven text files (the ``*.txt`` resources are plain CSV)
into dictionaries. Cells are stripped and empty cells become None, so
repositories can treat "absent" uniformly.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ...domain.errors import DataSourceError

Row = Dict[str, Optional[str]]


@dataclass
class CSVDataSource:
    """Load rows from CSV files.

    Attributes:
        encoding: Text encoding of the files
    """

    encoding: str = "utf-8-sig"
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def rows(self, path: Path) -> List[Row]:
        """Read every data row of ``path``.

        Raises:
            DataSourceError: If the file cannot be opened or decoded.
        """
        try:
            with Path(path).open(newline="", encoding=self.encoding) as f:
                reader = csv.DictReader(f)
                rows = [self._normalize(row) for row in reader]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise DataSourceError(
                f"Failed to read {path}",
                file_path=str(path),
                cause=e,
            ) from e

        self._logger.debug(
            "CSV resource read",
            extra={"path": str(path), "rows": len(rows)},
        )
        return rows

    @staticmethod
    def _normalize(row: Dict[Optional[str], Optional[str]]) -> Row:
        normalized: Row = {}
        for key, value in row.items():
            # Extra cells beyond the header land under a None key.
            if key is None:
                continue
            cleaned = value.strip() if isinstance(value, str) else None
            normalized[key.strip()] = cleaned or None
        return normalized
