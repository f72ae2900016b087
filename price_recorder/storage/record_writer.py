"""
Append-only CSV storage for price observations, one file per asset.
"""

import logging
import time
from pathlib import Path
from typing import Final

from ..shared.models import Failure, FailureKind, PriceRecord, PriceSource
from .settings import storage_settings

RECORD_HEADER: Final[str] = "timestamp_unix,asset,price_usd"

logger = logging.getLogger(__name__)


def now_unix() -> int:
    """Current unix time in whole seconds, clamped at the epoch."""
    return max(0, int(time.time()))


class RecordWriter:
    """Appends price records to per-asset CSV files."""

    def __init__(self, data_dir: str | Path | None = None):
        """Initialize the writer."""
        self.data_dir = Path(
            data_dir if data_dir is not None else storage_settings.data_dir
        )

    def path_for(self, source: PriceSource) -> Path:
        """Record file location for a source."""
        return self.data_dir / source.file_name

    @staticmethod
    def is_empty(path: Path) -> bool:
        """A file that is missing or has zero length needs a header."""
        try:
            return path.stat().st_size == 0
        except OSError:
            return True

    def persist(
        self, source: PriceSource, price: float, timestamp: int | None = None
    ) -> PriceRecord | Failure:
        """
        Append one observation to the source's record file.

        The header is written only when the file is found missing or empty, so
        a file holds exactly one header however many times it is appended to.

        Args:
            source: The source the price was fetched from
            price: The fetched price
            timestamp: Unix seconds to record; defaults to now

        Returns:
            The written PriceRecord, or a PERSISTENCE Failure naming the
            operation and path
        """
        path = self.path_for(source)
        record = PriceRecord(
            timestamp=now_unix() if timestamp is None else timestamp,
            asset=source.asset,
            price=price,
        )
        needs_header = self.is_empty(path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = path.open("a", encoding="utf-8", newline="")
        except OSError as e:
            return Failure(kind=FailureKind.PERSISTENCE, detail=f"open {path}: {e}")

        # buffered writes may only fail when the handle is flushed on close
        try:
            with handle:
                if needs_header:
                    handle.write(f"{RECORD_HEADER}\n")
                handle.write(record.to_line())
        except OSError as e:
            return Failure(kind=FailureKind.PERSISTENCE, detail=f"write {path}: {e}")

        logger.debug(f"Appended {record.asset} record to {path}")
        return record
