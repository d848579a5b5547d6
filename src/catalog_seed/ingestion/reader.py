"""Streaming CSV reader for the seed files."""

import csv
import logging
from itertools import islice
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class MissingInputFile(FileNotFoundError):
    """A seed file the run needs is not on disk."""


def require_files(paths: Iterable[str | Path]) -> None:
    """Raise MissingInputFile naming every path that does not exist."""
    missing = [str(p) for p in paths if not Path(p).is_file()]
    if missing:
        raise MissingInputFile(f"Input file(s) not found: {', '.join(missing)}")


def read_rows(file_path: str | Path) -> Iterator[dict[str, str]]:
    """Return a lazy iterator of header-keyed rows from a CSV file.

    The existence check happens here, before the first row is requested;
    the file itself is opened on first iteration and closed when the
    iterator is exhausted.
    """
    path = Path(file_path)
    require_files([path])
    return _stream(path)


def _stream(path: Path) -> Iterator[dict[str, str]]:
    # undecodable bytes become U+FFFD so one bad row cannot end the stream
    with open(path, newline="", encoding="utf-8-sig", errors="replace") as f:
        reader = csv.DictReader(f)
        for row in reader:
            if all(value is None or str(value).strip() == "" for value in row.values()):
                continue
            yield {key: value for key, value in row.items() if key is not None}
    logger.debug("Finished reading %s", path)


def take(rows: Iterable[dict[str, str]], limit: int | None) -> Iterator[dict[str, str]]:
    """Yield at most ``limit`` rows, the first ones in file order.

    Rows past the cutoff are never read from disk.
    """
    if limit is None:
        return iter(rows)
    if limit < 0:
        raise ValueError(f"Cutoff must be non-negative, got {limit}")
    return islice(rows, limit)
