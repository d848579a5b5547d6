"""End-to-end seeding run: pre-flight, clear, load each entity, count."""

import logging
from typing import Iterable, Iterator

from catalog_seed.config import IngestSettings
from catalog_seed.ingestion.entities import EntitySpec
from catalog_seed.ingestion.loader import clear, clear_order, ensure_schema, load, load_order
from catalog_seed.ingestion.normalize import RowRejected
from catalog_seed.ingestion.reader import read_rows, require_files, take
from catalog_seed.ingestion.report import EntityStats, IngestSummary, count_rows
from catalog_seed.service import DatabaseService

logger = logging.getLogger(__name__)


def normalized_records(
    spec: EntitySpec, rows: Iterable[dict[str, str]], stats: EntityStats
) -> Iterator[tuple]:
    """Normalize rows lazily, counting and skipping the ones that can't be used."""
    for row_num, row in enumerate(rows, start=2):
        stats.read += 1
        try:
            yield spec.normalize_row(row)
        except RowRejected as e:
            stats.rejected += 1
            logger.warning("Skipping %s row %d: %s", spec.name, row_num, e)


def ingest_entity(
    service: DatabaseService, spec: EntitySpec, settings: IngestSettings, stats: EntityStats
) -> None:
    path = settings.path_for(spec)
    cutoff = settings.cutoff_for(spec)
    logger.info(
        "Loading %s from %s%s", spec.name, path, f" (first {cutoff} rows)" if cutoff is not None else ""
    )
    rows = take(read_rows(path), cutoff)
    result = load(
        service,
        spec,
        normalized_records(spec, rows, stats),
        batch_size=settings.batch_size,
        mode=settings.insert_mode,
    )
    stats.inserted += result.inserted
    stats.failed += result.failed
    logger.info(
        "Loaded %d %s (%d invalid rows, %d rejected by store)",
        stats.inserted,
        spec.name,
        stats.rejected,
        stats.failed,
    )


def run_ingestion(service: DatabaseService, settings: IngestSettings) -> IngestSummary:
    """Reset and reload the selected entities from ``settings.data_dir``.

    Every input file is checked before anything is written, so a missing file
    leaves the database untouched. After that the run is one insert
    transaction per batch (or per record); nothing is rolled back across them.
    """
    entities = settings.selected()
    require_files(settings.path_for(spec) for spec in entities)

    ensure_schema(service)
    clear(service, entities)

    summary = IngestSummary()
    for spec in entities:
        ingest_entity(service, spec, settings, summary.stats(spec.name))

    # dependents emptied by the clear phase are reported too
    affected = load_order(clear_order(entities))
    for name, persisted in count_rows(service, affected).items():
        summary.stats(name).persisted = persisted
    logger.info("Ingestion complete: %d rows skipped", summary.total_skipped)
    return summary
