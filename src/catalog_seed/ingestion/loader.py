"""Two-phase table loading: clear in dependency order, then insert in batches.

No transaction spans more than one batch, and a batch the store rejects is
replayed one record per transaction, so a bad record costs only itself.
Only record-level errors (constraint or data violations) are absorbed; a
connection or operational failure ends the run.
"""

import logging
from dataclasses import dataclass
from graphlib import TopologicalSorter
from typing import Iterable, Iterator

from catalog_seed.ingestion.entities import ENTITIES, ENTITIES_BY_NAME, EntitySpec
from catalog_seed.service import DatabaseService

logger = logging.getLogger(__name__)

INSERT_MODES = ("batch", "row")


@dataclass
class LoadResult:
    inserted: int = 0
    failed: int = 0


def load_order(entities: Iterable[EntitySpec] = ENTITIES) -> list[EntitySpec]:
    """Return the given entities parents-first."""
    wanted = {spec.name for spec in entities}
    graph = {spec.name: set(spec.depends_on) for spec in ENTITIES}
    return [ENTITIES_BY_NAME[name] for name in TopologicalSorter(graph).static_order() if name in wanted]


def dependents(names: Iterable[str]) -> set[str]:
    """Return the names plus every entity that references them, transitively."""
    closure = set(names)
    changed = True
    while changed:
        changed = False
        for spec in ENTITIES:
            if spec.name not in closure and closure.intersection(spec.depends_on):
                closure.add(spec.name)
                changed = True
    return closure


def clear_order(entities: Iterable[EntitySpec]) -> list[EntitySpec]:
    """Entities to delete before reloading ``entities``, children before parents."""
    closure = dependents(spec.name for spec in entities)
    return list(reversed(load_order(ENTITIES_BY_NAME[name] for name in closure)))


def ensure_schema(service: DatabaseService, entities: Iterable[EntitySpec] = ENTITIES) -> None:
    """Create the tables if they don't exist, parents first."""
    for spec in load_order(entities):
        service.execute_ddl(spec.ddl)


def clear(service: DatabaseService, entities: Iterable[EntitySpec]) -> list[str]:
    """Delete all rows of ``entities`` and their dependents.

    Returns the cleared table names in the order they were emptied.
    """
    cleared = []
    for spec in clear_order(entities):
        service.delete_all(spec.table)
        cleared.append(spec.table)
    logger.info("Cleared tables: %s", ", ".join(cleared))
    return cleared


def batched(records: Iterable[tuple], batch_size: int) -> Iterator[list[tuple]]:
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    batch: list[tuple] = []
    for record in records:
        batch.append(record)
        if len(batch) >= batch_size:
            yield batch
            batch = []
    if batch:
        yield batch


def insert_rows(service: DatabaseService, spec: EntitySpec, batch: list[tuple]) -> LoadResult:
    """Insert each record in its own transaction, logging and skipping failures."""
    result = LoadResult()
    for record in batch:
        try:
            with service.transaction():
                service.batch_insert(spec.table, spec.columns, [record])
        except service.record_errors as e:
            result.failed += 1
            logger.warning(
                "Skipping %s %s=%s: %s", spec.name, spec.key, spec.record_key(record), e
            )
        else:
            result.inserted += 1
    return result


def insert_batch(service: DatabaseService, spec: EntitySpec, batch: list[tuple]) -> LoadResult:
    """Insert a batch in one statement; on rejection fall back to per-record inserts."""
    try:
        with service.transaction():
            service.batch_insert(spec.table, spec.columns, batch)
    except service.record_errors as e:
        logger.debug("Batch insert into %s rejected (%s), retrying row by row", spec.table, e)
        return insert_rows(service, spec, batch)
    return LoadResult(inserted=len(batch))


def load(
    service: DatabaseService,
    spec: EntitySpec,
    records: Iterable[tuple],
    batch_size: int = 100,
    mode: str = "batch",
) -> LoadResult:
    """Insert normalized records for one entity.

    Returns how many records were inserted and how many the store rejected.
    """
    if mode not in INSERT_MODES:
        raise ValueError(f"Unknown insert mode {mode!r} (expected one of: {', '.join(INSERT_MODES)})")
    insert = insert_batch if mode == "batch" else insert_rows

    total = LoadResult()
    for i, batch in enumerate(batched(records, batch_size)):
        result = insert(service, spec, batch)
        total.inserted += result.inserted
        total.failed += result.failed
        logger.info(
            "%s batch %d: inserted %d, failed %d (total: %d)",
            spec.name,
            i + 1,
            result.inserted,
            result.failed,
            total.inserted,
        )
    return total
