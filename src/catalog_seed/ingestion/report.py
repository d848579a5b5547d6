"""Post-run row counts and the console summary."""

from dataclasses import dataclass, field
from typing import Iterable

from catalog_seed.ingestion.entities import EntitySpec
from catalog_seed.service import DatabaseService


@dataclass
class EntityStats:
    """What happened to one entity's file during a run."""

    read: int = 0
    rejected: int = 0
    inserted: int = 0
    failed: int = 0
    persisted: int = 0

    @property
    def skipped(self) -> int:
        return self.rejected + self.failed


@dataclass
class IngestSummary:
    entities: dict[str, EntityStats] = field(default_factory=dict)

    def stats(self, name: str) -> EntityStats:
        return self.entities.setdefault(name, EntityStats())

    @property
    def counts(self) -> dict[str, int]:
        return {name: stats.persisted for name, stats in self.entities.items()}

    @property
    def total_skipped(self) -> int:
        return sum(stats.skipped for stats in self.entities.values())


def count_rows(service: DatabaseService, entities: Iterable[EntitySpec]) -> dict[str, int]:
    """Count persisted rows per entity. Read-only."""
    return {spec.name: service.count(spec.table) for spec in entities}


def format_summary(summary: IngestSummary) -> str:
    width = max((len(name) for name in summary.entities), default=0)
    lines = ["Database summary:"]
    for name, stats in summary.entities.items():
        line = f"  {name.ljust(width)}  {stats.persisted:>8}"
        if stats.skipped:
            line += f"  (skipped {stats.skipped}: {stats.rejected} invalid, {stats.failed} rejected by store)"
        lines.append(line)
    return "\n".join(lines)
