"""Run settings, read from the environment and overridden by CLI flags."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from catalog_seed.ingestion.entities import ENTITIES, EntitySpec, get_entity
from catalog_seed.ingestion.loader import INSERT_MODES

DEFAULT_DB_URL = "sqlite:///catalog.db"
DEFAULT_DATA_DIR = "database"
DEFAULT_BATCH_SIZE = 100


@dataclass
class IngestSettings:
    db_url: str = DEFAULT_DB_URL
    data_dir: Path = Path(DEFAULT_DATA_DIR)
    batch_size: int = DEFAULT_BATCH_SIZE
    insert_mode: str = "batch"
    # entity name -> limit; None disables the cutoff for that entity
    cutoffs: dict[str, int | None] = field(default_factory=dict)
    # entity names to load; empty means all
    entities: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.insert_mode not in INSERT_MODES:
            raise ValueError(
                f"Unknown insert mode {self.insert_mode!r} (expected one of: {', '.join(INSERT_MODES)})"
            )
        for name, limit in self.cutoffs.items():
            get_entity(name)
            if limit is not None and limit < 0:
                raise ValueError(f"Cutoff for {name} must be non-negative, got {limit}")
        for name in self.entities:
            get_entity(name)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "IngestSettings":
        """Build settings from CATALOG_* variables; keyword overrides win."""
        env = os.environ if environ is None else environ
        values = {
            "db_url": env.get("CATALOG_DB_URL", DEFAULT_DB_URL),
            "data_dir": env.get("CATALOG_DATA_DIR", DEFAULT_DATA_DIR),
            "batch_size": int(env.get("CATALOG_BATCH_SIZE", DEFAULT_BATCH_SIZE)),
            "insert_mode": env.get("CATALOG_INSERT_MODE", "batch"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def selected(self) -> list[EntitySpec]:
        """Entities this run loads, in load order."""
        if not self.entities:
            return list(ENTITIES)
        wanted = set(self.entities)
        return [spec for spec in ENTITIES if spec.name in wanted]

    def cutoff_for(self, spec: EntitySpec) -> int | None:
        return self.cutoffs.get(spec.name, spec.cutoff)

    def path_for(self, spec: EntitySpec) -> Path:
        return self.data_dir / spec.filename


def parse_cutoff(value: str) -> tuple[str, int | None]:
    """Parse an ``ENTITY=N`` (or ``ENTITY=none``) cutoff override."""
    name, sep, limit = value.partition("=")
    if not sep or not name:
        raise ValueError(f"Expected ENTITY=N, got {value!r}")
    get_entity(name)
    if limit.lower() == "none":
        return name, None
    return name, int(limit)
