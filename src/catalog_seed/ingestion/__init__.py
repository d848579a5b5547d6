"""CSV ingestion: read, normalize, load and report on the catalog seed files."""

from catalog_seed.ingestion.entities import ENTITIES, EntitySpec, get_entity
from catalog_seed.ingestion.loader import LoadResult, clear, clear_order, ensure_schema, load
from catalog_seed.ingestion.normalize import FieldSpec, RowRejected
from catalog_seed.ingestion.reader import MissingInputFile, read_rows, require_files, take
from catalog_seed.ingestion.report import IngestSummary, count_rows, format_summary

__all__ = [
    "ENTITIES",
    "EntitySpec",
    "FieldSpec",
    "IngestSummary",
    "LoadResult",
    "MissingInputFile",
    "RowRejected",
    "clear",
    "clear_order",
    "count_rows",
    "ensure_schema",
    "format_summary",
    "get_entity",
    "load",
    "read_rows",
    "require_files",
    "take",
]
