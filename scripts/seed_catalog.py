"""CLI entry point for seeding the catalog database from CSV files.

Usage:
    python -m scripts.seed_catalog --db-url sqlite:///catalog.db --data-dir ../database
        [--batch-size 100] [--mode batch|row] [--only products users]
        [--cutoff users=500] [--no-cutoffs]

Settings not given on the command line come from CATALOG_DB_URL,
CATALOG_DATA_DIR, CATALOG_BATCH_SIZE and CATALOG_INSERT_MODE.
"""

import argparse
import logging
import sys

from catalog_seed import create_service
from catalog_seed.config import IngestSettings, parse_cutoff
from catalog_seed.ingestion.entities import ENTITIES
from catalog_seed.ingestion.loader import INSERT_MODES
from catalog_seed.ingestion.reader import MissingInputFile
from catalog_seed.ingestion.report import format_summary
from catalog_seed.pipeline import run_ingestion

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load the e-commerce CSV dataset into the database")
    parser.add_argument("--db-url", help="Database URL (sqlite:/// or postgresql://)")
    parser.add_argument("--data-dir", help="Directory holding the CSV files")
    parser.add_argument("--batch-size", type=int, help="Records per insert batch")
    parser.add_argument("--mode", choices=INSERT_MODES, help="Insert whole batches or one row at a time")
    parser.add_argument(
        "--only",
        nargs="+",
        choices=[spec.name for spec in ENTITIES],
        help="Reload only these entities (their dependents are cleared too)",
    )
    parser.add_argument(
        "--cutoff",
        action="append",
        default=[],
        metavar="ENTITY=N",
        help="Override an entity's sampling cutoff ('none' disables it)",
    )
    parser.add_argument("--no-cutoffs", action="store_true", help="Load every row of every file")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def settings_from_args(args: argparse.Namespace) -> IngestSettings:
    cutoffs: dict[str, int | None] = {}
    if args.no_cutoffs:
        cutoffs = {spec.name: None for spec in ENTITIES}
    cutoffs.update(parse_cutoff(value) for value in args.cutoff)
    return IngestSettings.from_env(
        db_url=args.db_url,
        data_dir=args.data_dir,
        batch_size=args.batch_size,
        insert_mode=args.mode,
        cutoffs=cutoffs,
        entities=tuple(args.only or ()),
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        settings = settings_from_args(args)
        service = create_service(settings.db_url)
    except ValueError as e:
        parser.error(str(e))

    try:
        service.connect()
        summary = run_ingestion(service, settings)
    except MissingInputFile as e:
        logger.error("%s", e)
        return 1
    except Exception:
        logger.exception("Ingestion failed")
        return 1
    finally:
        service.close()

    print(format_summary(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
