"""
Command-line entry point for the transaction ETL pipeline.

Usage:
    txn-etl [input_csv] [output_db]
    python -m txn_etl.cli data/transactions.csv data/transactions.db

``output_db`` may be a SQLite file path or a full SQLAlchemy async URL.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog

from txn_etl.core.config import get_settings
from txn_etl.core.errors import PipelineError
from txn_etl.core.logging import configure_logging
from txn_etl.pipeline import EtlPipeline

logger = structlog.get_logger()


def resolve_database_url(target: str) -> str:
    """Turn a bare file path into a sqlite+aiosqlite URL, creating its directory."""
    if "://" in target:
        return target
    path = Path(target)
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{path}"


def print_banner(input_path: str, database_url: str) -> None:
    print("+----------------------------------------------+")
    print("|     Customer Transaction ETL Pipeline        |")
    print("+----------------------------------------------+")
    print(f"  Input  : {input_path}")
    print(f"  Output : {database_url}\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    args = list(sys.argv[1:] if argv is None else argv)

    if args and args[0] in ("-h", "--help"):
        print("Usage: txn-etl [input_csv] [output_db]")
        print("\nDefaults come from INPUT_PATH and DATABASE_URL (env or .env).")
        print("\nExamples:")
        print("  txn-etl")
        print("  txn-etl data/transactions.csv data/transactions.db")
        return 0

    settings = get_settings()
    configure_logging(settings.ENV, "DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

    input_path = args[0] if len(args) > 0 else settings.INPUT_PATH
    database_url = settings.database_url

    try:
        if len(args) > 1:
            database_url = resolve_database_url(args[1])
        print_banner(input_path, database_url)

        outcome = asyncio.run(EtlPipeline(settings).run(input_path, database_url))
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except (PipelineError, OSError) as e:
        print(f"\n[FATAL] Pipeline failed: {e}", file=sys.stderr)
        logger.exception("pipeline_failed", input=input_path)
        return 1

    print(outcome.report)
    if outcome.report_path:
        print(f"Report saved to: {outcome.report_path}")
    print(f"Pipeline completed in {outcome.duration_seconds:.2f} seconds.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
