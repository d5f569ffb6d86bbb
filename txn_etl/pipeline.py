"""
Pipeline orchestrator.

Stages:
  1. Extract   - read raw CSV rows into Records
  2. Clean     - reject unusable records, normalize the rest
  3. Transform - deduplicate, convert currency, flag suspicious records
  4. Load      - upsert into the relational store
  5. Report    - render the data quality report

Per-record problems end up in RunStatistics. Collaborator failures
(unreadable source, unreachable store) raise PipelineError subclasses and
abort the run.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import structlog

from txn_etl.cleaning.stage import CleaningStage
from txn_etl.core.config import Settings, get_settings
from txn_etl.core.logging import bind_run_context
from txn_etl.db.loader import DatabaseLoader
from txn_etl.db.repositories import LoadSummary
from txn_etl.ingest.reader import CSVReader
from txn_etl.models.record import Record
from txn_etl.models.statistics import RunStatistics
from txn_etl.reporting.report import QualityReporter
from txn_etl.transformation.config import TransformationConfig
from txn_etl.transformation.stage import TransformationStage

logger = structlog.get_logger(__name__)


@dataclass
class PipelineOutcome:
    """Everything a finished run produced."""

    stats: RunStatistics
    records: list[Record] = field(default_factory=list)
    summary: Optional[LoadSummary] = None
    report: str = ""
    report_path: Optional[Path] = None
    duration_seconds: float = 0.0


class EtlPipeline:
    """Runs extract, clean, transform, load and report for one input file."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transformation_config: Optional[TransformationConfig] = None,
        reader: Optional[CSVReader] = None,
    ):
        self.settings = settings or get_settings()
        self.transformation_config = transformation_config or TransformationConfig.for_reference(
            self.settings.REFERENCE_CURRENCY
        )
        self.reader = reader or CSVReader()
        self.cleaner = CleaningStage()
        self.transformer = TransformationStage(self.transformation_config)
        self.reporter = QualityReporter(max_rejections=self.settings.REPORT_MAX_REJECTIONS)

    async def run(
        self,
        input_path: str | Path | None = None,
        database_url: Optional[str] = None,
        write_report: Optional[bool] = None,
    ) -> PipelineOutcome:
        """
        Execute a full pipeline run.

        Args:
            input_path: CSV file to read (defaults to settings.INPUT_PATH)
            database_url: Destination store (defaults to settings.database_url)
            write_report: Save the report to REPORT_DIR (defaults to settings.WRITE_REPORT)

        Returns:
            Statistics, final records, verification summary and the report

        Raises:
            SourceReadError: If the input cannot be read
            LoadError: If the destination store fails
        """
        input_path = input_path or self.settings.INPUT_PATH
        database_url = database_url or self.settings.database_url
        if write_report is None:
            write_report = self.settings.WRITE_REPORT

        stats = RunStatistics()
        started = time.perf_counter()

        with bind_run_context(input=str(input_path)):
            logger.info("pipeline.stage", stage="extract", step="1/4")
            read_result = self.reader.read(input_path)
            stats.total_read = len(read_result.records)
            stats.skipped_rows = read_result.skipped_rows

            logger.info("pipeline.stage", stage="clean", step="2/4")
            cleaning = self.cleaner.clean(read_result.records)
            stats.record_cleaning(cleaning)

            logger.info("pipeline.stage", stage="transform", step="3/4")
            transformation = self.transformer.transform(cleaning.accepted)
            stats.record_transformation(transformation)

            logger.info("pipeline.stage", stage="load", step="4/4")
            loader = DatabaseLoader(database_url, batch_size=self.settings.LOAD_BATCH_SIZE)
            try:
                await loader.init_schema()
                stats.total_loaded = await loader.load(transformation.records)
                summary = await loader.summary()
            finally:
                await loader.dispose()

            report = self.reporter.render(stats, transformation.records, summary)
            report_path = (
                self.reporter.write(report, self.settings.REPORT_DIR) if write_report else None
            )

            duration = time.perf_counter() - started
            logger.info(
                "pipeline.completed",
                duration_seconds=round(duration, 2),
                **{k: v for k, v in stats.to_dict().items() if not isinstance(v, list)},
            )

        return PipelineOutcome(
            stats=stats,
            records=transformation.records,
            summary=summary,
            report=report,
            report_path=report_path,
            duration_seconds=duration,
        )
