"""Raw file ingestion."""

from txn_etl.ingest.reader import CSVReader, ReadResult, parse_amount, parse_date

__all__ = ["CSVReader", "ReadResult", "parse_amount", "parse_date"]
