"""Customer transaction ETL: cleaning, business-rule transformation and loading."""

__version__ = "1.0.0"
