"""Tabular data source adapters."""

from .csv_source import CSVDataSource, Row

__all__ = ["CSVDataSource", "Row"]
