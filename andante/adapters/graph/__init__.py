"""Graph adapters - Implementations of the zone graph port.

Available implementations:
- CSVZoneGraphRepository: Loads the zone graph from a CSV file
"""

from .csv_repository import CSVZoneGraphRepository

__all__ = ["CSVZoneGraphRepository"]
