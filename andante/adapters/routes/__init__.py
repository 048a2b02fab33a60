"""Route adapters - Implementations of the route port.

Available implementations:
- CSVRouteRepository: Loads route directions and stops from CSV files
"""

from .csv_repository import CSVRouteRepository

__all__ = ["CSVRouteRepository"]
