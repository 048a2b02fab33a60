"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the fare services to:
- CSV reference data (stops, route directions, zone edges)
- Caching systems (in-memory, null)
"""
