"""Input/output helpers for the fare engine.

This subpackage turns domain results into plain data that front-ends
can serialize.
"""

from .serialization import (
    recommendation_to_dict,
    segment_to_dict,
    stop_to_dict,
    ticket_result_to_dict,
    variant_to_dict,
)

__all__ = [
    "recommendation_to_dict",
    "segment_to_dict",
    "stop_to_dict",
    "ticket_result_to_dict",
    "variant_to_dict",
]
