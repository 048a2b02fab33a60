"""Simple launcher for the Andante fare calculator.

Pass one ``FROM:TO`` pair of stop ids per journey segment, for example::

    python start.py TRD:HSJ HSJ:ISM

Without arguments the script asks for the pairs interactively. The
recommendation is printed as JSON.
"""

from __future__ import annotations

import json
import sys
from typing import List

from andante.container import get_container
from andante.domain.errors import AndanteError, ConfigurationError
from andante.io import recommendation_to_dict
from andante.observability import configure_logging
from andante.services import JourneyLeg, JourneyPlannerService


def parse_legs(values: List[str]) -> List[JourneyLeg]:
    legs = []
    for value in values:
        start, sep, finish = value.partition(":")
        if not sep or not start.strip() or not finish.strip():
            raise ValueError(f"Expected FROM:TO, got {value!r}")
        legs.append(JourneyLeg(start.strip(), finish.strip()))
    return legs


def prompt_legs() -> List[str]:
    print("=== Andante fare calculator ===")
    print("Enter one FROM:TO pair of stop ids per line, empty line to finish.")
    values = []
    while True:
        line = input(f"Journey {len(values) + 1}: ").strip()
        if not line:
            return values
        values.append(line)


def main() -> None:
    try:
        configure_logging()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(2)

    try:
        legs = parse_legs(sys.argv[1:] or prompt_legs())
    except ValueError as e:
        print(e)
        sys.exit(2)

    if not legs:
        print("No journey given.")
        sys.exit(2)

    planner = get_container().resolve(JourneyPlannerService)
    try:
        recommendation = planner.plan(legs)
    except AndanteError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if recommendation is None:
        print("No route serves the selected stops in that order.")
        sys.exit(1)

    print(json.dumps(recommendation_to_dict(recommendation), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
