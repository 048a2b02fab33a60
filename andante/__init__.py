"""Top-level package for the Andante fare engine.

Recommends the cheapest valid occasional Andante ticket for a journey
made of one or more transfer segments, from the network's stops, route
stop sequences and zone adjacency graph.
"""

__version__ = "0.1.0"
