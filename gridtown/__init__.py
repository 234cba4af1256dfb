"""A grid city simulation: buildings, roads, intersections, traffic and JSON saves."""

__version__ = "0.1.0"