"""Gravitational three-body simulation: bodies, integrators, configuration, logging and a pygame viewer."""

__version__ = "1.0.0"