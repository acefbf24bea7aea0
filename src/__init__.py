"""Rift Duo Backend - Player Analytics API.

This package exposes the match-analytics engine through a hexagonal
architecture: player performance statistics, trends, playstyle
classification and duo compatibility scoring.

Layers:
- domain: Value objects shared across layers
- application: Use cases and port interfaces
- infrastructure: Adapters for external services (Riot API)
- api: REST endpoints
"""

__version__ = "1.0.0"
