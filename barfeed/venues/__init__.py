"""
Venue discovery.

Responsibilities:
- Query the external places provider for bars around a coordinate.
- Fetch per-place details used when a bar is first added to the catalog.
"""
