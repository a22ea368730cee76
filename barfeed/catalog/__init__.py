"""
Bar catalog.

Responsibilities:
- Define the persisted catalog record and the transient provider venue.
- Store records in SQLite keyed by the provider's unique place id.
- Build new records from provider venues.
- Reconcile nearby venues against the catalog, creating missing records.
"""
