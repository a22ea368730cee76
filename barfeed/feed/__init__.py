"""
Home feed.

Responsibilities:
- Validate the geographic query.
- Rank reconciled catalog records deterministically.
- Derive today's closing time and the display date per record.
- Split the ranking into a top slice and a paginated, favorite-annotated
  remainder.
"""
