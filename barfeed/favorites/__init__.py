"""
User favorites.

Responsibilities:
- Record which bars a user has marked as favorite.
- Answer existence checks while the home feed is assembled.
"""
