"""
Business entities representing core domain concepts.

Exports:
- ContentRecord: Locally cached TMDB title (movie or TV series)
- CategoryTag: Membership of a content in a category snapshot
"""

from geekflex.core.entities.content import CategoryTag, ContentRecord

__all__ = [
    "ContentRecord",
    "CategoryTag",
]
