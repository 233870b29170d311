"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaKind : Type de contenu TMDB (MOVIE, TV), partie de la cle naturelle
"""

from geekflex.core.value_objects.media_kind import MediaKind

__all__ = [
    "MediaKind",
]
