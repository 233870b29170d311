"""
Clients API externes.

Ce module fournit l'adaptateur pour communiquer avec TMDB (The Movie Database).
Le client implemente IContentProvider defini dans core/ports/api_clients.py.
"""

from geekflex.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "TMDBClient",
]
