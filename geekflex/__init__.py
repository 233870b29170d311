"""
GeekFlex - Backend du catalogue de films et series.

Ce package maintient une copie locale des contenus TMDB (films, series TV)
sur laquelle s'appuient les avis, les likes et les collections.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (matérialisation, réconciliation, planification)
- adapters/ : Couche infrastructure (client TMDB, CLI)
- infrastructure/ : Persistance SQLModel
- web/ : API REST FastAPI
"""
