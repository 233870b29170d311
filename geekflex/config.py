"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe GEEKFLEX_,
et peut optionnellement être fournie via un fichier .env.

La clé TMDB est optionnelle au chargement - les appels au fournisseur échouent
proprement (ProviderUnavailableError) si elle n'est pas fournie.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de geekflex/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe GEEKFLEX_.
    Exemple : GEEKFLEX_TMDB_REGION=FR
    """

    model_config = SettingsConfigDict(
        env_prefix="GEEKFLEX_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///geekflex.db")

    # Fournisseur TMDB
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")
    tmdb_language: str = Field(default="ko-KR")
    tmdb_region: str = Field(default="KR")
    tmdb_timeout_seconds: float = Field(default=10.0, gt=0)

    # Conflits d'ecriture (verrous, doublons concurrents)
    conflict_max_attempts: int = Field(default=3, ge=1)
    conflict_min_wait_seconds: float = Field(default=0.05, ge=0)
    conflict_max_wait_seconds: float = Field(default=0.15, ge=0)

    # Planificateur de reconciliation
    scheduler_enabled: bool = Field(default=True)
    scheduler_timezone: str = Field(default="Asia/Seoul")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/geekflex.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("conflict_max_wait_seconds")
    @classmethod
    def check_wait_range(cls, v: float, info) -> float:
        """Le delai maximum ne peut pas etre inferieur au delai minimum."""
        minimum = info.data.get("conflict_min_wait_seconds", 0.0)
        if v < minimum:
            raise ValueError("conflict_max_wait_seconds doit etre >= conflict_min_wait_seconds")
        return v

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)
