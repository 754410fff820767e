"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe CINEPRET_,
et peut optionnellement etre fournie via un fichier .env.

Les regles de pret (duree, nombre maximal de prets) ne sont pas configurables:
elles sont definies dans cinepret.utils.constants.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env a la racine du projet (parent de cinepret/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe CINEPRET_.
    Exemple : CINEPRET_STORAGE_BACKEND=memory

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="CINEPRET_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Stockage du catalogue
    storage_backend: Literal["memory", "sqlite"] = Field(default="sqlite")
    database_url: str = Field(default="sqlite:///cinepret.db")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cinepret.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5, ge=1)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Les niveaux loguru sont en majuscules."""
        return str(v).upper()

    @property
    def persistent(self) -> bool:
        """Verifie si le catalogue survit a l'arret du processus."""
        return self.storage_backend == "sqlite" and self.database_url not in (
            "sqlite://",
            "sqlite:///:memory:",
        )
