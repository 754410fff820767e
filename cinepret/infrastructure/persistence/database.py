"""
Configuration de la base de donnees SQLite pour CinePret.

Ce module fournit :
- Creation de l'engine SQLite configure pour un usage multi-thread
- Generateur de session
- Fonction d'initialisation des tables

L'URL est fournie par Settings.database_url (CINEPRET_DATABASE_URL).
Aucun engine global: le Container en possede un par instance.
"""

from collections.abc import Generator
from pathlib import Path

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine


def _is_memory_url(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine SQLAlchemy pour l'URL donnee.

    Pour un fichier SQLite, le repertoire parent est cree si necessaire.
    Une base en memoire utilise un StaticPool pour que toutes les sessions
    partagent la meme connexion (sinon chaque connexion voit une base vide).
    """
    if _is_memory_url(database_url):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if database_url.startswith("sqlite:///"):
        db_path = Path(database_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def get_session(engine: Engine) -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation (la session est fermee a la fin du generateur) :
        session = providers.Resource(get_session, engine=engine)

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(engine) as session:
        yield session


def init_db(engine: Engine) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables manquantes.
    """
    # Import ici pour eviter les imports circulaires
    from cinepret.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.debug("Base de donnees initialisee", url=str(engine.url))
