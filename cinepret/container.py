"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI.
Chaque instance de Container possede son propre catalogue: il n'y a pas
de singleton global au niveau du processus.
"""

from dependency_injector import containers, providers

from .config import Settings
from .infrastructure.persistence.database import create_db_engine, get_session, init_db
from .infrastructure.persistence.memory_gateway import InMemoryCatalogueGateway
from .infrastructure.persistence.sqlmodel_gateway import SQLModelCatalogueGateway
from .services.lending import LendingService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        service = container.lending_service()
        ...
        container.shutdown_resources()  # Ferme la session
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine unique par container, Resource pour la creation des tables
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    # Session - une seule session longue pour le gateway SQLModel (identity map),
    # fermee par container.shutdown_resources()
    session = providers.Resource(get_session, engine=engine)

    # Gateway - selectionne selon CINEPRET_STORAGE_BACKEND
    catalogue_gateway = providers.Selector(
        config.provided.storage_backend,
        memory=providers.Singleton(InMemoryCatalogueGateway),
        sqlite=providers.Singleton(SQLModelCatalogueGateway, session=session),
    )

    # Service de pret - Singleton: un seul verrou pour tous les appelants
    lending_service = providers.Singleton(
        LendingService,
        gateway=catalogue_gateway,
    )
