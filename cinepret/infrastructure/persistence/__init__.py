"""
Persistance du catalogue.

- InMemoryCatalogueGateway : references partagees, pour les tests
- SQLModelCatalogueGateway : SQLite via SQLModel, avec identity map
"""

from cinepret.infrastructure.persistence.memory_gateway import InMemoryCatalogueGateway
from cinepret.infrastructure.persistence.sqlmodel_gateway import SQLModelCatalogueGateway

__all__ = [
    "InMemoryCatalogueGateway",
    "SQLModelCatalogueGateway",
]
