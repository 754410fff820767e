"""
Fixtures pytest partagees pour les tests CinePret.

Ce module contient les fixtures communes utilisees dans les tests:
- Gateway en memoire et service de pret neufs pour chaque test
- Engine SQLite en memoire et gateway SQLModel
- Catalogue de reference ("Inception" avec D1/D2, adherent M1)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import Engine
from sqlmodel import Session

from cinepret.config import Settings
from cinepret.core.entities import Copy, Film, Member
from cinepret.infrastructure.persistence.database import create_db_engine, init_db
from cinepret.infrastructure.persistence.memory_gateway import InMemoryCatalogueGateway
from cinepret.infrastructure.persistence.sqlmodel_gateway import SQLModelCatalogueGateway
from cinepret.services.lending import LendingService


@pytest.fixture
def memory_gateway() -> InMemoryCatalogueGateway:
    """Gateway en memoire vide."""
    return InMemoryCatalogueGateway()


@pytest.fixture
def service(memory_gateway: InMemoryCatalogueGateway) -> LendingService:
    """LendingService neuf sur un gateway en memoire."""
    return LendingService(gateway=memory_gateway)


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Engine SQLite en memoire avec les tables creees."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def sql_gateway(sql_session: Session) -> SQLModelCatalogueGateway:
    """Gateway SQLModel sur la base en memoire."""
    return SQLModelCatalogueGateway(session=sql_session)


@pytest.fixture(params=["memory", "sqlmodel"])
def any_service(request, engine: Engine) -> Iterator[LendingService]:
    """
    LendingService parametre sur les deux implementations du gateway.

    Les regles metier doivent se comporter a l'identique quel que soit
    le stockage.
    """
    if request.param == "memory":
        yield LendingService(gateway=InMemoryCatalogueGateway())
        return
    with Session(engine) as session:
        yield LendingService(gateway=SQLModelCatalogueGateway(session=session))


@pytest.fixture
def inception(service: LendingService) -> Film:
    """Film "Inception" avec deux exemplaires D1 et D2."""
    film = service.add_film("Inception")
    service.add_copy(film, "D1")
    service.add_copy(film, "D2")
    return film


@pytest.fixture
def copy_d1(service: LendingService, inception: Film) -> Copy:
    return service.find_copy_by_id("D1")


@pytest.fixture
def member_m1(service: LendingService) -> Member:
    """Adherent M1 sans pret."""
    return service.add_member("M1", "Ada Lovelace")


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler la base et les logs de chaque test.
    """
    return Settings(
        _env_file=None,
        storage_backend="sqlite",
        database_url=f"sqlite:///{tmp_path}/test.db",
        log_file=tmp_path / "test.log",
    )
