"""
Utilitaires partages pour les commandes CLI de CinePret.

Ce module fournit :
- console : instance Rich Console partagee
- with_container : decorateur injectant un container initialise
- handle_lending_errors : conversion des erreurs metier en message + code de sortie
- parse_day : conversion d'une option date (ou aujourd'hui par defaut)
"""

from datetime import date, datetime
from functools import wraps
from typing import Optional

import typer
from loguru import logger
from rich.console import Console

from cinepret.container import Container
from cinepret.core.exceptions import InconsistentStateError, LendingError

console = Console()


def with_container(func):
    """
    Decorateur qui injecte un container initialise en premier argument.

    La base de donnees n'est initialisee que pour le stockage SQLite.
    Les ressources (session SQLModel) sont liberees a la fin de la commande,
    meme en cas d'erreur.

    Usage:
        @with_container
        def _my_command(container, ...):
            service = container.lending_service()
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        container = Container()
        try:
            if container.config().storage_backend == "sqlite":
                container.database.init()
            return func(container, *args, **kwargs)
        finally:
            container.shutdown_resources()

    return wrapper


def handle_lending_errors(func):
    """
    Decorateur affichant les erreurs metier et sortant avec un code non nul.

    - LendingError : message en rouge, code 1
    - InconsistentStateError : message en rouge, code 2 (defaut a investiguer)
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except InconsistentStateError as e:
            logger.error("Etat incoherent", error=str(e))
            console.print(f"[bold red]Etat incoherent:[/bold red] {e}")
            raise typer.Exit(code=2)
        except LendingError as e:
            console.print(f"[red]Erreur:[/red] {e}")
            raise typer.Exit(code=1)

    return wrapper


def parse_day(value: Optional[datetime]) -> date:
    """Retourne la date de l'option, ou la date du jour si absente."""
    if value is None:
        return date.today()
    return value.date()
