"""
Point d'entree CLI de CinePret.

Configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import (
    add_copy,
    add_film,
    add_member,
    borrow,
    films,
    loans,
    members,
    return_copy,
    seed,
)
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="cinepret",
    help="Gestion des prets d'une mediatheque de films",
)


@app.callback()
def main_callback(
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """CinePret - films, exemplaires, adherents et prets."""
    settings = Settings()
    if quiet:
        # Console limitee aux erreurs, le journal des prets reste complet
        settings.log_level = "ERROR"
    configure_logging(settings)
    logger.debug("Demarrage de CinePret", version=__version__)


# Catalogue
app.command()(seed)
app.command(name="add-film")(add_film)
app.command(name="add-copy")(add_copy)
app.command()(films)

# Adherents
app.command(name="add-member")(add_member)
app.command()(members)

# Prets
app.command()(borrow)
# Note: "return" est un mot reserve Python, donc on utilise name= explicitement
app.command(name="return")(return_copy)
app.command()(loans)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    typer.echo(f"Stockage : {config.storage_backend}")
    typer.echo(f"Base de donnees : {config.database_url}")
    typer.echo(f"Persistant : {'oui' if config.persistent else 'non'}")
    typer.echo(f"Niveau de log : {config.log_level}")
    typer.echo(f"Fichier de log : {config.log_file}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CinePret v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    app()


if __name__ == "__main__":
    main()
