"""
Commandes CLI du catalogue de pret.

Chaque commande est un appelant mince du LendingService: aucune regle
metier ici, uniquement la lecture des arguments et l'affichage Rich.
"""

from datetime import datetime
from typing import Annotated, Optional

import typer
from rich.table import Table

from cinepret.adapters.cli.helpers import (
    console,
    handle_lending_errors,
    parse_day,
    with_container,
)
from cinepret.core.entities import Film, Loan
from cinepret.services.seeding import seed_sample_catalogue

DateOption = Annotated[
    Optional[datetime],
    typer.Option("--date", formats=["%Y-%m-%d"], help="Date (AAAA-MM-JJ), defaut: aujourd'hui"),
]


def _films_table(films: list[Film]) -> Table:
    table = Table(title="Films")
    table.add_column("Titre", style="cyan")
    table.add_column("Exemplaires", justify="right")
    table.add_column("Disponibles", justify="right", style="green")
    for film in films:
        table.add_row(film.title, str(film.total_copies), str(film.number_available))
    return table


def _loans_table(loans: list[Loan], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Exemplaire", style="cyan")
    table.add_column("Film")
    table.add_column("Adherent")
    table.add_column("Emprunte le")
    table.add_column("Echeance")
    table.add_column("Rendu le")
    for loan in loans:
        table.add_row(
            loan.copy.copy_id,
            loan.copy.film.title,
            loan.member.membership_number,
            loan.borrow_date.isoformat(),
            loan.due_date.isoformat(),
            loan.return_date.isoformat() if loan.return_date else "-",
        )
    return table


# ============================================================================
# Catalogue
# ============================================================================


def seed() -> None:
    """Charge le catalogue d'exemple (idempotent)."""
    _seed()


@with_container
@handle_lending_errors
def _seed(container) -> None:
    result = seed_sample_catalogue(container.lending_service())
    console.print(
        f"[green]Catalogue d'exemple:[/green] {result.films} films, "
        f"{result.copies} exemplaires, {result.members} adherents "
        f"({result.skipped} deja presents)"
    )


def add_film(
    title: Annotated[str, typer.Argument(help="Titre du film")],
) -> None:
    """Ajoute un film au catalogue."""
    _add_film(title)


@with_container
@handle_lending_errors
def _add_film(container, title: str) -> None:
    film = container.lending_service().add_film(title)
    console.print(f"[green]Film ajoute:[/green] {film.title}")


def add_copy(
    title: Annotated[str, typer.Argument(help="Titre exact du film")],
    copy_id: Annotated[str, typer.Argument(help="Identifiant de l'exemplaire")],
) -> None:
    """Ajoute un exemplaire a un film existant."""
    _add_copy(title, copy_id)


@with_container
@handle_lending_errors
def _add_copy(container, title: str, copy_id: str) -> None:
    service = container.lending_service()
    film = service.find_film_by_title(title)
    if film is None:
        console.print(f"[red]Erreur:[/red] Film introuvable: {title}")
        raise typer.Exit(code=1)
    copy = service.add_copy(film, copy_id)
    console.print(f"[green]Exemplaire ajoute:[/green] {copy.copy_id} ({film.title})")


def films(
    search: Annotated[
        Optional[str], typer.Option("--search", "-s", help="Terme a chercher dans le titre")
    ] = None,
    min_available: Annotated[
        Optional[int],
        typer.Option("--min-available", "-m", help="Nombre minimum d'exemplaires disponibles"),
    ] = None,
) -> None:
    """Liste ou recherche les films du catalogue."""
    _films(search, min_available)


@with_container
@handle_lending_errors
def _films(container, search: Optional[str], min_available: Optional[int]) -> None:
    service = container.lending_service()
    if min_available is not None:
        found = service.search_combined(search or "", min_available)
    elif search is not None:
        found = service.search_by_title(search)
    else:
        found = service.list_films()

    if not found:
        console.print("[dim]Aucun film[/dim]")
        return
    console.print(_films_table(found))


# ============================================================================
# Adherents
# ============================================================================


def add_member(
    membership_number: Annotated[str, typer.Argument(help="Numero d'adherent")],
    name: Annotated[str, typer.Argument(help="Nom de l'adherent")],
) -> None:
    """Inscrit un nouvel adherent."""
    _add_member(membership_number, name)


@with_container
@handle_lending_errors
def _add_member(container, membership_number: str, name: str) -> None:
    member = container.lending_service().add_member(membership_number, name)
    console.print(
        f"[green]Adherent ajoute:[/green] {member.name} ({member.membership_number})"
    )


def members() -> None:
    """Liste les adherents et leur nombre de prets ouverts."""
    _members()


@with_container
@handle_lending_errors
def _members(container) -> None:
    found = container.lending_service().list_members()
    if not found:
        console.print("[dim]Aucun adherent[/dim]")
        return

    table = Table(title="Adherents")
    table.add_column("Numero", style="cyan")
    table.add_column("Nom")
    table.add_column("Prets ouverts", justify="right")
    for member in found:
        table.add_row(member.membership_number, member.name, str(member.open_loan_count))
    console.print(table)


# ============================================================================
# Emprunt et retour
# ============================================================================


def borrow(
    copy_id: Annotated[str, typer.Argument(help="Identifiant de l'exemplaire")],
    membership_number: Annotated[str, typer.Argument(help="Numero d'adherent")],
    on: DateOption = None,
) -> None:
    """Prete un exemplaire a un adherent."""
    _borrow(copy_id, membership_number, on)


@with_container
@handle_lending_errors
def _borrow(
    container, copy_id: str, membership_number: str, on: Optional[datetime]
) -> None:
    service = container.lending_service()
    copy = service.find_copy_by_id(copy_id)
    if copy is None:
        console.print(f"[red]Erreur:[/red] Exemplaire introuvable: {copy_id}")
        raise typer.Exit(code=1)
    member = service.find_member_by_number(membership_number)
    if member is None:
        console.print(f"[red]Erreur:[/red] Adherent introuvable: {membership_number}")
        raise typer.Exit(code=1)

    loan = service.borrow_copy(copy, member, parse_day(on))
    console.print(
        f"[green]Emprunt enregistre:[/green] {copy.copy_id} ({copy.film.title}) "
        f"-> {member.membership_number}, a rendre le {loan.due_date.isoformat()}"
    )


def return_copy(
    copy_id: Annotated[str, typer.Argument(help="Identifiant de l'exemplaire")],
    on: DateOption = None,
) -> None:
    """Enregistre le retour d'un exemplaire."""
    _return_copy(copy_id, on)


@with_container
@handle_lending_errors
def _return_copy(container, copy_id: str, on: Optional[datetime]) -> None:
    service = container.lending_service()
    copy = service.find_copy_by_id(copy_id)
    if copy is None:
        console.print(f"[red]Erreur:[/red] Exemplaire introuvable: {copy_id}")
        raise typer.Exit(code=1)

    loan = service.return_copy(copy, parse_day(on))
    message = f"[green]Retour enregistre:[/green] {copy.copy_id} ({copy.film.title})"
    if loan.return_date > loan.due_date:
        message += f" [yellow]en retard (echeance {loan.due_date.isoformat()})[/yellow]"
    console.print(message)


def loans(
    member: Annotated[
        Optional[str], typer.Option("--member", help="Numero d'adherent")
    ] = None,
    overdue: Annotated[
        bool, typer.Option("--overdue", help="Uniquement les prets en retard")
    ] = False,
    history: Annotated[
        bool, typer.Option("--history", help="Inclure les prets clos")
    ] = False,
    on: DateOption = None,
) -> None:
    """Liste les prets ouverts (ou l'historique complet).

    --member se combine avec --overdue ou --history; ces deux derniers
    sont exclusifs (un pret clos n'est jamais en retard).
    """
    if overdue and history:
        raise typer.BadParameter("--overdue et --history sont incompatibles")
    _loans(member, overdue, history, on)


@with_container
@handle_lending_errors
def _loans(
    container,
    membership_number: Optional[str],
    overdue: bool,
    history: bool,
    on: Optional[datetime],
) -> None:
    service = container.lending_service()

    if overdue:
        found = service.list_overdue_loans(parse_day(on))
        title = "Prets en retard"
    elif history:
        found = service.list_loans()
        title = "Historique des prets"
    else:
        found = service.list_active_loans()
        title = "Prets en cours"

    if membership_number is not None:
        member = service.find_member_by_number(membership_number)
        if member is None:
            console.print(f"[red]Erreur:[/red] Adherent introuvable: {membership_number}")
            raise typer.Exit(code=1)
        if not overdue and not history:
            found = service.list_loans_for_member(member)
        else:
            found = [loan for loan in found if loan.member == member]
        title = f"{title} - {member.name}"

    if not found:
        console.print("[dim]Aucun pret[/dim]")
        return
    console.print(_loans_table(found, title))
