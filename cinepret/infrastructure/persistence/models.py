"""
Modeles SQLModel pour la base de donnees CinePret.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- films: Films du catalogue (cle naturelle: title)
- copies: Exemplaires physiques (cle naturelle: copy_id)
- members: Adherents (cle naturelle: membership_number)
- loans: Historique complet des prets, ouverts et clos

Chaque table a un id auto-incremente qui conserve l'ordre d'insertion.
Les references entre tables utilisent les cles naturelles.
"""

from __future__ import annotations

from datetime import date

from sqlmodel import Field, SQLModel


class FilmModel(SQLModel, table=True):
    """Modele representant un film du catalogue."""

    __tablename__ = "films"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(index=True, unique=True)


class MemberModel(SQLModel, table=True):
    """Modele representant un adherent."""

    __tablename__ = "members"

    id: int | None = Field(default=None, primary_key=True)
    membership_number: str = Field(index=True, unique=True)
    name: str


class CopyModel(SQLModel, table=True):
    """
    Modele representant un exemplaire physique.

    on_loan et borrower_number sont le miroir du pret ouvert: ils sont
    reecrits a chaque emprunt et retour.
    """

    __tablename__ = "copies"

    id: int | None = Field(default=None, primary_key=True)
    copy_id: str = Field(index=True, unique=True)
    film_title: str = Field(foreign_key="films.title", index=True)
    on_loan: bool = Field(default=False)
    borrower_number: str | None = Field(
        default=None, foreign_key="members.membership_number"
    )


class LoanModel(SQLModel, table=True):
    """
    Modele representant un pret.

    Les prets ne sont jamais supprimes. return_date est NULL tant que
    le pret est ouvert.
    """

    __tablename__ = "loans"

    id: int | None = Field(default=None, primary_key=True)
    copy_id: str = Field(foreign_key="copies.copy_id", index=True)
    membership_number: str = Field(foreign_key="members.membership_number", index=True)
    borrow_date: date
    due_date: date
    return_date: date | None = Field(default=None, index=True)
