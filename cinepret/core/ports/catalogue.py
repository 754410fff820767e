"""
Interface port pour la persistance du catalogue de pret.

Interface abstraite (port) definissant le contrat de stockage consomme par le
LendingService. Les implementations (adaptateurs) fournissent le mecanisme
concret (memoire partagee, SQLite via SQLModel, etc.).

Aucune regle metier ne vit ici: l'unicite, les limites d'emprunt et la
machine a etats sont la responsabilite du service.
"""

from abc import ABC, abstractmethod
from typing import Optional

from cinepret.core.entities import Copy, Film, Loan, Member


class ICatalogueGateway(ABC):
    """
    Interface de stockage des films, exemplaires, adherents et prets.

    Chaque entite est indexee par sa cle naturelle. Les recherches par cle
    retournent None quand rien ne correspond: ce n'est pas une erreur.

    mark_loan_updated() est un point d'appel obligatoire apres la cloture
    d'un pret, meme si une implementation a references partagees l'ignore.
    """

    # Films

    @abstractmethod
    def save_film(self, film: Film) -> None:
        """Sauvegarde un film (insertion ou mise a jour)."""
        ...

    @abstractmethod
    def find_film_by_title(self, title: str) -> Optional[Film]:
        """Recupere un film par son titre exact."""
        ...

    @abstractmethod
    def list_films(self) -> list[Film]:
        """Liste tous les films."""
        ...

    # Exemplaires

    @abstractmethod
    def save_copy(self, copy: Copy) -> None:
        """Sauvegarde un exemplaire (insertion ou mise a jour de son etat)."""
        ...

    @abstractmethod
    def find_copy_by_id(self, copy_id: str) -> Optional[Copy]:
        """Recupere un exemplaire par son identifiant."""
        ...

    @abstractmethod
    def list_copies(self) -> list[Copy]:
        """Liste tous les exemplaires."""
        ...

    # Adherents

    @abstractmethod
    def save_member(self, member: Member) -> None:
        """Sauvegarde un adherent (insertion ou mise a jour)."""
        ...

    @abstractmethod
    def find_member_by_number(self, membership_number: str) -> Optional[Member]:
        """Recupere un adherent par son numero."""
        ...

    @abstractmethod
    def list_members(self) -> list[Member]:
        """Liste tous les adherents."""
        ...

    # Prets

    @abstractmethod
    def save_loan(self, loan: Loan) -> None:
        """Enregistre un nouveau pret dans l'historique."""
        ...

    @abstractmethod
    def mark_loan_updated(self, loan: Loan) -> None:
        """Ecrit les modifications d'un pret deja enregistre (date de retour)."""
        ...

    @abstractmethod
    def find_open_loan_for_copy(self, copy: Copy) -> Optional[Loan]:
        """Recupere le pret ouvert (sans date de retour) d'un exemplaire."""
        ...

    @abstractmethod
    def list_loans(self) -> list[Loan]:
        """Liste l'historique complet des prets, ouverts et clos."""
        ...
