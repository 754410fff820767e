"""
Implementation en memoire du gateway de catalogue.

Les entites sont stockees par reference: une mutation faite par le service
est immediatement visible, mark_loan_updated() n'a donc rien a faire.
Utilisee pour les tests et pour storage_backend="memory".
"""

from typing import Optional

from cinepret.core.entities import Copy, Film, Loan, Member
from cinepret.core.ports.catalogue import ICatalogueGateway


class InMemoryCatalogueGateway(ICatalogueGateway):
    """
    Gateway en memoire a references partagees.

    Les films, exemplaires et adherents sont indexes par cle naturelle
    (dict, ordre d'insertion conserve). Les prets forment un historique
    en ajout seul.
    """

    def __init__(self) -> None:
        self._films: dict[str, Film] = {}
        self._copies: dict[str, Copy] = {}
        self._members: dict[str, Member] = {}
        self._loans: list[Loan] = []

    def save_film(self, film: Film) -> None:
        self._films[film.title] = film

    def find_film_by_title(self, title: str) -> Optional[Film]:
        return self._films.get(title)

    def list_films(self) -> list[Film]:
        return list(self._films.values())

    def save_copy(self, copy: Copy) -> None:
        self._copies[copy.copy_id] = copy

    def find_copy_by_id(self, copy_id: str) -> Optional[Copy]:
        return self._copies.get(copy_id)

    def list_copies(self) -> list[Copy]:
        return list(self._copies.values())

    def save_member(self, member: Member) -> None:
        self._members[member.membership_number] = member

    def find_member_by_number(self, membership_number: str) -> Optional[Member]:
        return self._members.get(membership_number)

    def list_members(self) -> list[Member]:
        return list(self._members.values())

    def save_loan(self, loan: Loan) -> None:
        # Un pret deja present (meme objet) n'est pas duplique
        if any(held is loan for held in self._loans):
            return
        loan.id = str(len(self._loans) + 1)
        self._loans.append(loan)

    def mark_loan_updated(self, loan: Loan) -> None:
        # References partagees: la modification est deja visible
        pass

    def find_open_loan_for_copy(self, copy: Copy) -> Optional[Loan]:
        for loan in self._loans:
            if loan.copy == copy and not loan.is_returned():
                return loan
        return None

    def list_loans(self) -> list[Loan]:
        return list(self._loans)
