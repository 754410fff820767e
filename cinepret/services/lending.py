"""
Service de pret orchestrant les regles metier du catalogue.

Le LendingService est le seul composant autorise a appeler les mutateurs
du gateway. Il centralise:
- L'unicite des cles naturelles (titre, identifiant d'exemplaire, numero d'adherent)
- Les recherches de films (titre, disponibilite, combinee)
- La machine a etats emprunt/retour et la limite de MAX_LOANS prets ouverts
- La coherence entre le pret, l'etat de l'exemplaire et les prets de l'adherent

Toutes les validations sont faites avant la moindre mutation: une operation
refusee ne laisse aucun etat partiel.
"""

import threading
from datetime import date
from functools import wraps
from typing import Optional

from loguru import logger

from cinepret.core.entities import Copy, Film, Loan, Member
from cinepret.core.exceptions import (
    AlreadyOnLoanError,
    DuplicateKeyError,
    InconsistentStateError,
    LoanLimitExceededError,
    NotOnLoanError,
    ValidationError,
)
from cinepret.core.ports.catalogue import ICatalogueGateway
from cinepret.utils.constants import MAX_LOANS
from cinepret.utils.helpers import (
    ensure_date,
    ensure_non_negative,
    ensure_not_blank,
    ensure_present,
    is_blank,
)


def serialized(method):
    """
    Decorateur executant une methode du service sous son verrou.

    Emprunt et retour font du check-then-act sur trois agregats
    (exemplaire, adherent, historique des prets): un seul verrou
    autour du service rend chaque operation atomique pour les appelants.
    """

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class LendingService:
    """
    Service de pret pour le catalogue de films.

    Example:
        service = LendingService(gateway=InMemoryCatalogueGateway())

        film = service.add_film("Inception")
        copy = service.add_copy(film, "D1")
        member = service.add_member("M1", "Ada")

        loan = service.borrow_copy(copy, member, date(2024, 1, 1))
        service.return_copy(copy, date(2024, 1, 3))
    """

    def __init__(self, gateway: ICatalogueGateway) -> None:
        """
        Initialise le service de pret.

        Args:
            gateway: Stockage du catalogue (memoire, SQLModel, ...)
        """
        self._gateway = gateway
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Resolution des entites
    # ------------------------------------------------------------------

    def _resolve_film(self, film: Film) -> Film:
        """Retourne l'instance du registre pour ce film (refuse un film inconnu)."""
        ensure_present(film, "Le film")
        registered = self._gateway.find_film_by_title(film.title)
        if registered is None:
            raise ValidationError(f"Film inconnu du catalogue: '{film.title}'")
        return registered

    def _resolve_copy(self, copy: Copy) -> Copy:
        ensure_present(copy, "L'exemplaire")
        registered = self._gateway.find_copy_by_id(copy.copy_id)
        if registered is None:
            raise ValidationError(f"Exemplaire inconnu du catalogue: '{copy.copy_id}'")
        return registered

    def _resolve_member(self, member: Member) -> Member:
        ensure_present(member, "L'adherent")
        registered = self._gateway.find_member_by_number(member.membership_number)
        if registered is None:
            raise ValidationError(
                f"Adherent inconnu du catalogue: '{member.membership_number}'"
            )
        return registered

    # ------------------------------------------------------------------
    # Films et exemplaires
    # ------------------------------------------------------------------

    @serialized
    def add_film(self, title: str) -> Film:
        """
        Ajoute un film au catalogue.

        Raises:
            ValidationError: Si le titre est vide
            DuplicateKeyError: Si un film porte deja ce titre (comparaison exacte)
        """
        ensure_not_blank(title, "Le titre du film")
        if self._gateway.find_film_by_title(title) is not None:
            logger.warning("Film deja present", title=title)
            raise DuplicateKeyError("Film", title)

        film = Film(title=title)
        self._gateway.save_film(film)
        logger.info("Film ajoute", title=title)
        return film

    @serialized
    def add_copy(self, film: Film, copy_id: str) -> Copy:
        """
        Ajoute un exemplaire a un film.

        Les identifiants d'exemplaire sont uniques dans tout le catalogue,
        pas seulement au sein d'un film.

        Raises:
            ValidationError: Si le film manque ou si l'identifiant est vide
            DuplicateKeyError: Si l'identifiant existe deja
        """
        ensure_present(film, "Le film")
        ensure_not_blank(copy_id, "L'identifiant d'exemplaire")
        film = self._resolve_film(film)
        if self._gateway.find_copy_by_id(copy_id) is not None:
            logger.warning("Exemplaire deja present", copy_id=copy_id)
            raise DuplicateKeyError("Exemplaire", copy_id)

        copy = Copy(copy_id=copy_id, film=film)
        film.add_copy(copy)
        self._gateway.save_copy(copy)
        logger.info("Exemplaire ajoute", copy_id=copy_id, film=film.title)
        return copy

    @serialized
    def number_available(self, film: Film) -> int:
        return self._resolve_film(film).number_available

    @serialized
    def find_film_by_title(self, title: str) -> Optional[Film]:
        if is_blank(title):
            return None
        return self._gateway.find_film_by_title(title)

    @serialized
    def find_copy_by_id(self, copy_id: str) -> Optional[Copy]:
        if is_blank(copy_id):
            return None
        return self._gateway.find_copy_by_id(copy_id)

    @serialized
    def list_films(self) -> list[Film]:
        return self._gateway.list_films()

    @serialized
    def list_copies(self) -> list[Copy]:
        return self._gateway.list_copies()

    # ------------------------------------------------------------------
    # Recherche
    # ------------------------------------------------------------------

    @serialized
    def search_by_title(self, term: str) -> list[Film]:
        """
        Recherche les films dont le titre contient le terme (insensible a la casse).

        Un terme vide ou blanc ne retourne aucun film.
        """
        if is_blank(term):
            return []
        needle = term.strip().lower()
        return [film for film in self._gateway.list_films() if needle in film.title.lower()]

    @serialized
    def search_by_availability(self, min_available: int) -> list[Film]:
        """
        Recherche les films ayant au moins min_available exemplaires disponibles.

        Raises:
            ValidationError: Si min_available est negatif
        """
        ensure_non_negative(min_available, "Le nombre minimum d'exemplaires disponibles")
        return [
            film
            for film in self._gateway.list_films()
            if film.number_available >= min_available
        ]

    @serialized
    def search_combined(self, term: str, min_available: int) -> list[Film]:
        """
        Intersection de la recherche par titre et par disponibilite.

        Si le terme est vide, seule la disponibilite est filtree.

        Raises:
            ValidationError: Si min_available est negatif
        """
        ensure_non_negative(min_available, "Le nombre minimum d'exemplaires disponibles")
        if is_blank(term):
            return self.search_by_availability(min_available)

        needle = term.strip().lower()
        return [
            film
            for film in self._gateway.list_films()
            if needle in film.title.lower() and film.number_available >= min_available
        ]

    # ------------------------------------------------------------------
    # Adherents
    # ------------------------------------------------------------------

    @serialized
    def add_member(self, membership_number: str, name: str) -> Member:
        """
        Inscrit un nouvel adherent.

        Raises:
            ValidationError: Si le numero ou le nom est vide
            DuplicateKeyError: Si le numero d'adherent existe deja
        """
        ensure_not_blank(membership_number, "Le numero d'adherent")
        ensure_not_blank(name, "Le nom de l'adherent")
        if self._gateway.find_member_by_number(membership_number) is not None:
            logger.warning("Adherent deja present", membership_number=membership_number)
            raise DuplicateKeyError("Adherent", membership_number)

        member = Member(membership_number=membership_number, name=name)
        self._gateway.save_member(member)
        logger.info("Adherent ajoute", membership_number=membership_number)
        return member

    @serialized
    def rename_member(self, member: Member, name: str) -> Member:
        ensure_not_blank(name, "Le nom de l'adherent")
        member = self._resolve_member(member)
        member.rename(name)
        self._gateway.save_member(member)
        logger.info("Adherent renomme", membership_number=member.membership_number)
        return member

    @serialized
    def find_member_by_number(self, membership_number: str) -> Optional[Member]:
        if is_blank(membership_number):
            return None
        return self._gateway.find_member_by_number(membership_number)

    @serialized
    def list_members(self) -> list[Member]:
        return self._gateway.list_members()

    @serialized
    def list_loans_for_member(self, member: Member) -> list[Loan]:
        """Retourne les prets ouverts de l'adherent."""
        member = self._resolve_member(member)
        return [loan for loan in member.open_loans if not loan.is_returned()]

    # ------------------------------------------------------------------
    # Emprunt et retour
    # ------------------------------------------------------------------

    @serialized
    def borrow_copy(self, copy: Copy, member: Member, borrow_date: date) -> Loan:
        """
        Prete un exemplaire disponible a un adherent.

        Cree le pret (echeance = borrow_date + LOAN_PERIOD_DAYS), marque
        l'exemplaire comme emprunte, rattache le pret a l'adherent puis
        enregistre le tout via le gateway.

        Args:
            copy: Exemplaire a preter
            member: Adherent emprunteur
            borrow_date: Date de l'emprunt

        Returns:
            Le pret cree

        Raises:
            ValidationError: Si un argument manque, est inconnu du catalogue
                ou si la date n'est pas une date
            AlreadyOnLoanError: Si l'exemplaire est deja en pret
            LoanLimitExceededError: Si l'adherent a deja MAX_LOANS prets ouverts
        """
        ensure_present(copy, "L'exemplaire")
        ensure_present(member, "L'adherent")
        borrow_date = ensure_date(borrow_date, "La date d'emprunt")
        copy = self._resolve_copy(copy)
        member = self._resolve_member(member)

        if copy.on_loan:
            logger.warning("Exemplaire deja en pret", copy_id=copy.copy_id)
            raise AlreadyOnLoanError(copy.copy_id)

        if not member.can_borrow():
            logger.warning(
                "Limite de prets atteinte",
                membership_number=member.membership_number,
                limit=MAX_LOANS,
            )
            raise LoanLimitExceededError(member.membership_number, MAX_LOANS)

        loan = Loan(copy=copy, member=member, borrow_date=borrow_date)
        copy.mark_borrowed(member)
        if not member.attach_loan(loan):
            copy.mark_returned()
            raise InconsistentStateError(
                f"Impossible de rattacher le pret a '{member.membership_number}'"
            )

        self._gateway.save_loan(loan)
        self._gateway.save_copy(copy)
        self._gateway.save_member(member)

        logger.info(
            "Emprunt enregistre",
            copy_id=copy.copy_id,
            membership_number=member.membership_number,
            due_date=loan.due_date.isoformat(),
        )
        return loan

    @serialized
    def return_copy(self, copy: Copy, return_date: date) -> Loan:
        """
        Enregistre le retour d'un exemplaire.

        Clot le pret ouvert, rend l'exemplaire disponible, detache le pret
        de l'adherent puis reecrit le pret via le gateway. Un pret clos ne
        peut pas etre clos une seconde fois.

        Raises:
            ValidationError: Si un argument manque, est inconnu du catalogue
                ou si la date n'est pas une date
            NotOnLoanError: Si l'exemplaire n'est pas en pret
            InconsistentStateError: Si aucun pret ouvert n'est trouve pour un
                exemplaire marque en pret (defaut ailleurs dans le systeme)
        """
        ensure_present(copy, "L'exemplaire")
        return_date = ensure_date(return_date, "La date de retour")
        copy = self._resolve_copy(copy)

        if not copy.on_loan:
            logger.warning("Exemplaire non emprunte", copy_id=copy.copy_id)
            raise NotOnLoanError(copy.copy_id)

        loan = self._gateway.find_open_loan_for_copy(copy)
        if loan is None:
            logger.error("Aucun pret ouvert pour un exemplaire en pret", copy_id=copy.copy_id)
            raise InconsistentStateError(
                f"Aucun pret ouvert trouve pour l'exemplaire '{copy.copy_id}'"
            )

        overdue = return_date > loan.due_date
        loan.close(return_date)
        copy.mark_returned()
        member = loan.member
        member.detach_loan(loan)

        self._gateway.mark_loan_updated(loan)
        self._gateway.save_copy(copy)
        self._gateway.save_member(member)

        logger.info(
            "Retour enregistre",
            copy_id=copy.copy_id,
            membership_number=member.membership_number,
            overdue=overdue,
        )
        return loan

    # ------------------------------------------------------------------
    # Historique
    # ------------------------------------------------------------------

    @serialized
    def list_active_loans(self) -> list[Loan]:
        return [loan for loan in self._gateway.list_loans() if not loan.is_returned()]

    @serialized
    def list_loans(self) -> list[Loan]:
        return self._gateway.list_loans()

    @serialized
    def list_overdue_loans(self, as_of: date) -> list[Loan]:
        """Retourne les prets ouverts dont l'echeance est depassee a la date donnee."""
        as_of = ensure_date(as_of, "La date de reference")
        return [loan for loan in self._gateway.list_loans() if loan.is_overdue(as_of)]
