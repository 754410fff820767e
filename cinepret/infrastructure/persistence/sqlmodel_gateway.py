"""
Implementation SQLModel du gateway de catalogue.

Implemente ICatalogueGateway pour la persistance dans SQLite via SQLModel.

Les entites du domaine forment un graphe de references croisees
(exemplaire <-> adherent <-> pret). Pour qu'une entite logique ne soit
jamais dupliquee, le gateway maintient une identity map indexee par cle
naturelle: au premier acces, tout le catalogue est charge et le graphe
reconstruit; ensuite les lectures sont servies par la map et chaque
save_*/mark_loan_updated ecrit la ligne correspondante en base.
"""

from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from cinepret.core.entities import Copy, Film, Loan, Member
from cinepret.core.exceptions import InconsistentStateError
from cinepret.core.ports.catalogue import ICatalogueGateway
from cinepret.infrastructure.persistence.models import (
    CopyModel,
    FilmModel,
    LoanModel,
    MemberModel,
)


class SQLModelCatalogueGateway(ICatalogueGateway):
    """
    Gateway SQLModel avec identity map.

    Stocke par valeur: une mutation d'entite n'est visible en base
    qu'apres un appel explicite a save_copy, save_member ou
    mark_loan_updated.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le gateway avec une session SQLModel.

        Args:
            session: Session SQLModel active pour les operations DB
        """
        self._session = session
        self._loaded = False
        self._films: dict[str, Film] = {}
        self._copies: dict[str, Copy] = {}
        self._members: dict[str, Member] = {}
        self._loans: list[Loan] = []

    # ------------------------------------------------------------------
    # Chargement du graphe
    # ------------------------------------------------------------------

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return

        for film_model in self._session.exec(select(FilmModel).order_by(FilmModel.id)):
            self._films[film_model.title] = Film(title=film_model.title)

        for member_model in self._session.exec(
            select(MemberModel).order_by(MemberModel.id)
        ):
            self._members[member_model.membership_number] = Member(
                membership_number=member_model.membership_number,
                name=member_model.name,
            )

        for copy_model in self._session.exec(select(CopyModel).order_by(CopyModel.id)):
            film = self._films.get(copy_model.film_title)
            if film is None:
                raise InconsistentStateError(
                    f"Exemplaire '{copy_model.copy_id}' rattache a un film "
                    f"inconnu '{copy_model.film_title}'"
                )
            copy = Copy(copy_id=copy_model.copy_id, film=film)
            film.add_copy(copy)
            self._copies[copy.copy_id] = copy

        for loan_model in self._session.exec(select(LoanModel).order_by(LoanModel.id)):
            self._loans.append(self._to_loan(loan_model))

        self._check_copy_flags()
        self._loaded = True
        logger.debug(
            "Catalogue charge",
            films=len(self._films),
            copies=len(self._copies),
            members=len(self._members),
            loans=len(self._loans),
        )

    def _to_loan(self, model: LoanModel) -> Loan:
        """
        Reconstruit un pret et ses miroirs (exemplaire, adherent).

        Args:
            model: La ligne LoanModel depuis la DB

        Returns:
            L'entite Loan rattachee aux entites de l'identity map
        """
        copy = self._copies.get(model.copy_id)
        member = self._members.get(model.membership_number)
        if copy is None or member is None:
            raise InconsistentStateError(
                f"Pret {model.id} reference un exemplaire ou un adherent inconnu"
            )

        loan = Loan(copy=copy, member=member, borrow_date=model.borrow_date)
        loan.id = str(model.id)
        # La date d'echeance enregistree fait foi
        loan.due_date = model.due_date

        if model.return_date is not None:
            loan.close(model.return_date)
            return loan

        copy.mark_borrowed(member)
        if not member.attach_loan(loan):
            raise InconsistentStateError(
                f"Adherent '{member.membership_number}' au-dela de la limite de prets"
            )
        return loan

    def _check_copy_flags(self) -> None:
        """Signale les lignes copies dont l'etat diverge des prets ouverts."""
        statement = select(CopyModel)
        for copy_model in self._session.exec(statement):
            copy = self._copies[copy_model.copy_id]
            if copy_model.on_loan != copy.on_loan:
                logger.warning(
                    "Etat d'exemplaire divergent de l'historique des prets",
                    copy_id=copy.copy_id,
                    stored=copy_model.on_loan,
                    actual=copy.on_loan,
                )

    def _commit(self) -> None:
        """Valide la transaction, ou l'annule pour laisser la session utilisable."""
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            logger.exception("Echec d'ecriture du catalogue")
            raise

    # ------------------------------------------------------------------
    # Films
    # ------------------------------------------------------------------

    def save_film(self, film: Film) -> None:
        self._ensure_loaded()
        statement = select(FilmModel).where(FilmModel.title == film.title)
        if self._session.exec(statement).first() is None:
            self._session.add(FilmModel(title=film.title))
            self._commit()
        self._films[film.title] = film

    def find_film_by_title(self, title: str) -> Optional[Film]:
        self._ensure_loaded()
        return self._films.get(title)

    def list_films(self) -> list[Film]:
        self._ensure_loaded()
        return list(self._films.values())

    # ------------------------------------------------------------------
    # Exemplaires
    # ------------------------------------------------------------------

    def save_copy(self, copy: Copy) -> None:
        self._ensure_loaded()
        statement = select(CopyModel).where(CopyModel.copy_id == copy.copy_id)
        existing = self._session.exec(statement).first()
        borrower_number = copy.borrower.membership_number if copy.borrower else None

        if existing:
            # Mise a jour de l'etat de pret
            existing.on_loan = copy.on_loan
            existing.borrower_number = borrower_number
            self._session.add(existing)
        else:
            # Insertion
            self._session.add(
                CopyModel(
                    copy_id=copy.copy_id,
                    film_title=copy.film.title,
                    on_loan=copy.on_loan,
                    borrower_number=borrower_number,
                )
            )
        self._commit()
        self._copies[copy.copy_id] = copy

    def find_copy_by_id(self, copy_id: str) -> Optional[Copy]:
        self._ensure_loaded()
        return self._copies.get(copy_id)

    def list_copies(self) -> list[Copy]:
        self._ensure_loaded()
        return list(self._copies.values())

    # ------------------------------------------------------------------
    # Adherents
    # ------------------------------------------------------------------

    def save_member(self, member: Member) -> None:
        self._ensure_loaded()
        statement = select(MemberModel).where(
            MemberModel.membership_number == member.membership_number
        )
        existing = self._session.exec(statement).first()

        if existing:
            existing.name = member.name
            self._session.add(existing)
        else:
            self._session.add(
                MemberModel(
                    membership_number=member.membership_number,
                    name=member.name,
                )
            )
        self._commit()
        self._members[member.membership_number] = member

    def find_member_by_number(self, membership_number: str) -> Optional[Member]:
        self._ensure_loaded()
        return self._members.get(membership_number)

    def list_members(self) -> list[Member]:
        self._ensure_loaded()
        return list(self._members.values())

    # ------------------------------------------------------------------
    # Prets
    # ------------------------------------------------------------------

    def save_loan(self, loan: Loan) -> None:
        self._ensure_loaded()
        if loan.id is not None:
            # Deja enregistre: simple reecriture
            self.mark_loan_updated(loan)
            return

        model = LoanModel(
            copy_id=loan.copy.copy_id,
            membership_number=loan.member.membership_number,
            borrow_date=loan.borrow_date,
            due_date=loan.due_date,
            return_date=loan.return_date,
        )
        self._session.add(model)
        self._commit()
        self._session.refresh(model)
        loan.id = str(model.id)
        self._loans.append(loan)

    def mark_loan_updated(self, loan: Loan) -> None:
        self._ensure_loaded()
        if loan.id is None:
            raise InconsistentStateError(
                f"Le pret de '{loan.copy.copy_id}' n'a jamais ete enregistre"
            )
        model = self._session.get(LoanModel, int(loan.id))
        if model is None:
            raise InconsistentStateError(f"Pret {loan.id} introuvable en base")

        model.return_date = loan.return_date
        self._session.add(model)
        self._commit()

    def find_open_loan_for_copy(self, copy: Copy) -> Optional[Loan]:
        self._ensure_loaded()
        for loan in self._loans:
            if loan.copy == copy and not loan.is_returned():
                return loan
        return None

    def list_loans(self) -> list[Loan]:
        self._ensure_loaded()
        return list(self._loans)
