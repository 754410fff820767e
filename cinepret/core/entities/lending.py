"""
Lending entities.

A Member borrows copies; a Loan binds one Copy to one Member for the fixed
loan period. The Loan is the source of truth; Copy.on_loan and
Member.open_loans mirror it and are kept in step by the LendingService.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING, Optional

from cinepret.core.exceptions import InconsistentStateError
from cinepret.utils.constants import LOAN_PERIOD_DAYS, MAX_LOANS
from cinepret.utils.helpers import ensure_not_blank

if TYPE_CHECKING:
    from cinepret.core.entities.catalogue import Copy


@dataclass(eq=False)
class Member:
    """
    A person entitled to borrow copies.

    Attributes:
        membership_number: Natural key (non-empty, unique)
        name: Display name, can be changed with rename()
        open_loans: Read-only snapshot of the loans not yet returned
    """

    membership_number: str
    name: str
    _open_loans: list[Loan] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        ensure_not_blank(self.membership_number, "Le numero d'adherent")
        ensure_not_blank(self.name, "Le nom de l'adherent")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Member):
            return NotImplemented
        return self.membership_number == other.membership_number

    def __hash__(self) -> int:
        return hash(self.membership_number)

    @property
    def open_loans(self) -> tuple[Loan, ...]:
        return tuple(self._open_loans)

    @property
    def open_loan_count(self) -> int:
        return len(self._open_loans)

    def rename(self, name: str) -> None:
        self.name = ensure_not_blank(name, "Le nom de l'adherent")

    def can_borrow(self) -> bool:
        return len(self._open_loans) < MAX_LOANS

    def attach_loan(self, loan: Loan) -> bool:
        """
        Append an open loan to this member.

        Returns False (and changes nothing) when the member already holds
        MAX_LOANS loans or when the loan belongs to another member.
        """
        if not self.can_borrow() or loan.member != self:
            return False
        self._open_loans.append(loan)
        return True

    def detach_loan(self, loan: Loan) -> None:
        """Remove a loan by object identity; no-op if it is not held."""
        self._open_loans = [held for held in self._open_loans if held is not loan]


@dataclass(eq=False)
class Loan:
    """
    A record binding one Copy to one Member.

    The due date is computed once at creation (borrow_date + LOAN_PERIOD_DAYS)
    and never recomputed. A loan is open until close() records a return date;
    closing is final, a second close() raises InconsistentStateError.

    Attributes:
        copy: The borrowed copy
        member: The borrowing member
        borrow_date: Day the copy left the shelf
        due_date: Day the copy is expected back
        return_date: Day the copy came back, None while open
        id: Storage identifier, assigned by the gateway (not part of equality)
    """

    copy: Copy
    member: Member
    borrow_date: date
    due_date: date = field(init=False)
    return_date: Optional[date] = field(default=None, init=False)
    id: Optional[str] = None

    def __post_init__(self) -> None:
        self.due_date = self.borrow_date + timedelta(days=LOAN_PERIOD_DAYS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Loan):
            return NotImplemented
        return (
            self.copy == other.copy
            and self.member == other.member
            and self.borrow_date == other.borrow_date
        )

    def __hash__(self) -> int:
        return hash((self.copy, self.member, self.borrow_date))

    def is_returned(self) -> bool:
        return self.return_date is not None

    def is_overdue(self, as_of: date) -> bool:
        if self.is_returned():
            return False
        return as_of > self.due_date

    def close(self, return_date: date) -> None:
        if self.is_returned():
            raise InconsistentStateError(
                f"Le pret de '{self.copy.copy_id}' est deja clos "
                f"(retour le {self.return_date.isoformat()})"
            )
        self.return_date = return_date
