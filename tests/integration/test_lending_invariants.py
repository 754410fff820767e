"""
Tests d'integration du service de pret sur les deux gateways.

Verifie, apres chaque operation d'un scenario, que les miroirs
(Copy.on_loan, Member.open_loans) restent coherents avec l'historique
des prets, en memoire comme en SQLite.
"""

from datetime import date, datetime, timedelta

import pytest

from cinepret.core.exceptions import (
    AlreadyOnLoanError,
    DuplicateKeyError,
    LoanLimitExceededError,
    NotOnLoanError,
    ValidationError,
)
from cinepret.services.lending import LendingService
from cinepret.utils.constants import MAX_LOANS

DAY_0 = date(2024, 12, 30)


def assert_invariants(service: LendingService) -> None:
    """Controle les invariants exemplaire/adherent/pret sur tout le catalogue."""
    loans = service.list_loans()

    for copy in service.list_copies():
        open_loans = [l for l in loans if l.copy == copy and not l.is_returned()]
        assert copy.on_loan == (len(open_loans) == 1)
        assert len(open_loans) <= 1
        if copy.on_loan:
            assert copy.borrower is open_loans[0].member
        else:
            assert copy.borrower is None

    for member in service.list_members():
        open_loans = [l for l in loans if l.member == member and not l.is_returned()]
        assert member.open_loan_count == len(open_loans)
        assert member.open_loan_count <= MAX_LOANS

    for loan in loans:
        assert loan.due_date == loan.borrow_date + timedelta(days=3)


def test_end_to_end_borrow_and_return(any_service):
    """Inception avec D1/D2, M1 emprunte D1 au jour 0 et le rend au jour 2."""
    service = any_service
    film = service.add_film("Inception")
    service.add_copy(film, "D1")
    service.add_copy(film, "D2")
    member = service.add_member("M1", "Ada")
    d1 = service.find_copy_by_id("D1")

    loan = service.borrow_copy(d1, member, DAY_0)
    assert loan.due_date == DAY_0 + timedelta(days=3)
    assert loan.due_date == date(2025, 1, 2)
    assert service.number_available(film) == 1
    assert_invariants(service)

    service.return_copy(d1, DAY_0 + timedelta(days=2))
    assert service.number_available(film) == 2
    assert member.open_loan_count == 0

    history = service.list_loans()
    assert len(history) == 1
    assert history[0].borrow_date == DAY_0
    assert history[0].return_date == DAY_0 + timedelta(days=2)
    assert_invariants(service)


def test_rejections_leave_state_unchanged(any_service):
    service = any_service
    film = service.add_film("The Matrix")
    copies = [service.add_copy(film, f"MX{i}") for i in range(MAX_LOANS + 1)]
    busy = service.add_member("M1", "Ada")
    other = service.add_member("M2", "Grace")

    for copy in copies[:MAX_LOANS]:
        service.borrow_copy(copy, busy, DAY_0)
    assert_invariants(service)

    with pytest.raises(LoanLimitExceededError):
        service.borrow_copy(copies[-1], busy, DAY_0)
    with pytest.raises(AlreadyOnLoanError):
        service.borrow_copy(copies[0], other, DAY_0)
    with pytest.raises(NotOnLoanError):
        service.return_copy(copies[-1], DAY_0)
    with pytest.raises(DuplicateKeyError):
        service.add_film("The Matrix")

    assert copies[-1].on_loan is False
    assert other.open_loan_count == 0
    assert len(service.list_loans()) == MAX_LOANS
    assert len(service.list_films()) == 1
    assert_invariants(service)


def test_invariants_over_mixed_sequence(any_service):
    service = any_service
    matrix = service.add_film("The Matrix")
    inception = service.add_film("Inception")
    copies = [service.add_copy(matrix, f"MX{i}") for i in range(3)]
    copies += [service.add_copy(inception, f"IN{i}") for i in range(3)]
    members = [service.add_member(f"M{i}", f"Adherent {i}") for i in range(3)]

    day = DAY_0
    for step in range(30):
        copy = copies[(step * 5) % len(copies)]
        member = members[step % len(members)]
        day += timedelta(days=1)
        if copy.on_loan:
            service.return_copy(copy, day)
        elif member.can_borrow():
            service.borrow_copy(copy, member, day)
        assert_invariants(service)

    assert len(service.list_active_loans()) == sum(m.open_loan_count for m in members)


class TestDateArguments:
    """Les dates sont controlees et normalisees avant toute mutation."""

    @pytest.fixture
    def on_loan(self, any_service):
        service = any_service
        film = service.add_film("Inception")
        copy = service.add_copy(film, "D1")
        member = service.add_member("M1", "Ada")
        loan = service.borrow_copy(copy, member, date(2024, 1, 1))
        return service, copy, member, loan

    def test_return_with_datetime_keeps_calendar_day(self, on_loan):
        service, copy, member, loan = on_loan

        returned = service.return_copy(copy, datetime(2024, 1, 3, 10, 30))

        assert returned.return_date == date(2024, 1, 3)
        assert not isinstance(returned.return_date, datetime)
        assert copy.on_loan is False
        assert member.open_loan_count == 0
        assert_invariants(service)

    def test_return_with_string_changes_nothing(self, on_loan):
        service, copy, member, loan = on_loan

        with pytest.raises(ValidationError):
            service.return_copy(copy, "2024-01-03")

        assert copy.on_loan is True
        assert member.open_loans == (loan,)
        assert loan.is_returned() is False
        # Le stockage reste utilisable
        service.return_copy(copy, date(2024, 1, 3))
        assert_invariants(service)

    def test_borrow_with_datetime(self, any_service):
        film = any_service.add_film("Alien")
        copy = any_service.add_copy(film, "AL1")
        member = any_service.add_member("M1", "Ada")

        loan = any_service.borrow_copy(copy, member, datetime(2024, 12, 30, 23, 59))

        assert loan.borrow_date == date(2024, 12, 30)
        assert loan.due_date == date(2025, 1, 2)
        assert not isinstance(loan.due_date, datetime)

    def test_borrow_with_string_changes_nothing(self, any_service):
        film = any_service.add_film("Alien")
        copy = any_service.add_copy(film, "AL1")
        member = any_service.add_member("M1", "Ada")

        with pytest.raises(ValidationError):
            any_service.borrow_copy(copy, member, "2024-01-01")

        assert copy.on_loan is False
        assert member.open_loan_count == 0
        assert any_service.list_loans() == []

    def test_overdue_listing_accepts_datetime(self, on_loan):
        service, copy, member, loan = on_loan

        assert service.list_overdue_loans(datetime(2024, 1, 10, 8)) == [loan]
        assert service.list_overdue_loans(datetime(2024, 1, 4, 23, 59)) == []

    def test_overdue_listing_rejects_string(self, on_loan):
        service = on_loan[0]
        with pytest.raises(ValidationError):
            service.list_overdue_loans("2024-01-10")
