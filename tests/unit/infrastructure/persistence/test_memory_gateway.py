"""Tests pour InMemoryCatalogueGateway."""

from datetime import date

from cinepret.core.entities import Copy, Film, Loan, Member
from cinepret.infrastructure.persistence.memory_gateway import InMemoryCatalogueGateway


class TestInMemoryCatalogueGateway:
    """Stockage par reference partagee."""

    def test_find_returns_none_when_missing(self):
        gateway = InMemoryCatalogueGateway()
        assert gateway.find_film_by_title("Inception") is None
        assert gateway.find_copy_by_id("D1") is None
        assert gateway.find_member_by_number("M1") is None
        assert gateway.find_open_loan_for_copy(Copy("D1", Film("Inception"))) is None

    def test_save_keeps_shared_reference(self):
        gateway = InMemoryCatalogueGateway()
        film = Film(title="Inception")
        gateway.save_film(film)
        assert gateway.find_film_by_title("Inception") is film

    def test_lists_preserve_insertion_order(self):
        gateway = InMemoryCatalogueGateway()
        for title in ("B", "A", "C"):
            gateway.save_film(Film(title=title))
        assert [f.title for f in gateway.list_films()] == ["B", "A", "C"]

    def test_list_returns_copy_of_storage(self):
        gateway = InMemoryCatalogueGateway()
        gateway.save_member(Member("M1", "Ada"))
        gateway.list_members().clear()
        assert len(gateway.list_members()) == 1

    def test_open_loan_lookup_skips_closed_loans(self):
        gateway = InMemoryCatalogueGateway()
        film = Film("Inception")
        copy = Copy("D1", film)
        member = Member("M1", "Ada")

        closed = Loan(copy=copy, member=member, borrow_date=date(2024, 1, 1))
        closed.close(date(2024, 1, 2))
        gateway.save_loan(closed)
        assert gateway.find_open_loan_for_copy(copy) is None

        open_loan = Loan(copy=copy, member=member, borrow_date=date(2024, 1, 3))
        gateway.save_loan(open_loan)
        assert gateway.find_open_loan_for_copy(copy) is open_loan
        assert gateway.list_loans() == [closed, open_loan]

    def test_save_loan_assigns_id_once(self):
        gateway = InMemoryCatalogueGateway()
        loan = Loan(copy=Copy("D1", Film("I")), member=Member("M1", "Ada"), borrow_date=date(2024, 1, 1))

        gateway.save_loan(loan)
        gateway.save_loan(loan)

        assert loan.id == "1"
        assert len(gateway.list_loans()) == 1

    def test_mark_loan_updated_is_noop(self):
        gateway = InMemoryCatalogueGateway()
        loan = Loan(copy=Copy("D1", Film("I")), member=Member("M1", "Ada"), borrow_date=date(2024, 1, 1))
        gateway.save_loan(loan)
        loan.close(date(2024, 1, 2))

        gateway.mark_loan_updated(loan)
        assert gateway.list_loans()[0].return_date == date(2024, 1, 2)
