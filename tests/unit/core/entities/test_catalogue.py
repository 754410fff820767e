"""
Tests pour les entites du catalogue (Film, Copy).

Verifie les cles naturelles, les compteurs derives et le garde de add_copy.
"""

import pytest

from cinepret.core.entities import Copy, Film, Member
from cinepret.core.exceptions import ValidationError


class TestFilmEntity:
    """Tests pour l'entite Film."""

    def test_new_film_has_no_copies(self):
        film = Film(title="Inception")
        assert film.copies == ()
        assert film.total_copies == 0
        assert film.number_available == 0

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title_rejected(self, title):
        """Le titre est une cle naturelle obligatoire."""
        with pytest.raises(ValidationError):
            Film(title=title)

    def test_add_copy_of_same_film(self):
        film = Film(title="Inception")
        copy = Copy(copy_id="D1", film=film)

        assert film.add_copy(copy) is True
        assert film.copies == (copy,)
        assert film.total_copies == 1

    def test_add_copy_of_other_film_is_ignored(self):
        """Un exemplaire d'un autre film est ignore sans erreur."""
        film = Film(title="Inception")
        other = Film(title="The Matrix")

        assert film.add_copy(Copy(copy_id="D1", film=other)) is False
        assert film.total_copies == 0

    def test_number_available_counts_copies_not_on_loan(self):
        film = Film(title="Inception")
        d1 = Copy(copy_id="D1", film=film)
        d2 = Copy(copy_id="D2", film=film)
        film.add_copy(d1)
        film.add_copy(d2)

        d1.mark_borrowed(Member(membership_number="M1", name="Ada"))

        assert film.total_copies == 2
        assert film.number_available == 1

    def test_copies_snapshot_is_read_only(self):
        film = Film(title="Inception")
        film.add_copy(Copy(copy_id="D1", film=film))

        snapshot = film.copies
        assert isinstance(snapshot, tuple)
        assert film.total_copies == 1

    def test_equality_uses_title_only(self):
        assert Film(title="Inception") == Film(title="Inception")
        assert Film(title="Inception") != Film(title="inception")
        assert len({Film(title="Inception"), Film(title="Inception")}) == 1


class TestCopyEntity:
    """Tests pour l'entite Copy."""

    def test_new_copy_is_available(self):
        copy = Copy(copy_id="D1", film=Film(title="Inception"))
        assert copy.on_loan is False
        assert copy.borrower is None

    def test_mark_borrowed_then_returned(self):
        member = Member(membership_number="M1", name="Ada")
        copy = Copy(copy_id="D1", film=Film(title="Inception"))

        copy.mark_borrowed(member)
        assert copy.on_loan is True
        assert copy.borrower is member

        copy.mark_returned()
        assert copy.on_loan is False
        assert copy.borrower is None

    def test_blank_copy_id_rejected(self):
        with pytest.raises(ValidationError):
            Copy(copy_id=" ", film=Film(title="Inception"))

    def test_equality_uses_copy_id_only(self):
        film = Film(title="Inception")
        assert Copy(copy_id="D1", film=film) == Copy(copy_id="D1", film=Film(title="Autre"))
        assert Copy(copy_id="D1", film=film) != Copy(copy_id="D2", film=film)

    def test_repr_does_not_recurse(self):
        """Le repr ne suit pas les references croisees film/adherent."""
        film = Film(title="Inception")
        copy = Copy(copy_id="D1", film=film)
        film.add_copy(copy)
        copy.mark_borrowed(Member(membership_number="M1", name="Ada"))

        text = repr(copy)
        assert "D1" in text
        assert "Inception" in text
        assert "M1" in text
