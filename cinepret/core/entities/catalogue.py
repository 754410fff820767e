"""
Catalogue entities.

A Film is a catalogued title; a Copy is one physical lendable unit of a Film.
The Film keeps the ordered list of its copies, each Copy keeps a fixed
reference to its Film plus its current lending state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from loguru import logger

from cinepret.utils.helpers import ensure_not_blank

if TYPE_CHECKING:
    from cinepret.core.entities.lending import Member


@dataclass(eq=False)
class Film:
    """
    A catalogued title, identified by its exact title string.

    Attributes:
        title: Natural key (non-empty, case-sensitive)
        copies: Read-only snapshot of the copies registered on this film
    """

    title: str
    _copies: list[Copy] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        ensure_not_blank(self.title, "Le titre du film")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Film):
            return NotImplemented
        return self.title == other.title

    def __hash__(self) -> int:
        return hash(self.title)

    @property
    def copies(self) -> tuple[Copy, ...]:
        return tuple(self._copies)

    @property
    def total_copies(self) -> int:
        return len(self._copies)

    @property
    def number_available(self) -> int:
        """Number of copies not currently on loan."""
        return sum(1 for copy in self._copies if not copy.on_loan)

    def add_copy(self, copy: Copy) -> bool:
        """
        Register a copy on this film.

        The copy is only registered when it belongs to this film. A copy
        owned by another film is ignored and False is returned.
        """
        if copy is None or copy.film != self:
            logger.debug(
                "Exemplaire ignore: film different",
                film=self.title,
                copy_id=getattr(copy, "copy_id", None),
            )
            return False
        self._copies.append(copy)
        return True


@dataclass(eq=False)
class Copy:
    """
    One physical copy of a Film.

    Attributes:
        copy_id: Natural key, unique across the whole catalogue
        film: Owning film, fixed at creation
        on_loan: True while an open loan references this copy
        borrower: Member holding the copy, None when available
    """

    copy_id: str
    film: Film = field(repr=False)
    _on_loan: bool = field(default=False, init=False, repr=False)
    _borrower: Optional[Member] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        ensure_not_blank(self.copy_id, "L'identifiant d'exemplaire")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Copy):
            return NotImplemented
        return self.copy_id == other.copy_id

    def __hash__(self) -> int:
        return hash(self.copy_id)

    def __repr__(self) -> str:
        borrower = self._borrower.membership_number if self._borrower else None
        return (
            f"Copy(copy_id={self.copy_id!r}, film={self.film.title!r}, "
            f"on_loan={self._on_loan}, borrower={borrower!r})"
        )

    @property
    def on_loan(self) -> bool:
        return self._on_loan

    @property
    def borrower(self) -> Optional[Member]:
        return self._borrower

    def mark_borrowed(self, member: Member) -> None:
        self._on_loan = True
        self._borrower = member

    def mark_returned(self) -> None:
        self._on_loan = False
        self._borrower = None
