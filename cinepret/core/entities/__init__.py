"""
Business entities representing the lending catalogue.

Entities are mutable objects with identity (their natural key).
They enforce their own local rules; cross-entity rules live in the
LendingService.

Exports:
- Film: A catalogued title
- Copy: One physical lendable copy of a Film
- Member: A person entitled to borrow
- Loan: A copy lent to a member for a fixed period
"""

from cinepret.core.entities.catalogue import Copy, Film
from cinepret.core.entities.lending import Loan, Member

__all__ = [
    "Film",
    "Copy",
    "Member",
    "Loan",
]
