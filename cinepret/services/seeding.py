"""
Peuplement du catalogue avec des donnees d'exemple.

Passe exclusivement par le LendingService: les regles d'unicite
s'appliquent et les entrees deja presentes sont ignorees, ce qui rend
le peuplement idempotent.
"""

from dataclasses import dataclass

from loguru import logger

from cinepret.core.exceptions import DuplicateKeyError
from cinepret.services.lending import LendingService
from cinepret.utils.constants import SAMPLE_FILMS, SAMPLE_MEMBERS


@dataclass
class SeedResult:
    """Compteurs d'un peuplement."""

    films: int = 0
    copies: int = 0
    members: int = 0
    skipped: int = 0


def seed_sample_catalogue(service: LendingService) -> SeedResult:
    """
    Ajoute les films, exemplaires et adherents d'exemple.

    Args:
        service: Service de pret a peupler

    Returns:
        SeedResult avec le nombre d'entites creees et ignorees
    """
    result = SeedResult()

    for title, copy_ids in SAMPLE_FILMS.items():
        try:
            film = service.add_film(title)
            result.films += 1
        except DuplicateKeyError:
            logger.debug("Film d'exemple deja present", title=title)
            film = service.find_film_by_title(title)
            result.skipped += 1

        for copy_id in copy_ids:
            try:
                service.add_copy(film, copy_id)
                result.copies += 1
            except DuplicateKeyError:
                logger.debug("Exemplaire d'exemple deja present", copy_id=copy_id)
                result.skipped += 1

    for membership_number, name in SAMPLE_MEMBERS.items():
        try:
            service.add_member(membership_number, name)
            result.members += 1
        except DuplicateKeyError:
            logger.debug(
                "Adherent d'exemple deja present", membership_number=membership_number
            )
            result.skipped += 1

    logger.info(
        "Catalogue d'exemple charge",
        films=result.films,
        copies=result.copies,
        members=result.members,
        skipped=result.skipped,
    )
    return result
