"""
Services applicatifs de CinePret.

- LendingService : regles de pret (unicite, limites, emprunt/retour)
- seed_sample_catalogue : peuplement avec des donnees d'exemple
"""

from cinepret.services.lending import LendingService
from cinepret.services.seeding import SeedResult, seed_sample_catalogue

__all__ = [
    "LendingService",
    "SeedResult",
    "seed_sample_catalogue",
]
