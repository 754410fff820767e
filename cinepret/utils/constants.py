"""
Constantes globales pour CinePret.

Ce module contient les regles de pret fixes de la mediatheque:
- Duree d'un pret (en jours)
- Nombre maximal de prets ouverts par adherent
- Catalogue d'exemple utilise par la commande seed
"""

# Duree d'un pret: due_date = borrow_date + LOAN_PERIOD_DAYS
LOAN_PERIOD_DAYS = 3

# Nombre maximal de prets ouverts simultanement pour un adherent
MAX_LOANS = 6

# Catalogue d'exemple: titre -> identifiants des exemplaires
SAMPLE_FILMS: dict[str, tuple[str, ...]] = {
    "The Matrix": ("DVD001", "DVD002"),
    "Inception": ("DVD003", "DVD004"),
    "Interstellar": ("DVD005",),
}

# Adherents d'exemple: numero d'adherent -> nom
SAMPLE_MEMBERS: dict[str, str] = {
    "M001": "John Doe",
    "M002": "Jane Smith",
}
