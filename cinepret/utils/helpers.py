"""Fonctions utilitaires de validation des arguments."""

from datetime import date, datetime
from typing import Any, Optional

from cinepret.core.exceptions import ValidationError


def is_blank(value: Optional[str]) -> bool:
    """Retourne True si la valeur est None, vide ou composee d'espaces."""
    return value is None or not str(value).strip()


def ensure_not_blank(value: Optional[str], label: str) -> str:
    """
    Verifie qu'une chaine obligatoire est renseignee.

    Args:
        value: Valeur a verifier
        label: Nom du champ, utilise dans le message d'erreur

    Returns:
        La valeur inchangee (pas de strip: les cles sont exactes)

    Raises:
        ValidationError: Si la valeur est None, vide ou blanche
    """
    if is_blank(value):
        raise ValidationError(f"{label} ne peut pas etre vide")
    return value


def ensure_present(value: Any, label: str) -> Any:
    """Verifie qu'un argument obligatoire n'est pas None."""
    if value is None:
        raise ValidationError(f"{label} est obligatoire")
    return value


def ensure_non_negative(value: int, label: str) -> int:
    """Verifie qu'un seuil numerique est positif ou nul."""
    if value is None:
        raise ValidationError(f"{label} est obligatoire")
    if value < 0:
        raise ValidationError(f"{label} ne peut pas etre negatif")
    return value


def ensure_date(value: Any, label: str) -> date:
    """
    Verifie qu'un argument est une date calendaire.

    Un datetime est ramene a sa date: les prets se comptent en jours.

    Raises:
        ValidationError: Si la valeur est None ou n'est pas une date
    """
    if value is None:
        raise ValidationError(f"{label} est obligatoire")
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise ValidationError(f"{label} doit etre une date, pas {type(value).__name__}")
    return value
