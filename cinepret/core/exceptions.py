"""
Exceptions du domaine de pret.

Toutes les violations de regles metier derivent de LendingError, ce qui
permet a la CLI (ou a tout autre appelant) de les intercepter uniformement.
Aucune operation du LendingService ne leve autre chose qu'une de ces
exceptions pour un refus metier.
"""


class LendingError(Exception):
    """Classe de base de toutes les erreurs du domaine de pret."""


class ValidationError(LendingError):
    """Argument invalide: chaine vide, argument manquant ou seuil negatif."""


class DuplicateKeyError(LendingError):
    """Une entite avec la meme cle naturelle existe deja."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} '{key}' existe deja")


class LoanStateError(LendingError):
    """Precondition d'emprunt ou de retour non satisfaite."""


class AlreadyOnLoanError(LoanStateError):
    """L'exemplaire est deja en pret."""

    def __init__(self, copy_id: str) -> None:
        self.copy_id = copy_id
        super().__init__(f"L'exemplaire '{copy_id}' est deja en pret")


class LoanLimitExceededError(LoanStateError):
    """L'adherent a atteint le nombre maximal de prets ouverts."""

    def __init__(self, membership_number: str, limit: int) -> None:
        self.membership_number = membership_number
        self.limit = limit
        super().__init__(
            f"L'adherent '{membership_number}' a atteint la limite de {limit} prets"
        )


class NotOnLoanError(LoanStateError):
    """L'exemplaire n'est pas en pret."""

    def __init__(self, copy_id: str) -> None:
        self.copy_id = copy_id
        super().__init__(f"L'exemplaire '{copy_id}' n'est pas en pret")


class InconsistentStateError(LendingError):
    """
    Invariant casse entre exemplaires, adherents et prets.

    Signale un defaut ailleurs dans le systeme (pas une erreur utilisateur).
    Ne doit jamais etre ignoree silencieusement.
    """
