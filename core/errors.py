"""Error taxonomy shared by the usecases."""

from __future__ import annotations


class TrackerError(Exception):
    """Exception de base pour les opérations métier du tracker."""

    code = "TRACKER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DomainValidationError(TrackerError, ValueError):
    """Levée lorsqu'une entrée est corrigeable par l'appelant (champ manquant, nombre invalide, date mal formée)."""

    code = "VALIDATION_ERROR"


class ProductNotFoundError(TrackerError):
    """Levée lorsqu'un produit n'est pas trouvé en base."""

    code = "NOT_FOUND"


class ActivityNotFoundError(TrackerError):
    """Levée lorsqu'une activité n'est pas trouvée en base."""

    code = "NOT_FOUND"


class MonthlyCostNotFoundError(TrackerError):
    """Levée lorsque les coûts d'un mois sont introuvables après écriture."""

    code = "NOT_FOUND"


__all__ = [
    "TrackerError",
    "DomainValidationError",
    "ProductNotFoundError",
    "ActivityNotFoundError",
    "MonthlyCostNotFoundError",
]
