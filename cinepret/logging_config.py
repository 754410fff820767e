"""
Configuration du logging de CinePret via loguru.

Trois sorties, toutes derivees de Settings (variables CINEPRET_LOG_*):
- Console : messages courts du paquet cinepret, au niveau configure
- Fichier applicatif : tous les messages cinepret en JSON, avec rotation
- Journal des prets : uniquement les emprunts et retours, en JSON, a cote
  du fichier applicatif (prets.log)
"""

import sys
from pathlib import Path

from loguru import logger

from cinepret.config import Settings

LOAN_JOURNAL_NAME = "prets.log"

# Evenements ecrits dans le journal des prets
LOAN_EVENTS = frozenset({"Emprunt enregistre", "Retour enregistre"})


def loan_journal_path(settings: Settings) -> Path:
    """Chemin du journal des prets, dans le repertoire du fichier de log."""
    return settings.log_file.with_name(LOAN_JOURNAL_NAME)


def _is_loan_event(record) -> bool:
    return record["message"] in LOAN_EVENTS and "copy_id" in record["extra"]


def configure_logging(settings: Settings) -> None:
    """Installe les handlers loguru a partir de la configuration.

    Args :
        settings : Configuration chargee (niveau, fichier, rotation, retention)
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level,
        filter="cinepret",
        format="<level>{level: <8}</level> | <cyan>{name}</cyan> | {message} <dim>{extra}</dim>",
        colorize=True,
    )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        filter="cinepret",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        enqueue=True,
    )

    # Piste d'audit: pas de rotation par taille, un pret ne doit pas disparaitre
    logger.add(
        loan_journal_path(settings),
        level="INFO",
        filter=_is_loan_event,
        serialize=True,
        enqueue=True,
    )

    logger.debug(
        "Logging configure",
        log_file=str(settings.log_file),
        storage=settings.storage_backend,
    )
