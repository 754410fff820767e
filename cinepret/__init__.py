"""CinePret - gestion des prets d'une mediatheque de films."""

__version__ = "0.1.0"
