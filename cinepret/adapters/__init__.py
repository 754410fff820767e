"""Adaptateurs d'entree (CLI) vers le LendingService."""
