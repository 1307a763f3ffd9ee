"""Domain layer for debtbook."""
