"""Typer command groups, one per provider."""
