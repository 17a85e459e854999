"""Typer command line interface (`archive`)."""
