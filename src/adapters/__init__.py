"""Adapters: pure I/O (HTTP to archive.is, link files, output files)."""
