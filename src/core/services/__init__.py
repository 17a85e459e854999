"""Orchestration services (batching, retry rounds)."""
