"""Domain models and errors.

Why:
- Pure, strict data structures live here (Pydantic v2).
- The domain knows nothing about HTTP or the CLI: only capture concepts.
"""
