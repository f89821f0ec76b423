"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) and the error taxonomy live here.
- The domain knows nothing about the CLI or the simulated sources.
"""
