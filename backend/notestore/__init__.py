"""
NoteStore — Application Package Initializer
=============================================

What: Marks the `notestore` directory as a Python package.
Why:  Enables module imports like `from notestore.config import Settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest,
      uvicorn and the `notestore` console script.

Architecture Note:
    The service follows the same thin layering as any FastAPI backend:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Services (NoteStore)         │  ← file I/O, preconditions
    ├─────────────────────────────────────┤
    │          Schemas (Pydantic)         │  ← response contracts
    ├─────────────────────────────────────┤
    │      Storage directory (*.txt)      │  ← the only source of truth
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
