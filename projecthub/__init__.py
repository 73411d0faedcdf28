"""
ProjectHub Backend — Application Package Initializer
=====================================================

What: Marks the `projecthub` directory as a Python package.
Who:  Used by uvicorn (`projecthub.main:app`), pytest and the client wrapper.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │      Routes + Dependencies (API)    │  ← HTTP concerns, request pipeline
    ├─────────────────────────────────────┤
    │     Services (Data Access + Rules)  │  ← MongoDB operations, ownership
    ├─────────────────────────────────────┤
    │   Validation / Schemas / Models     │  ← Pure checks, API contracts, documents
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async PyMongo client
    └─────────────────────────────────────┘

    `projecthub.client` sits outside this stack: it is the HTTP wrapper that
    front-ends use to talk to the API.
"""

__version__ = "1.0.0"
