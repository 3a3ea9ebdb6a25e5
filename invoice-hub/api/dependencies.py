"""
FastAPI dependencies.

Routers receive the document store through `Depends(get_document_store)` so
tests can substitute an in-memory store with `app.dependency_overrides`.
"""

from functools import lru_cache

from repositories.document_store import DocumentStore, SupabaseDocumentStore


@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    """Shared Supabase-backed store; the client connects on first query."""
    return SupabaseDocumentStore()
