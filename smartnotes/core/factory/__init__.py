"""
Factory modules for creating SmartNotes components.

Provides modular factories for the LLM provider, note store and blob store.
"""

from smartnotes.core.factory.llm_factory import LLMFactory
from smartnotes.core.factory.store_factory import BlobStoreFactory, NoteStoreFactory

__all__ = [
    "LLMFactory",
    "NoteStoreFactory",
    "BlobStoreFactory",
]
