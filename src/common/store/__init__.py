from .document_store import DocumentStore, StoreError, StoreTimeoutError, DocumentNotFound

__all__ = ["DocumentStore", "StoreError", "StoreTimeoutError", "DocumentNotFound"]
