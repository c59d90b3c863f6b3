"""SchoolBoard integrations package."""

from integrations.firestore import (
    DocumentRef,
    FirestoreClient,
    FirestoreError,
    ref_id,
)

__all__ = [
    "DocumentRef",
    "FirestoreClient",
    "FirestoreError",
    "ref_id",
]
