"""
Firestore Entries Repository - Firebase Admin SDK operations.

Documents in the ``entries`` collection look like
``{userId, entryText, timestamp, sentimentSummary?}`` with ``timestamp`` set
by the server. Listing needs the composite index (userId ASC, timestamp DESC).
"""

import logging
from typing import List, Optional

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from journal_service.features.database.repositories.base import EntryRepository, ensure_owner
from journal_service.features.entries.models import FirestoreAdminRecord, RawEntryRecord
from journal_service.shared.errors import BackendUnavailableError

logger = logging.getLogger("Journal.Database.Firestore")


class FirestoreEntryRepository(EntryRepository):
    """Repository over a Firestore collection via the Admin SDK."""

    backend_name = "firestore"

    def __init__(self, db, collection: str = "entries", timeout: Optional[float] = None, **kwargs):
        super().__init__(**kwargs)
        self.db = db
        self.collection = collection
        self.timeout = timeout

    def create_entry(self, user_id: str, text: str) -> Optional[str]:
        document = {
            "userId": user_id,
            "entryText": text,
            "timestamp": firestore.SERVER_TIMESTAMP,
        }
        try:
            _, doc_ref = self.db.collection(self.collection).add(document, timeout=self.timeout)
        except Exception as e:
            logger.error("Error adding document: %s", e)
            raise BackendUnavailableError("Failed to add journal entry", operation="insert") from e

        logger.info("Document written with ID: %s", doc_ref.id)
        return doc_ref.id

    def fetch_records(self, user_id: str) -> List[RawEntryRecord]:
        query = self.db.collection(self.collection).where(
            filter=FieldFilter("userId", "==", user_id)
        ).order_by("timestamp", direction=firestore.Query.DESCENDING)

        try:
            snapshots = list(query.stream(timeout=self.timeout))
        except Exception as e:
            logger.error("Error fetching documents: %s", e)
            raise BackendUnavailableError("Failed to fetch journal entries", operation="select") from e

        return [FirestoreAdminRecord.from_document(snap.id, snap.to_dict()) for snap in snapshots]

    def _owned_document(self, entry_id: str, user_id: str):
        try:
            doc_ref = self.db.collection(self.collection).document(entry_id)
        except ValueError as e:
            # Ids containing path separators do not name a document
            raise self._not_found(entry_id) from e

        try:
            snapshot = doc_ref.get(timeout=self.timeout)
        except Exception as e:
            logger.error("Error loading document %s: %s", entry_id, e)
            raise BackendUnavailableError("Failed to load journal entry", operation="select") from e

        if not snapshot.exists:
            raise self._not_found(entry_id)

        data = snapshot.to_dict() or {}
        ensure_owner(entry_id, data.get("userId"), user_id)
        return doc_ref

    def delete_entry(self, entry_id: str, user_id: str) -> None:
        doc_ref = self._owned_document(entry_id, user_id)
        try:
            doc_ref.delete(timeout=self.timeout)
        except Exception as e:
            logger.error("Error deleting document %s: %s", entry_id, e)
            raise BackendUnavailableError("Failed to delete journal entry", operation="delete") from e
        logger.info("Document deleted with ID: %s", entry_id)

    def update_sentiment(self, entry_id: str, user_id: str, summary: str) -> None:
        doc_ref = self._owned_document(entry_id, user_id)
        try:
            doc_ref.update({"sentimentSummary": summary}, timeout=self.timeout)
        except Exception as e:
            logger.error("Error updating document %s: %s", entry_id, e)
            raise BackendUnavailableError("Failed to update journal entry", operation="update") from e
        logger.info("Sentiment stored for document %s", entry_id)
