"""
Document store contract over Supabase tables.

Each collection (people, groups) is a table keyed by a store-assigned ``id``.
The store offers get-by-id, list-all, create, merge-update, delete and
equality-filtered queries. Updates default to last-write-wins; passing
``expected_updated_at`` turns the update into a compare-and-swap on the
stored ``updated_at`` value.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union
import logging
import uuid

from supabase import Client

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class DocumentStoreError(Exception):
    """The store could not be reached or rejected the request."""


class DocumentNotFoundError(DocumentStoreError):
    def __init__(self, collection: str, document_id: str):
        super().__init__(f"{collection}/{document_id} not found")
        self.collection = collection
        self.document_id = document_id


class WriteConflictError(DocumentStoreError):
    """Conditional update lost the race: the stored version token moved on."""

    def __init__(self, collection: str, document_id: str):
        super().__init__(f"{collection}/{document_id} was modified concurrently")
        self.collection = collection
        self.document_id = document_id


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _version_token(value: Union[datetime, str]) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def is_document_id(value: str) -> bool:
    """Ids are uuid columns; any other value (e.g. an id carried over from an
    older store) can never match a row and is rejected by PostgREST."""
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class DocumentStore:
    def __init__(self, supabase: Client, collection: str):
        self.supabase = supabase
        self.collection = collection

    def _execute(self, query, action: str):
        try:
            return query.execute()
        except Exception as e:
            logger.error(f"{action} on {self.collection} failed: {e}")
            raise DocumentStoreError(f"{action} on {self.collection} failed: {e}") from e

    def list(self, limit: Optional[int] = None, offset: int = 0) -> List[Document]:
        """All documents, newest first."""
        query = self.supabase.table(self.collection)\
            .select("*")\
            .order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit).offset(offset)
        result = self._execute(query, "list")
        return list(result.data or [])

    def get(self, document_id: str) -> Document:
        if not is_document_id(document_id):
            raise DocumentNotFoundError(self.collection, document_id)
        result = self._execute(
            self.supabase.table(self.collection)
                .select("*")
                .eq("id", document_id)
                .limit(1),
            "get",
        )
        if not result.data:
            raise DocumentNotFoundError(self.collection, document_id)
        return result.data[0]

    def get_many(self, document_ids: Iterable[str]) -> List[Document]:
        """Documents whose id is in ``document_ids``; missing or malformed ids are simply absent."""
        ids = [doc_id for doc_id in dict.fromkeys(document_ids) if is_document_id(doc_id)]
        if not ids:
            return []
        result = self._execute(
            self.supabase.table(self.collection).select("*").in_("id", ids),
            "get_many",
        )
        return list(result.data or [])

    def find(self, columns: str = "*", **equals: Any) -> List[Document]:
        """Documents whose fields equal every keyword given."""
        query = self.supabase.table(self.collection).select(columns)
        for field, value in equals.items():
            query = query.eq(field, value)
        result = self._execute(query, "find")
        return list(result.data or [])

    def create(self, fields: Document) -> Document:
        """Insert a document; the store assigns ``id`` and ``created_at``."""
        data = dict(fields)
        data["updated_at"] = utc_now()
        result = self._execute(self.supabase.table(self.collection).insert(data), "create")
        if not result.data:
            raise DocumentStoreError(f"create on {self.collection} returned no document")
        return result.data[0]

    def update(
        self,
        document_id: str,
        fields: Document,
        expected_updated_at: Optional[Union[datetime, str]] = None,
    ) -> Document:
        """Merge ``fields`` into the document and refresh ``updated_at``.

        Never creates the document. With ``expected_updated_at`` the write only
        applies when the stored ``updated_at`` still matches it.
        """
        if not is_document_id(document_id):
            raise DocumentNotFoundError(self.collection, document_id)
        data = {k: v for k, v in fields.items() if k not in ("id", "created_at")}
        data["updated_at"] = utc_now()
        query = self.supabase.table(self.collection)\
            .update(data)\
            .eq("id", document_id)
        if expected_updated_at is not None:
            query = query.eq("updated_at", _version_token(expected_updated_at))
        result = self._execute(query, "update")
        if result.data:
            return result.data[0]
        if expected_updated_at is not None:
            # Tell a vanished document apart from a lost race
            self.get(document_id)
            raise WriteConflictError(self.collection, document_id)
        raise DocumentNotFoundError(self.collection, document_id)

    def delete(self, document_id: str) -> None:
        if not is_document_id(document_id):
            raise DocumentNotFoundError(self.collection, document_id)
        result = self._execute(
            self.supabase.table(self.collection).delete().eq("id", document_id),
            "delete",
        )
        if not result.data:
            raise DocumentNotFoundError(self.collection, document_id)
