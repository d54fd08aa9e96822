"""
Bulk delete shared by the people and groups modules.

Deletes run one id at a time and are not atomic: a failure on one id does not
stop the others. Callers re-list the collection afterwards instead of trusting
the outcomes to describe what is left.
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional
import logging

from app.database.document_store import DocumentNotFoundError, DocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)


class BulkDeleteRequest(BaseModel):
    ids: List[str] = Field(min_length=1)


class BulkDeleteOutcome(BaseModel):
    id: str
    status: Literal["deleted", "not_found", "failed"]
    detail: Optional[str] = None


def delete_many(store: DocumentStore, ids: List[str]) -> List[BulkDeleteOutcome]:
    outcomes = []
    for document_id in dict.fromkeys(ids):
        try:
            store.delete(document_id)
            outcomes.append(BulkDeleteOutcome(id=document_id, status="deleted"))
        except DocumentNotFoundError:
            outcomes.append(BulkDeleteOutcome(id=document_id, status="not_found", detail="Not found"))
        except DocumentStoreError as e:
            outcomes.append(BulkDeleteOutcome(id=document_id, status="failed", detail=str(e)))
    failed = [o.id for o in outcomes if o.status != "deleted"]
    if failed:
        logger.warning(f"Bulk delete on {store.collection}: {len(failed)} of {len(outcomes)} not deleted: {failed}")
    else:
        logger.info(f"Bulk delete on {store.collection}: deleted {len(outcomes)}")
    return outcomes
