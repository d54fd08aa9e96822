from supabase import Client
from app.config.settings import settings
from app.core.bulk import delete_many
from app.database.document_store import DocumentNotFoundError, DocumentStore, DocumentStoreError
from app.modules.people.duplicate_guard import is_duplicate_person
from app.modules.people.schemas import PersonCreate, PersonUpdate, PersonResponse, PersonBulkDeleteResponse
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

DUPLICATE_PERSON_DETAIL = "A person with this name already exists. Please use a different name."


class PersonService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.store = DocumentStore(supabase, settings.people_collection)

    def check_duplicate(self, first_name: str, last_name: str, exclude_id: Optional[str] = None) -> bool:
        """Query people with this exact name pair and apply the duplicate rule.

        A failed query is reported as 503 so it is never mistaken for "no duplicate".
        """
        try:
            candidates = self.store.find(
                "id, first_name, last_name",
                first_name=first_name,
                last_name=last_name,
            )
        except DocumentStoreError as e:
            logger.error(f"Error checking existing person: {e}")
            raise HTTPException(status_code=503, detail="Failed to check for existing person")
        return is_duplicate_person(first_name, last_name, candidates, exclude_id)

    def _reject_duplicate(self, first_name: str, last_name: str, exclude_id: Optional[str] = None) -> None:
        if self.check_duplicate(first_name, last_name, exclude_id):
            logger.info(f"Rejected duplicate person name: {first_name} {last_name}")
            raise HTTPException(status_code=409, detail=DUPLICATE_PERSON_DETAIL)

    def create_person(self, person_data: PersonCreate) -> PersonResponse:
        """Create a new person after the duplicate name check"""
        self._reject_duplicate(person_data.first_name, person_data.last_name)
        try:
            document = self.store.create(person_data.model_dump())
            logger.info(f"Created person {document['id']}")
            return PersonResponse(**document)
        except DocumentStoreError as e:
            logger.error(f"Error saving person: {e}")
            raise HTTPException(status_code=500, detail="Failed to save person. Please try again.")

    def get_person_by_id(self, person_id: str) -> PersonResponse:
        """Get person by ID"""
        try:
            return PersonResponse(**self.store.get(person_id))
        except DocumentNotFoundError:
            raise HTTPException(status_code=404, detail="Person not found")
        except DocumentStoreError as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_people(self, limit: Optional[int] = None, offset: int = 0) -> List[PersonResponse]:
        """List the roster, newest first"""
        try:
            return [PersonResponse(**person) for person in self.store.list(limit=limit, offset=offset)]
        except DocumentStoreError as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_person(self, person_id: str, person_data: PersonUpdate) -> PersonResponse:
        """Merge the submitted fields into the person; the name check excludes the person itself."""
        existing = self.get_person_by_id(person_id)
        update_data = person_data.model_dump(exclude_none=True)
        if not update_data:
            return existing

        self._reject_duplicate(
            update_data.get("first_name", existing.first_name),
            update_data.get("last_name", existing.last_name),
            exclude_id=person_id,
        )
        try:
            document = self.store.update(person_id, update_data)
            logger.info(f"Updated person {person_id}")
            return PersonResponse(**document)
        except DocumentNotFoundError:
            raise HTTPException(status_code=404, detail="Person not found")
        except DocumentStoreError as e:
            logger.error(f"Error saving person {person_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save person. Please try again.")

    def delete_person(self, person_id: str) -> None:
        """Delete person; groups referencing it keep the id"""
        try:
            self.store.delete(person_id)
            logger.info(f"Deleted person {person_id}")
        except DocumentNotFoundError:
            raise HTTPException(status_code=404, detail="Person not found")
        except DocumentStoreError as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_people(self, person_ids: List[str]) -> PersonBulkDeleteResponse:
        """Delete each id independently; report per-id outcomes and the roster as re-read afterwards.

        The deletes are already committed when the re-read runs, so a failed re-read
        leaves people as None instead of failing the request.
        """
        results = delete_many(self.store, person_ids)
        try:
            people = [PersonResponse(**person) for person in self.store.list()]
        except DocumentStoreError as e:
            logger.error(f"Roster re-read after bulk delete failed: {e}")
            people = None
        return PersonBulkDeleteResponse(results=results, people=people)
