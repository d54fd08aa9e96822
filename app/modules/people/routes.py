from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.core.bulk import BulkDeleteRequest
from app.modules.auth.schemas import OperatorSession
from app.modules.people.schemas import (
    PersonCreate, PersonUpdate, PersonResponse, PersonBulkDeleteResponse
)
from app.modules.people.service import PersonService
from app.core.dependencies import get_current_operator
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/people", tags=["people"])


def get_person_service(supabase: Client = Depends(get_supabase)) -> PersonService:
    return PersonService(supabase)


@router.post("", response_model=PersonResponse, status_code=201)
async def create_person(
    person_data: PersonCreate,
    operator: OperatorSession = Depends(get_current_operator),
    service: PersonService = Depends(get_person_service)
):
    """Add a person (rejected with 409 if the name pair already exists)"""
    return service.create_person(person_data)


@router.get("", response_model=List[PersonResponse])
async def list_people(
    limit: Optional[int] = None,
    offset: int = 0,
    operator: OperatorSession = Depends(get_current_operator),
    service: PersonService = Depends(get_person_service)
):
    """List the roster, newest first. Omit limit to get everyone."""
    return service.list_people(limit=limit, offset=offset)


@router.post("/bulk-delete", response_model=PersonBulkDeleteResponse)
async def delete_people(
    request: BulkDeleteRequest,
    operator: OperatorSession = Depends(get_current_operator),
    service: PersonService = Depends(get_person_service)
):
    """Delete several people; returns per-id outcomes and the roster as re-read afterwards (null if that read failed)"""
    return service.delete_people(request.ids)


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(
    person_id: str,
    operator: OperatorSession = Depends(get_current_operator),
    service: PersonService = Depends(get_person_service)
):
    """Get person by ID"""
    return service.get_person_by_id(person_id)


@router.put("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: str,
    person_data: PersonUpdate,
    operator: OperatorSession = Depends(get_current_operator),
    service: PersonService = Depends(get_person_service)
):
    """Update person (rejected with 409 if another person has the resulting name pair)"""
    return service.update_person(person_id, person_data)


@router.delete("/{person_id}", status_code=204)
async def delete_person(
    person_id: str,
    operator: OperatorSession = Depends(get_current_operator),
    service: PersonService = Depends(get_person_service)
):
    """Delete person"""
    service.delete_person(person_id)
    return None
