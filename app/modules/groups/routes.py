from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.core.bulk import BulkDeleteRequest
from app.modules.auth.schemas import OperatorSession
from app.modules.groups.schemas import (
    GroupCreate, GroupUpdate, GroupResponse, GroupBulkDeleteResponse,
    GroupMembersUpdate, GroupMembersSaveResponse, GroupMembersResponse, GroupMemberSelectionResponse
)
from app.modules.groups.service import GroupService
from app.core.dependencies import get_current_operator
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/groups", tags=["groups"])


def get_group_service(supabase: Client = Depends(get_supabase)) -> GroupService:
    return GroupService(supabase)


@router.post("", response_model=GroupResponse, status_code=201)
async def create_group(
    group_data: GroupCreate,
    operator: OperatorSession = Depends(get_current_operator),
    service: GroupService = Depends(get_group_service)
):
    """Create a new group"""
    return service.create_group(group_data)


@router.get("", response_model=List[GroupResponse])
async def list_groups(
    limit: Optional[int] = None,
    offset: int = 0,
    operator: OperatorSession = Depends(get_current_operator),
    service: GroupService = Depends(get_group_service)
):
    """List groups, newest first"""
    return service.list_groups(limit=limit, offset=offset)


@router.post("/bulk-delete", response_model=GroupBulkDeleteResponse)
async def delete_groups(
    request: BulkDeleteRequest,
    operator: OperatorSession = Depends(get_current_operator),
    service: GroupService = Depends(get_group_service)
):
    """Delete several groups; returns per-id outcomes and the groups as re-read afterwards (null if that read failed)"""
    return service.delete_groups(request.ids)


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(
    group_id: str,
    operator: OperatorSession = Depends(get_current_operator),
    service: GroupService = Depends(get_group_service)
):
    """Get group by ID"""
    return service.get_group_by_id(group_id)


@router.put("/{group_id}", response_model=GroupResponse)
async def update_group(
    group_id: str,
    group_data: GroupUpdate,
    operator: OperatorSession = Depends(get_current_operator),
    service: GroupService = Depends(get_group_service)
):
    """Update group name/description"""
    return service.update_group(group_id, group_data)


@router.delete("/{group_id}", status_code=204)
async def delete_group(
    group_id: str,
    operator: OperatorSession = Depends(get_current_operator),
    service: GroupService = Depends(get_group_service)
):
    """Delete group"""
    service.delete_group(group_id)
    return None


@router.get("/{group_id}/members", response_model=GroupMembersResponse)
async def get_members(
    group_id: str,
    operator: OperatorSession = Depends(get_current_operator),
    service: GroupService = Depends(get_group_service)
):
    """Group members, plus member ids whose person has been deleted"""
    return service.get_members(group_id)


@router.get("/{group_id}/members/selection", response_model=GroupMemberSelectionResponse)
async def get_member_selection(
    group_id: str,
    operator: OperatorSession = Depends(get_current_operator),
    service: GroupService = Depends(get_group_service)
):
    """Full roster with current members marked selected"""
    return service.get_member_selection(group_id)


@router.put("/{group_id}/members", response_model=GroupMembersSaveResponse)
async def save_members(
    group_id: str,
    members_data: GroupMembersUpdate,
    operator: OperatorSession = Depends(get_current_operator),
    service: GroupService = Depends(get_group_service)
):
    """Replace the group's members with the submitted selection"""
    return service.save_members(group_id, members_data)
