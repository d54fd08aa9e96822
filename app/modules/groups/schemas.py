from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.bulk import BulkDeleteOutcome
from app.modules.people.schemas import PersonResponse, RequiredText, Text


class GroupCreate(BaseModel):
    name: RequiredText
    description: Text = ""


class GroupUpdate(BaseModel):
    name: Optional[RequiredText] = None
    description: Optional[Text] = None


class GroupResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    members: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("members", mode="before")
    @classmethod
    def _null_members(cls, value):
        return value or []


class GroupMembersUpdate(BaseModel):
    member_ids: List[str]
    # updated_at as last read; when set, the save fails if someone else saved in between
    expected_updated_at: Optional[datetime] = None


class MembershipDiffResponse(BaseModel):
    added: List[str]
    removed: List[str]
    retained: List[str]


class GroupMembersSaveResponse(BaseModel):
    group: GroupResponse
    diff: MembershipDiffResponse


class GroupMembersResponse(BaseModel):
    group: GroupResponse
    members: List[PersonResponse]
    dangling_ids: List[str]  # member ids with no matching person


class RosterSelectionEntry(PersonResponse):
    selected: bool = False


class GroupMemberSelectionResponse(BaseModel):
    group: GroupResponse
    people: List[RosterSelectionEntry]


class GroupBulkDeleteResponse(BaseModel):
    results: List[BulkDeleteOutcome]
    groups: Optional[List[GroupResponse]] = None  # Groups re-read after the deletes; None if that read failed
