from supabase import Client
from app.config.settings import settings
from app.core.bulk import delete_many
from app.database.document_store import (
    DocumentNotFoundError, DocumentStore, DocumentStoreError, WriteConflictError
)
from app.modules.groups.membership import diff_members, reconcile_members
from app.modules.groups.schemas import (
    GroupCreate, GroupUpdate, GroupResponse, GroupBulkDeleteResponse, GroupMembersUpdate, GroupMembersSaveResponse,
    GroupMembersResponse, GroupMemberSelectionResponse, MembershipDiffResponse, RosterSelectionEntry
)
from app.modules.people.schemas import PersonResponse
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class GroupService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.store = DocumentStore(supabase, settings.groups_collection)
        self.people = DocumentStore(supabase, settings.people_collection)

    def create_group(self, group_data: GroupCreate) -> GroupResponse:
        """Create a new group with no members"""
        try:
            document = self.store.create({
                "name": group_data.name,
                "description": group_data.description,
                "members": []
            })
            logger.info(f"Created group {document['id']}")
            return GroupResponse(**document)
        except DocumentStoreError as e:
            logger.error(f"Error saving group: {e}")
            raise HTTPException(status_code=500, detail="Failed to save group. Please try again.")

    def get_group_by_id(self, group_id: str) -> GroupResponse:
        """Get group by ID"""
        try:
            return GroupResponse(**self.store.get(group_id))
        except DocumentNotFoundError:
            raise HTTPException(status_code=404, detail="Group not found")
        except DocumentStoreError as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_groups(self, limit: Optional[int] = None, offset: int = 0) -> List[GroupResponse]:
        """List groups, newest first"""
        try:
            return [GroupResponse(**group) for group in self.store.list(limit=limit, offset=offset)]
        except DocumentStoreError as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_group(self, group_id: str, group_data: GroupUpdate) -> GroupResponse:
        """Update name/description; members are only changed by save_members"""
        update_data = group_data.model_dump(exclude_none=True)
        if not update_data:
            return self.get_group_by_id(group_id)
        try:
            document = self.store.update(group_id, update_data)
            logger.info(f"Updated group {group_id}")
            return GroupResponse(**document)
        except DocumentNotFoundError:
            raise HTTPException(status_code=404, detail="Group not found")
        except DocumentStoreError as e:
            logger.error(f"Error saving group {group_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save group. Please try again.")

    def delete_group(self, group_id: str) -> None:
        """Delete group"""
        try:
            self.store.delete(group_id)
            logger.info(f"Deleted group {group_id}")
        except DocumentNotFoundError:
            raise HTTPException(status_code=404, detail="Group not found")
        except DocumentStoreError as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_groups(self, group_ids: List[str]) -> GroupBulkDeleteResponse:
        """Delete each id independently; report per-id outcomes and the groups as re-read afterwards"""
        results = delete_many(self.store, group_ids)
        try:
            groups = [GroupResponse(**group) for group in self.store.list()]
        except DocumentStoreError as e:
            logger.error(f"Group re-read after bulk delete failed: {e}")
            groups = None
        return GroupBulkDeleteResponse(results=results, groups=groups)

    def _resolve_people(self, person_ids: List[str]) -> List[PersonResponse]:
        try:
            return [PersonResponse(**person) for person in self.people.get_many(person_ids)]
        except DocumentStoreError as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_members(self, group_id: str) -> GroupMembersResponse:
        """Group with its member records; ids that no longer match a person are reported, not dropped"""
        group = self.get_group_by_id(group_id)
        members = self._resolve_people(group.members)
        found = {person.id for person in members}
        dangling_ids = [member_id for member_id in dict.fromkeys(group.members) if member_id not in found]
        if dangling_ids:
            logger.info(f"Group {group_id} references missing people: {dangling_ids}")
        return GroupMembersResponse(group=group, members=members, dangling_ids=dangling_ids)

    def get_member_selection(self, group_id: str) -> GroupMemberSelectionResponse:
        """Whole roster with the group's current members pre-selected"""
        group = self.get_group_by_id(group_id)
        selected = set(group.members)
        try:
            roster = self.people.list()
        except DocumentStoreError as e:
            raise HTTPException(status_code=500, detail=str(e))
        people = [
            RosterSelectionEntry(**person, selected=person["id"] in selected)
            for person in roster
        ]
        return GroupMemberSelectionResponse(group=group, people=people)

    def save_members(self, group_id: str, members_data: GroupMembersUpdate) -> GroupMembersSaveResponse:
        """Replace the group's members with the operator's selection.

        One write of members + updated_at. Last write wins unless
        expected_updated_at is given, in which case a concurrent save is a 409.
        """
        group = self.get_group_by_id(group_id)
        new_members = reconcile_members(group.members, members_data.member_ids)
        diff = diff_members(group.members, new_members)

        # Newly added ids must exist right now; already-listed ids are kept even if dangling
        if diff.added:
            found = {person.id for person in self._resolve_people(diff.added)}
            unknown = [member_id for member_id in diff.added if member_id not in found]
            if unknown:
                raise HTTPException(status_code=422, detail=f"Unknown person ids: {', '.join(unknown)}")

        try:
            document = self.store.update(
                group_id,
                {"members": new_members},
                expected_updated_at=members_data.expected_updated_at,
            )
        except WriteConflictError:
            logger.warning(f"Membership save for group {group_id} lost a concurrent update")
            raise HTTPException(status_code=409, detail="Group was modified by another operator")
        except DocumentNotFoundError:
            raise HTTPException(status_code=404, detail="Group not found")
        except DocumentStoreError as e:
            logger.error(f"Error updating members of group {group_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update members. Please try again.")

        logger.info(
            f"Saved members of group {group_id}: "
            f"+{len(diff.added)} -{len(diff.removed)} ={len(diff.retained)}"
        )
        return GroupMembersSaveResponse(
            group=GroupResponse(**document),
            diff=MembershipDiffResponse(added=diff.added, removed=diff.removed, retained=diff.retained),
        )
