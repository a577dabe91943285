"""
Group service: ledger categories and their parent tree.

Groups reference their parent by id. Writes that would make a
group its own ancestor are rejected, so the parent chain of
every group always ends at a root.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError, ValidationError
from bookkeeping.models.group import Group
from bookkeeping.models.ledger import Ledger
from bookkeeping.schemas.group import GroupCreate, GroupUpdate

logger = logging.getLogger(__name__)

# Upper bound on the parent chain walk; deeper trees are rejected
MAX_GROUP_DEPTH = 64


class GroupService:

    def __init__(self, db: Session):
        self.db = db

    def _require_group(self, group_id: int) -> Group:
        group = self.db.get(Group, group_id)
        if not group:
            raise NotFoundError(f"Group {group_id} not found")
        return group

    def _check_parent(self, group_id: int | None, parent_group_id: int) -> None:
        """
        Walk up from the proposed parent. Reaching group_id means
        the update would create a cycle.
        """
        current = self._require_group(parent_group_id)
        depth = 0
        while current is not None:
            if group_id is not None and current.id == group_id:
                raise ValidationError(
                    f"Group {group_id} cannot be nested under its own descendant"
                )
            depth += 1
            if depth > MAX_GROUP_DEPTH:
                raise ValidationError(
                    f"Group tree is deeper than {MAX_GROUP_DEPTH} levels"
                )
            if current.parent_group_id is None:
                break
            current = self.db.get(Group, current.parent_group_id)

    def create_group(self, request: GroupCreate) -> Group:
        if request.parent_group_id is not None:
            self._check_parent(None, request.parent_group_id)

        group = Group(
            name=request.name,
            description=request.description,
            parent_group_id=request.parent_group_id,
        )
        self.db.add(group)
        self.db.flush()
        logger.info("Created group %s (%s)", group.id, group.name)
        return group

    def get_group(self, group_id: int) -> Group:
        return self._require_group(group_id)

    def list_groups(self) -> list[Group]:
        groups = self.db.execute(
            select(Group).order_by(Group.name, Group.id)
        ).scalars().all()
        return list(groups)

    def update_group(self, group_id: int, request: GroupUpdate) -> Group:
        group = self._require_group(group_id)
        changes = request.model_dump(exclude_unset=True)

        if "name" in changes and changes["name"] is None:
            raise ValidationError("Group name cannot be empty")
        if changes.get("parent_group_id") is not None:
            if changes["parent_group_id"] == group_id:
                raise ValidationError("A group cannot be its own parent")
            self._check_parent(group_id, changes["parent_group_id"])

        for field, value in changes.items():
            setattr(group, field, value)
        self.db.flush()
        return group

    def delete_group(self, group_id: int) -> None:
        """Delete a group that no ledger or child group refers to."""
        group = self._require_group(group_id)

        ledger_count = self.db.execute(
            select(func.count()).select_from(Ledger).where(Ledger.group_id == group_id)
        ).scalar_one()
        if ledger_count:
            raise ValidationError(
                f"Group {group_id} still has {ledger_count} ledger(s)"
            )
        child_count = self.db.execute(
            select(func.count()).select_from(Group).where(Group.parent_group_id == group_id)
        ).scalar_one()
        if child_count:
            raise ValidationError(
                f"Group {group_id} still has {child_count} sub-group(s)"
            )

        self.db.delete(group)
        self.db.flush()
        logger.info("Deleted group %s", group_id)

    def search_groups(self, query: str, limit: int = 10, offset: int = 0) -> list[Group]:
        """Case-insensitive substring match on the group name."""
        groups = self.db.execute(
            select(Group)
            .where(Group.name.ilike(f"%{query}%"))
            .order_by(Group.name, Group.id)
            .limit(limit)
            .offset(offset)
        ).scalars().all()
        return list(groups)
