"""
Editorial transition table.

Each action lists the roles allowed to perform it and, for strict mode, the
statuses it may start from and the statuses it may produce.

    DRAFT -> SUBMITTED -> REVIEWED | REVERTED
    REVERTED -> SUBMITTED
    REVIEWED -> SCHEDULED -> POSTED (sweep)
    REVIEWED | POSTED -> PUBLISHED

Permissive mode (the default) only enforces roles, ownership and the reporter
editable-status guard; the remaining columns are checked when the policy is
strict.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional

from ..errors import InvalidState, NotAllowed, ValidationFailed
from ..models.enums import ArticleStatus, Role

S = ArticleStatus

# Statuses a reporter may still edit.
EDITABLE_STATUSES: FrozenSet[ArticleStatus] = frozenset({S.DRAFT, S.REVERTED})


class Action(str, Enum):
    CREATE_DRAFT = "create_draft"
    UPDATE_DRAFT = "update_draft"
    SUBMIT = "submit"
    REVIEW = "review"
    PUBLISH = "publish"
    EDITOR_EDIT = "editor_edit"
    DELETE = "delete"
    SCHEDULE = "schedule"
    CANCEL_SCHEDULE = "cancel_schedule"


@dataclass(frozen=True)
class Actor:
    """Caller context supplied by the HTTP layer."""
    user_id: int
    role: Role

    @property
    def is_editor(self) -> bool:
        return self.role == Role.EDITOR


@dataclass(frozen=True)
class Rule:
    roles: FrozenSet[Role]
    # None means any status
    sources: Optional[FrozenSet[ArticleStatus]] = None
    targets: Optional[FrozenSet[ArticleStatus]] = None
    owner_only: bool = False


TRANSITIONS: Dict[Action, Rule] = {
    Action.CREATE_DRAFT: Rule(
        roles=frozenset({Role.REPORTER}),
        targets=frozenset({S.DRAFT}),
    ),
    Action.UPDATE_DRAFT: Rule(
        roles=frozenset({Role.REPORTER}),
        sources=EDITABLE_STATUSES,
        targets=frozenset({S.DRAFT, S.SUBMITTED}),
        owner_only=True,
    ),
    Action.SUBMIT: Rule(
        roles=frozenset({Role.REPORTER}),
        sources=EDITABLE_STATUSES,
        targets=frozenset({S.SUBMITTED}),
        owner_only=True,
    ),
    Action.REVIEW: Rule(
        roles=frozenset({Role.EDITOR}),
        sources=frozenset({S.SUBMITTED, S.REVIEWED}),
        targets=frozenset({S.REVIEWED, S.REVERTED}),
    ),
    Action.PUBLISH: Rule(
        roles=frozenset({Role.EDITOR}),
        sources=frozenset({S.REVIEWED, S.POSTED}),
        targets=frozenset({S.PUBLISHED}),
    ),
    Action.EDITOR_EDIT: Rule(
        roles=frozenset({Role.EDITOR}),
        # SCHEDULED and POSTED are derived from the schedule set
        targets=frozenset({S.DRAFT, S.SUBMITTED, S.REVIEWED, S.REVERTED, S.PUBLISHED}),
    ),
    Action.DELETE: Rule(
        roles=frozenset({Role.REPORTER, Role.EDITOR}),
        owner_only=True,  # editors bypass ownership
    ),
    Action.SCHEDULE: Rule(
        roles=frozenset({Role.EDITOR}),
        sources=frozenset({S.REVIEWED, S.SCHEDULED, S.POSTED}),
        targets=frozenset({S.SCHEDULED}),
    ),
    Action.CANCEL_SCHEDULE: Rule(
        roles=frozenset({Role.EDITOR}),
        sources=frozenset({S.SCHEDULED, S.POSTED}),
    ),
}


# Action whose source rule governs a direct status change to the key.
STATUS_ACTIONS: Dict[ArticleStatus, Action] = {
    S.SUBMITTED: Action.SUBMIT,
    S.REVIEWED: Action.REVIEW,
    S.REVERTED: Action.REVIEW,
    S.PUBLISHED: Action.PUBLISH,
}

class TransitionPolicy:
    """Applies ``TRANSITIONS`` to a caller, an article status and a target."""

    def __init__(self, strict: bool = False, table: Dict[Action, Rule] = None):
        self.strict = strict
        self.table = table or TRANSITIONS

    def rule(self, action: Action) -> Rule:
        return self.table[action]

    def check_role(self, action: Action, actor: Actor) -> None:
        if actor.role not in self.rule(action).roles:
            raise NotAllowed(f"Role {actor.role.value} cannot {action.value.replace('_', ' ')}")

    def check_owner(self, action: Action, actor: Actor, owner_id: Optional[int], message: str) -> None:
        if self.rule(action).owner_only and not actor.is_editor and actor.user_id != owner_id:
            raise NotAllowed(message)

    def check_source(self, action: Action, current: ArticleStatus) -> None:
        if not self.strict:
            return
        sources = self.rule(action).sources
        if sources is not None and current not in sources:
            raise InvalidState(
                f"Cannot {action.value.replace('_', ' ')} an article in status {current.value}",
                {"status": current.value, "allowed": sorted(s.value for s in sources)},
            )

    def check_target(self, action: Action, target: ArticleStatus) -> None:
        if not self.strict:
            return
        targets = self.rule(action).targets
        if targets is not None and target not in targets:
            raise InvalidState(
                f"{action.value.replace('_', ' ')} cannot move an article to {target.value}",
                {"target": target.value, "allowed": sorted(s.value for s in targets)},
            )

    def check_remarks(self, target: ArticleStatus, remarks: Optional[str]) -> None:
        if self.strict and target == S.REVERTED and not (remarks or "").strip():
            raise ValidationFailed("Remarks are required when reverting an article")


    def check_status_change(self, action: Action, current: ArticleStatus, target: ArticleStatus) -> None:
        """
        Validate a direct status write such as an editor edit.

        The target must be allowed for ``action`` and the current status must
        be a valid source for the action that normally produces the target.
        """
        if not self.strict or target == current:
            return
        self.check_target(action, target)
        owner = STATUS_ACTIONS.get(target)
        if owner is not None:
            self.check_source(owner, current)
