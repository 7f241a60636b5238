"""Per-role report access and project scope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.enums import Role
from .core.exceptions import AuthorizationError

OVERALL = "overall"
SUMMARY = "summary"

_ALL_TABLES = frozenset({"attendance", "leave", "uniform", "id-card", "kyc", "employees", "regularization"})


@dataclass(frozen=True)
class RoleProfile:
    role: Role
    reports: frozenset[str]
    actions: frozenset[str] = frozenset()
    project: Optional[str] = None
    own_summary_only: bool = False

    def require_report(self, report: str) -> None:
        if report not in self.reports:
            raise AuthorizationError(f"Role '{self.role.value}' cannot view the {report} report")

    def require_action(self, report: str) -> None:
        if report not in self.actions:
            raise AuthorizationError(f"Role '{self.role.value}' cannot approve or reject {report} records")


def build_profiles(default_project: str) -> dict[Role, RoleProfile]:
    return {
        Role.MANAGER: RoleProfile(
            role=Role.MANAGER,
            reports=_ALL_TABLES | {OVERALL, SUMMARY},
            actions=frozenset({"kyc", "leave", "regularization"}),
        ),
        Role.MANAGER_OPS: RoleProfile(
            role=Role.MANAGER_OPS,
            reports=frozenset({"attendance", "leave", "uniform", "id-card", "employees", OVERALL, SUMMARY}),
            actions=frozenset({"leave"}),
            project=default_project,
        ),
        Role.HRD: RoleProfile(
            role=Role.HRD,
            reports=_ALL_TABLES | {OVERALL, SUMMARY},
            actions=frozenset({"kyc", "leave", "regularization"}),
        ),
        Role.COORDINATOR: RoleProfile(
            role=Role.COORDINATOR,
            reports=frozenset({"uniform", "id-card"}),
        ),
        Role.EMPLOYEE: RoleProfile(
            role=Role.EMPLOYEE,
            reports=frozenset({SUMMARY}),
            own_summary_only=True,
        ),
    }


def resolve_profile(profiles: dict[Role, RoleProfile], raw_role: str) -> RoleProfile:
    try:
        role = Role(str(raw_role).lower())
    except ValueError:
        raise AuthorizationError(f"Unknown role: {raw_role}") from None
    return profiles[role]
