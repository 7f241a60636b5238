from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from flask import session

from .api.client import HRApiClient
from .common.datetime_utils import now_local
from .core.enums import Role
from .roles import RoleProfile, build_profiles


def session_employee_id() -> Optional[str]:
    """The signed-in employee's id.

    The authentication layer in front of this app stores it as
    `session["employee_id"]` on login.
    """
    return session.get("employee_id")


@dataclass
class AppContext:
    """Everything a page controller needs, passed in explicitly.

    One instance per app (and per test); nothing here is module-global.
    """

    api: HRApiClient
    default_project: str
    profiles: dict[Role, RoleProfile] = field(default_factory=dict)
    clock: Callable[[], datetime] = now_local
    current_employee: Callable[[], Optional[str]] = session_employee_id

    def __post_init__(self):
        if not self.profiles:
            self.profiles = build_profiles(self.default_project)
