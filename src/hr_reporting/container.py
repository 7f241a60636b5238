from __future__ import annotations

import threading
from dataclasses import dataclass, field
from functools import partial

from .actions.service import ActionService
from .api.client import ApiConfig, HRApiClient
from .context import AppContext
from .reporting.controller import PageController
from .reporting.definitions import get_report
from .reporting.sources import LOADERS
from .roles import RoleProfile


@dataclass
class PageRegistry:
    """Builds page controllers for a role's reports.

    ``create`` returns a fresh controller owned by one request; ``get`` returns
    the long-lived controller per (role, report) whose in-flight action set is
    shared by every approve/reject request.
    """

    context: AppContext
    _pages: dict = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def create(self, profile: RoleProfile, report: str) -> PageController:
        definition = get_report(report)
        loader = partial(LOADERS[report], self.context.api, profile.project)
        return PageController(definition, loader)

    def get(self, profile: RoleProfile, report: str) -> PageController:
        key = (profile.role, report)
        with self._lock:
            page = self._pages.get(key)
            if page is None:
                page = self.create(profile, report)
                self._pages[key] = page
        return page


@dataclass(frozen=True)
class Container:
    context: AppContext
    pages: PageRegistry
    action_service: ActionService


def build_context(*, api_config: ApiConfig, default_project: str, session=None) -> AppContext:
    return AppContext(api=HRApiClient(api_config, session=session), default_project=default_project)


def build_container(*, context: AppContext) -> Container:
    return Container(
        context=context,
        pages=PageRegistry(context),
        action_service=ActionService(context.api),
    )
