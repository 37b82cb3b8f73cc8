"""Composition root: builds the gateway, repositories and controllers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .controllers import EnrollmentController, MembershipController, PeerReviewController
from .core.auth import ReadonlyTokenProvider
from .core.config import Settings
from .core.database import create_session_factory
from .core.events import AppEventBus
from .core.gateway import RemoteTableGateway, TableGateway
from .core.local_gateway import LocalTableGateway
from .core.refresh import RefreshManager
from .repositories import AccessTokenProvider, Repositories, build_repositories

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    settings: Settings
    gateway: TableGateway
    repositories: Repositories
    event_bus: AppEventBus
    refresh: RefreshManager
    memberships: MembershipController
    enrollments: EnrollmentController
    peer_reviews: PeerReviewController

    def dispose(self) -> None:
        self.peer_reviews.dispose()
        self.event_bus.dispose()


def build_gateway(settings: Settings) -> TableGateway:
    """Pick the table store backend named by ``settings.table_backend``."""

    if settings.table_backend == "local":
        logger.info("using local table backend at %s", settings.database_url)
        return LocalTableGateway(create_session_factory(settings.database_url))
    return RemoteTableGateway(settings)


def build_services(
    settings: Settings,
    *,
    get_current_user_id: Callable[[], Optional[str]],
    get_access_token: Optional[AccessTokenProvider] = None,
    gateway: Optional[TableGateway] = None,
) -> AppServices:
    """Wire one client session. Without a token provider the read-only account is used."""

    gateway = gateway or build_gateway(settings)
    if get_access_token is None and isinstance(gateway, RemoteTableGateway):
        get_access_token = ReadonlyTokenProvider(gateway, settings.readonly_email, settings.readonly_password)
    repositories = build_repositories(
        gateway,
        get_access_token,
        tolerate_assessment_read_errors=settings.tolerate_assessment_read_errors,
    )
    event_bus = AppEventBus()
    refresh = RefreshManager()

    return AppServices(
        settings=settings,
        gateway=gateway,
        repositories=repositories,
        event_bus=event_bus,
        refresh=refresh,
        memberships=MembershipController(repositories, event_bus, get_current_user_id),
        enrollments=EnrollmentController(
            repositories,
            event_bus,
            refresh,
            get_current_user_id,
            ttl_seconds=settings.refresh_ttl_seconds,
        ),
        peer_reviews=PeerReviewController(
            repositories,
            event_bus,
            refresh,
            ttl_seconds=settings.refresh_ttl_seconds,
        ),
    )
