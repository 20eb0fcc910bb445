"""Catalog actions for storefront pages. Failures degrade to empty lists."""

import logging

from okit_boost.context import ServiceContext
from okit_boost.domain.entities import Row
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)


def get_platforms(ctx: ServiceContext) -> list[Row]:
    try:
        return ctx.catalog_service.list_active_platforms()
    except RemoteServiceError:
        logger.exception("Error getting platforms")
        return []


def get_services_by_platform(ctx: ServiceContext, platform_id: str) -> list[Row]:
    try:
        return ctx.catalog_service.list_active_services(platform_id)
    except RemoteServiceError:
        logger.exception("Error getting services for %s", platform_id)
        return []
