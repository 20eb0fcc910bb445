"""Public catalog routes."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from okit_boost.api.deps import get_catalog_service
from okit_boost.api.responses import error
from okit_boost.components.catalog import PUBLIC_SERVICE_COLUMNS, CatalogService
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=None)
def list_platforms(
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    """Active platforms with service count and cheapest CDF price."""
    try:
        return {"platforms": service.list_platforms_with_stats()}
    except RemoteServiceError:
        logger.exception("Error fetching platforms")
        return error("Erreur lors de la récupération des plateformes")


@router.get("/{platform}", response_model=None)
def list_platform_services(
    platform: str,
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    """Active services of one active platform, by name."""
    try:
        platform_row = service.get_active_platform(platform)
        if platform_row is None:
            return error("Plateforme non trouvée", status_code=404)
        services = service.list_active_services(platform, columns=PUBLIC_SERVICE_COLUMNS)
        return {"platform": platform_row, "services": services}
    except RemoteServiceError:
        logger.exception("Error fetching services for %s", platform)
        return error("Erreur lors de la récupération des services")
