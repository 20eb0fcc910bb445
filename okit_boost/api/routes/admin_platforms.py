"""Admin routes for managing platforms."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from okit_boost.api.deps import get_catalog_service
from okit_boost.api.responses import failure, success
from okit_boost.components.catalog import CatalogService
from okit_boost.domain.errors import DuplicateRequest, InvalidRequest
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=None)
def list_platforms(
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    """List all platforms with their service counts."""
    try:
        return success(platforms=service.list_platforms_with_counts())
    except RemoteServiceError:
        logger.exception("Error fetching platforms")
        return failure("Erreur lors de la récupération des plateformes")


@router.post("", response_model=None)
def create_platform(
    body: dict[str, Any] = Body(...),
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    """Create a platform."""
    try:
        return success(platform=service.create_platform(body))
    except (InvalidRequest, DuplicateRequest) as e:
        return failure(e.message, status_code=400)
    except RemoteServiceError:
        logger.exception("Error creating platform")
        return failure("Erreur lors de la création de la plateforme")


@router.patch("/{platform_id}", response_model=None)
def update_platform(
    platform_id: str,
    body: dict[str, Any] = Body(...),
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    try:
        return success(platform=service.update_platform(platform_id, body))
    except RemoteServiceError:
        logger.exception("Error updating platform %s", platform_id)
        return failure("Erreur lors de la mise à jour de la plateforme")


@router.delete("/{platform_id}", response_model=None)
def delete_platform(
    platform_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    """Delete a platform together with its services."""
    try:
        service.delete_platform(platform_id)
        return success()
    except RemoteServiceError:
        logger.exception("Error deleting platform %s", platform_id)
        return failure("Erreur lors de la suppression de la plateforme")
