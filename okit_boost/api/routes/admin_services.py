"""Admin routes for managing boost services."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from okit_boost.api.deps import get_catalog_service
from okit_boost.api.responses import failure, success
from okit_boost.components.catalog import CatalogService
from okit_boost.domain.errors import InvalidRequest
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=None)
def list_services(
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    """List all services with their platform, newest first."""
    try:
        return success(services=service.list_services_with_platform())
    except RemoteServiceError:
        logger.exception("Error fetching services")
        return failure("Erreur lors de la récupération des services")


@router.post("", response_model=None)
def create_service(
    body: dict[str, Any] = Body(...),
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    """Create a service."""
    try:
        return success(service=service.create_service(body))
    except InvalidRequest as e:
        return failure(e.message, status_code=400)
    except RemoteServiceError:
        logger.exception("Error creating service")
        return failure("Erreur lors de la création du service")


@router.patch("/{service_id}", response_model=None)
def update_service(
    service_id: str,
    body: dict[str, Any] = Body(...),
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    """Update a service with the fields given in the body."""
    try:
        return success(service=service.update_service(service_id, body))
    except RemoteServiceError:
        logger.exception("Error updating service %s", service_id)
        return failure("Erreur lors de la mise à jour du service")


@router.delete("/{service_id}", response_model=None)
def delete_service(
    service_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, Any] | JSONResponse:
    """Delete a service."""
    try:
        service.delete_service(service_id)
        return success()
    except RemoteServiceError:
        logger.exception("Error deleting service %s", service_id)
        return failure("Erreur lors de la suppression du service")
