"""
Per-request GraphQL context
"""

from typing import Any

import strawberry
from fastapi import Request

from ..logging import get_logger
from ..services.library import LibraryService
from .loaders import Loaders

logger = get_logger(__name__)


def build_context(request: Request | None, service: LibraryService) -> dict[str, Any]:
    """Build the context dict handed to every resolver of one request.

    Loaders are created per request so nothing is cached across requests.
    """
    return {
        "request": request,
        "service": service,
        "loaders": Loaders(service),
    }


def get_service(info: strawberry.Info) -> LibraryService:
    """Extract the library service from the GraphQL info object."""
    service = info.context.get("service")
    if service is None:
        logger.error("Library service not found in GraphQL context")
        raise RuntimeError("Library service is not configured")
    return service


def get_loaders(info: strawberry.Info) -> Loaders:
    """Extract the request's data loaders, creating them on first use."""
    loaders = info.context.get("loaders")
    if loaders is None:
        loaders = Loaders(get_service(info))
        info.context["loaders"] = loaders
    return loaders
