"""Saved Route Routes — CRUD endpoints for the authenticated user's routes.

Invariants:
    - Every endpoint depends on get_current_user (401 before any store access)
    - Route ids are taken as plain strings: malformed ids become 404 in the service
    - PUT is a full replace of name + coordinates

Design Decisions:
    - Thin handlers delegate to RouteService; envelopes built here
"""

from fastapi import APIRouter, Depends, status

from routesaver.api.dependencies import get_current_user, get_route_service
from routesaver.core import messages
from routesaver.core.domain_types import UserSummary
from routesaver.schemas.route import (
    MessageEnvelope, RouteEnvelope, RouteListEnvelope, RouteOut, RouteWrite,
)
from routesaver.services.route_service import RouteService

router = APIRouter(prefix="/api/routes", tags=["routes"])


@router.get("", response_model=RouteListEnvelope)
async def list_routes(
    user: UserSummary = Depends(get_current_user),
    routes: RouteService = Depends(get_route_service),
):
    """List the user's routes, newest first."""
    items = [RouteOut.from_model(r) for r in await routes.list_routes(user)]
    return RouteListEnvelope(count=len(items), data=items)


@router.get("/{route_id}", response_model=RouteEnvelope)
async def get_route(
    route_id: str,
    user: UserSummary = Depends(get_current_user),
    routes: RouteService = Depends(get_route_service),
):
    route = await routes.get_route(user, route_id)
    return RouteEnvelope(data=RouteOut.from_model(route))


@router.post(
    "", response_model=RouteEnvelope, status_code=status.HTTP_201_CREATED,
)
async def create_route(
    body: RouteWrite,
    user: UserSummary = Depends(get_current_user),
    routes: RouteService = Depends(get_route_service),
):
    route = await routes.create_route(user, body.name, body.points())
    return RouteEnvelope(data=RouteOut.from_model(route))


@router.put("/{route_id}", response_model=RouteEnvelope)
async def update_route(
    route_id: str,
    body: RouteWrite,
    user: UserSummary = Depends(get_current_user),
    routes: RouteService = Depends(get_route_service),
):
    """Replace name and coordinates of an existing route."""
    route = await routes.update_route(user, route_id, body.name, body.points())
    return RouteEnvelope(data=RouteOut.from_model(route))


@router.delete("/{route_id}", response_model=MessageEnvelope)
async def delete_route(
    route_id: str,
    user: UserSummary = Depends(get_current_user),
    routes: RouteService = Depends(get_route_service),
):
    await routes.delete_route(user, route_id)
    return MessageEnvelope(message=messages.ROUTE_DELETED)
