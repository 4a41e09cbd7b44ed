"""Route Service — owner-scoped CRUD over the route store.

Invariants:
    - Every query filters on user_id == user.id; no route is ever loaded by id alone
    - A route that exists but belongs to someone else is NotFound, indistinguishable
      from a route that does not exist
    - Malformed ids are NotFound as well (never a 500, never a validation error)
    - update_route validates before touching the row: a rejected update leaves it unchanged
    - list_routes is newest-first by created_at

Design Decisions:
    - One row per route (JSON coordinates): each mutation is a single-row write,
      atomic without explicit transactions
"""

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from routesaver.core.domain_types import Point, UserSummary
from routesaver.core.errors import ErrorContext, NotFound
from routesaver.core.validation import validate_route
from routesaver.models.route import Route

logger = logging.getLogger(__name__)


class RouteService:
    """Route CRUD scoped to the authenticated user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_routes(self, user: UserSummary) -> list[Route]:
        result = await self.db.execute(
            select(Route)
            .where(Route.user_id == user.id)
            .order_by(Route.created_at.desc()),
        )
        return list(result.scalars().all())

    async def get_route(self, user: UserSummary, route_id: str) -> Route:
        return await self._get_owned_or_404(user, route_id)

    async def create_route(
        self, user: UserSummary, name: str | None, points: Sequence[Point] | None,
    ) -> Route:
        name, points = validate_route(name, points)
        route = Route(
            name=name, coordinates=_serialize(points), user_id=user.id,
        )
        self.db.add(route)
        await self.db.commit()
        await self.db.refresh(route)
        logger.info(
            "Route created",
            extra={"user_id": str(user.id), "route_id": str(route.id)},
        )
        return route

    async def update_route(
        self,
        user: UserSummary,
        route_id: str,
        name: str | None,
        points: Sequence[Point] | None,
    ) -> Route:
        route = await self._get_owned_or_404(user, route_id)
        name, points = validate_route(name, points)
        route.name = name
        route.coordinates = _serialize(points)
        route.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(route)
        return route

    async def delete_route(self, user: UserSummary, route_id: str) -> None:
        route = await self._get_owned_or_404(user, route_id)
        await self.db.delete(route)
        await self.db.commit()
        logger.info(
            "Route deleted",
            extra={"user_id": str(user.id), "route_id": route_id},
        )

    async def _get_owned_or_404(self, user: UserSummary, route_id: str) -> Route:
        context = ErrorContext(user_id=str(user.id), route_id=route_id)
        try:
            parsed = uuid.UUID(str(route_id))
        except ValueError:
            raise NotFound(context=context)
        result = await self.db.execute(
            select(Route).where(Route.id == parsed, Route.user_id == user.id),
        )
        route = result.scalar_one_or_none()
        if route is None:
            raise NotFound(context=context)
        return route


def _serialize(points: Sequence[Point]) -> list[dict]:
    return [p.to_dict() for p in points]
