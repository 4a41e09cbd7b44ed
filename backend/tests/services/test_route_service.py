"""Route Service — verifies owner-scoped CRUD.

Tests:
    - Create keeps coordinate order; list is newest first
    - Another user's route is NotFound for get/update/delete
    - Malformed ids are NotFound
    - A rejected update leaves the stored route unchanged
"""

import uuid

import pytest

from routesaver.core.domain_types import Point, UserId, UserSummary
from routesaver.core.errors import NotFound, ValidationError
from routesaver.models.user import User
from routesaver.services.route_service import RouteService

A = Point(-15.78, -47.93)
B = Point(-15.80, -47.95)
C = Point(-15.82, -47.97)


async def _user(db, email: str) -> UserSummary:
    user = User(name=email.split("@")[0], email=email, password_hash="x")
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return UserSummary(id=UserId(user.id), name=user.name, email=user.email)


@pytest.fixture
async def ana(test_db):
    return await _user(test_db, "ana@x.com")


@pytest.fixture
async def bia(test_db):
    return await _user(test_db, "bia@x.com")


@pytest.fixture
def routes(test_db):
    return RouteService(test_db)


async def test_create_keeps_point_order(routes, ana):
    route = await routes.create_route(ana, " Casa ", [A, C, B])
    assert route.name == "Casa"
    assert route.coordinates == [A.to_dict(), C.to_dict(), B.to_dict()]
    assert route.user_id == ana.id


async def test_list_newest_first_and_scoped(routes, ana, bia):
    first = await routes.create_route(ana, "Primeira", [A, B])
    second = await routes.create_route(ana, "Segunda", [A, B])
    await routes.create_route(bia, "Da Bia", [A, B])
    listed = await routes.list_routes(ana)
    assert [r.id for r in listed] == [second.id, first.id]


async def test_get_other_users_route_not_found(routes, ana, bia):
    route = await routes.create_route(ana, "Casa", [A, B])
    with pytest.raises(NotFound):
        await routes.get_route(bia, str(route.id))


async def test_get_malformed_id_not_found(routes, ana):
    with pytest.raises(NotFound):
        await routes.get_route(ana, "not-a-uuid")


async def test_update_replaces_name_and_points(routes, ana):
    route = await routes.create_route(ana, "Casa", [A, B])
    updated = await routes.update_route(ana, str(route.id), "Casa 2", [B, C, A])
    assert updated.name == "Casa 2"
    assert updated.coordinates == [B.to_dict(), C.to_dict(), A.to_dict()]
    assert updated.updated_at >= updated.created_at


async def test_rejected_update_leaves_route_unchanged(routes, ana):
    route = await routes.create_route(ana, "Casa", [A, B])
    with pytest.raises(ValidationError):
        await routes.update_route(ana, str(route.id), "", [A])
    stored = await routes.get_route(ana, str(route.id))
    assert stored.name == "Casa"
    assert len(stored.coordinates) == 2


async def test_update_other_users_route_not_found(routes, ana, bia):
    route = await routes.create_route(ana, "Casa", [A, B])
    with pytest.raises(NotFound):
        await routes.update_route(bia, str(route.id), "Roubada", [A, B])


async def test_delete_removes_route(routes, ana):
    route = await routes.create_route(ana, "Casa", [A, B])
    await routes.delete_route(ana, str(route.id))
    assert await routes.list_routes(ana) == []


async def test_delete_other_users_route_not_found(routes, ana, bia):
    route = await routes.create_route(ana, "Casa", [A, B])
    with pytest.raises(NotFound):
        await routes.delete_route(bia, str(route.id))
    assert len(await routes.list_routes(ana)) == 1


async def test_delete_unknown_id_not_found(routes, ana):
    with pytest.raises(NotFound):
        await routes.delete_route(ana, str(uuid.uuid4()))
