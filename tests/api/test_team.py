"""API tests for users, roles, permissions, and the current business."""

from httpx import AsyncClient

from tests.conftest import API, DEFAULT_PASSWORD, add_member


async def _role_id(client: AsyncClient, owner: dict, name: str) -> str:
    roles = await client.get(f"{API}/roles", headers=owner["headers"])
    return next(r["id"] for r in roles.json()["items"] if r["name"] == name)


async def test_default_roles_seeded(client: AsyncClient, owner: dict) -> None:
    roles = await client.get(f"{API}/roles", headers=owner["headers"])
    assert roles.status_code == 200
    names = {r["name"] for r in roles.json()["items"]}
    assert names == {"Owner", "Manager", "Staff", "Viewer"}
    assert all(r["is_system"] for r in roles.json()["items"])


async def test_custom_role_lifecycle(client: AsyncClient, owner: dict) -> None:
    created = await client.post(
        f"{API}/roles",
        headers=owner["headers"],
        json={"name": "Crew", "permission_ids": ["reminders.read.all"], "level": 20},
    )
    assert created.status_code == 201
    role = created.json()

    updated = await client.put(
        f"{API}/roles/{role['id']}",
        headers=owner["headers"],
        json={"permission_ids": ["reminders.read.all", "reminders.update.all"]},
    )
    assert sorted(updated.json()["permission_ids"]) == [
        "reminders.read.all",
        "reminders.update.all",
    ]

    archived = await client.delete(f"{API}/roles/{role['id']}", headers=owner["headers"])
    assert archived.json()["is_archived"] is True
    restored = await client.patch(f"{API}/roles/{role['id']}/restore", headers=owner["headers"])
    assert restored.json()["is_archived"] is False


async def test_role_with_unknown_permission(client: AsyncClient, owner: dict) -> None:
    response = await client.post(
        f"{API}/roles",
        headers=owner["headers"],
        json={"name": "Crew", "permission_ids": ["spaceships.read.all"]},
    )
    assert response.status_code == 400


async def test_owner_role_is_protected(client: AsyncClient, owner: dict) -> None:
    owner_role = owner["user"]["role_id"]
    update = await client.put(
        f"{API}/roles/{owner_role}", headers=owner["headers"], json={"description": "x"}
    )
    assert update.status_code == 400
    archive = await client.delete(f"{API}/roles/{owner_role}", headers=owner["headers"])
    assert archive.status_code == 400


async def test_role_in_use_cannot_be_archived(client: AsyncClient, owner: dict) -> None:
    staff_role = await _role_id(client, owner, "Staff")
    await add_member(client, owner, "Staff")
    response = await client.delete(f"{API}/roles/{staff_role}", headers=owner["headers"])
    assert response.status_code == 409
    assert response.json()["error"] == "ARCHIVE_BLOCKED"


async def test_permission_catalog(client: AsyncClient, owner: dict) -> None:
    response = await client.get(f"{API}/permissions", headers=owner["headers"])
    assert response.status_code == 200
    groups = response.json()
    modules = [g["module"] for g in groups]
    assert "partners" in modules
    partners = next(g for g in groups if g["module"] == "partners")
    assert "partners.read.all" in {p["name"] for p in partners["permissions"]}


async def test_only_super_admin_creates_permissions(client: AsyncClient, owner: dict) -> None:
    response = await client.post(
        f"{API}/permissions",
        headers=owner["headers"],
        json={"module": "events", "action": "read", "scope": "own", "display_name": "Own"},
    )
    assert response.status_code == 403


async def test_user_management(client: AsyncClient, owner: dict) -> None:
    staff_role = await _role_id(client, owner, "Staff")
    created = await client.post(
        f"{API}/users",
        headers=owner["headers"],
        json={
            "name": "Sam",
            "email": "sam@example.com",
            "password": DEFAULT_PASSWORD,
            "role_id": staff_role,
        },
    )
    assert created.status_code == 201
    user = created.json()
    assert user["role_type"] == "staff"

    updated = await client.put(
        f"{API}/users/{user['id']}", headers=owner["headers"], json={"phone": "+256700000000"}
    )
    assert updated.json()["phone"] == "+256700000000"

    viewer_role = await _role_id(client, owner, "Viewer")
    reassigned = await client.put(
        f"{API}/users/{user['id']}/role", headers=owner["headers"], json={"role_id": viewer_role}
    )
    assert reassigned.json()["role_type"] == "viewer"

    reset = await client.post(
        f"{API}/users/{user['id']}/reset-password",
        headers=owner["headers"],
        json={"new_password": "another-password"},
    )
    assert reset.json() == {"message": "Password reset"}
    login = await client.post(
        f"{API}/auth/login", json={"email": "sam@example.com", "password": "another-password"}
    )
    assert login.status_code == 200

    activity = await client.get(f"{API}/users/{user['id']}/activity", headers=owner["headers"])
    assert activity.status_code == 200
    assert any(entry["action"] == "login" for entry in activity.json())


async def test_duplicate_user_email(client: AsyncClient, owner: dict) -> None:
    response = await client.post(
        f"{API}/users",
        headers=owner["headers"],
        json={"name": "Dup", "email": owner["email"], "password": DEFAULT_PASSWORD},
    )
    assert response.status_code == 409


async def test_owner_cannot_archive_self(client: AsyncClient, owner: dict) -> None:
    response = await client.patch(
        f"{API}/users/{owner['user']['id']}/archive", headers=owner["headers"]
    )
    assert response.status_code == 400
    assert response.json()["details"]["rule"] == "self_archive"


async def test_archived_user_cannot_log_in(client: AsyncClient, owner: dict) -> None:
    member = await add_member(client, owner, "Staff")
    user_id = member["user"]["id"]
    archived = await client.patch(f"{API}/users/{user_id}/archive", headers=owner["headers"])
    assert archived.json()["is_archived"] is True
    assert archived.json()["is_active"] is False

    me = await client.get(f"{API}/auth/me", headers=member["headers"])
    assert me.status_code == 401
    login = await client.post(
        f"{API}/auth/login",
        json={"email": member["user"]["email"], "password": DEFAULT_PASSWORD},
    )
    assert login.status_code == 401

    restored = await client.patch(f"{API}/users/{user_id}/restore", headers=owner["headers"])
    assert restored.json()["is_active"] is True


async def test_bulk_archive_and_restore(client: AsyncClient, owner: dict) -> None:
    first = await add_member(client, owner, "Staff")
    second = await add_member(client, owner, "Viewer")
    ids = [first["user"]["id"], second["user"]["id"], owner["user"]["id"]]

    archived = await client.patch(
        f"{API}/users/bulk/archive", headers=owner["headers"], json={"ids": ids}
    )
    assert archived.status_code == 200
    body = archived.json()
    assert sorted(body["succeeded"]) == sorted(ids[:2])
    assert list(body["failed"]) == [owner["user"]["id"]]

    stats = await client.get(f"{API}/users/stats", headers=owner["headers"])
    assert stats.json() == {"active": 1, "archived": 2, "total": 3}

    listed = await client.get(f"{API}/users/archived", headers=owner["headers"])
    assert listed.json()["total"] == 2

    restored = await client.patch(
        f"{API}/users/bulk/restore", headers=owner["headers"], json={"ids": ids[:2]}
    )
    assert sorted(restored.json()["succeeded"]) == sorted(ids[:2])


async def test_bulk_requires_ids(client: AsyncClient, owner: dict) -> None:
    response = await client.patch(
        f"{API}/users/bulk/archive", headers=owner["headers"], json={"ids": []}
    )
    assert response.status_code == 422


async def test_permanent_delete_user(client: AsyncClient, owner: dict) -> None:
    member = await add_member(client, owner, "Staff")
    user_id = member["user"]["id"]
    active = await client.delete(f"{API}/users/{user_id}/permanent", headers=owner["headers"])
    assert active.status_code == 400

    await client.patch(f"{API}/users/{user_id}/archive", headers=owner["headers"])
    deleted = await client.delete(f"{API}/users/{user_id}/permanent", headers=owner["headers"])
    assert deleted.status_code == 204


async def test_manager_cannot_set_custom_permissions(client: AsyncClient, owner: dict) -> None:
    manager = await add_member(client, owner, "Manager")
    staff = await add_member(client, owner, "Staff")
    response = await client.put(
        f"{API}/users/{staff['user']['id']}/permissions",
        headers=manager["headers"],
        json={"granted": ["finance.read.all"], "revoked": []},
    )
    assert response.status_code == 403
    assert response.json()["details"]["role_types"] == ["owner"]


async def test_current_business(client: AsyncClient, owner: dict) -> None:
    current = await client.get(f"{API}/businesses/current", headers=owner["headers"])
    assert current.status_code == 200
    assert current.json()["id"] == owner["business"]["id"]

    updated = await client.put(
        f"{API}/businesses/current",
        headers=owner["headers"],
        json={"description": "Lakeside venue with garden"},
    )
    assert updated.json()["description"] == "Lakeside venue with garden"


async def test_viewer_cannot_update_business(client: AsyncClient, owner: dict) -> None:
    viewer = await add_member(client, owner, "Viewer")
    response = await client.put(
        f"{API}/businesses/current", headers=viewer["headers"], json={"name": "Mine"}
    )
    assert response.status_code == 403


async def test_manager_cannot_promote_self_to_owner(client: AsyncClient, owner: dict) -> None:
    manager = await add_member(client, owner, "Manager")
    owner_role = await _role_id(client, owner, "Owner")
    response = await client.put(
        f"{API}/users/{manager['user']['id']}/role",
        headers=manager["headers"],
        json={"role_id": owner_role},
    )
    assert response.status_code == 403
    me = await client.get(f"{API}/auth/me", headers=manager["headers"])
    assert me.json()["role_type"] == "manager"


async def test_manager_cannot_demote_owner(client: AsyncClient, owner: dict) -> None:
    manager = await add_member(client, owner, "Manager")
    viewer_role = await _role_id(client, owner, "Viewer")
    response = await client.put(
        f"{API}/users/{owner['user']['id']}/role",
        headers=manager["headers"],
        json={"role_id": viewer_role},
    )
    assert response.status_code == 403
    assert response.json()["details"]["role_types"] == ["owner"]


async def test_manager_assigns_roles_below_own_level(client: AsyncClient, owner: dict) -> None:
    manager = await add_member(client, owner, "Manager")
    staff = await add_member(client, owner, "Staff")
    viewer_role = await _role_id(client, owner, "Viewer")
    response = await client.put(
        f"{API}/users/{staff['user']['id']}/role",
        headers=manager["headers"],
        json={"role_id": viewer_role},
    )
    assert response.status_code == 200
    assert response.json()["role_type"] == "viewer"


async def test_manager_cannot_create_owner_level_user(client: AsyncClient, owner: dict) -> None:
    manager = await add_member(client, owner, "Manager")
    owner_role = await _role_id(client, owner, "Owner")
    response = await client.post(
        f"{API}/users",
        headers=manager["headers"],
        json={
            "name": "Eve",
            "email": "eve@example.com",
            "password": DEFAULT_PASSWORD,
            "role_id": owner_role,
        },
    )
    assert response.status_code == 403


async def test_role_type_is_not_client_settable(client: AsyncClient, owner: dict) -> None:
    manager = await add_member(client, owner, "Manager")
    viewer_role = await _role_id(client, owner, "Viewer")
    created = await client.post(
        f"{API}/users",
        headers=manager["headers"],
        json={
            "name": "Eve",
            "email": "eve@example.com",
            "password": DEFAULT_PASSWORD,
            "role_id": viewer_role,
            "role_type": "owner",
        },
    )
    assert created.status_code == 422

    staff = await add_member(client, owner, "Staff")
    assigned = await client.put(
        f"{API}/users/{staff['user']['id']}/role",
        headers=owner["headers"],
        json={"role_id": viewer_role, "role_type": "owner"},
    )
    assert assigned.status_code == 422


async def test_manager_cannot_touch_owner_account(client: AsyncClient, owner: dict) -> None:
    manager = await add_member(client, owner, "Manager")
    owner_id = owner["user"]["id"]
    reset = await client.post(
        f"{API}/users/{owner_id}/reset-password",
        headers=manager["headers"],
        json={"new_password": "takeover-password"},
    )
    assert reset.status_code == 403
    profile = await client.put(
        f"{API}/users/{owner_id}", headers=manager["headers"], json={"email": "max@example.com"}
    )
    assert profile.status_code == 403

    login = await client.post(
        f"{API}/auth/login", json={"email": owner["email"], "password": DEFAULT_PASSWORD}
    )
    assert login.status_code == 200
