"""Integration tests for the user endpoints.

Tests cover:
- Registration and its validation failures
- Login and token refresh
- Token enforcement on authorized endpoints
- Profile, email and password changes
- Account deletion
"""

from __future__ import annotations

from httpx import AsyncClient

PASSWORD = "Secr3t!pass"
NEW_PASSWORD = "N3w!password"
# fits the character limit, not the 72 bytes bcrypt reads
LONG_PASSWORD = "é" * 40

# ============================================================================
# Registration
# ============================================================================


class TestRegister:
    @staticmethod
    async def test_returns_user_id(client: AsyncClient) -> None:
        resp = await client.post(
            "/v1/user",
            json={"email": "laura@example.com", "password": PASSWORD, "first_name": "Laura"},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "OK"
        assert isinstance(body["payload"], int)
        assert "page" not in body

    @staticmethod
    async def test_email_already_used(client: AsyncClient, user_id: int) -> None:
        resp = await client.post("/v1/user", json={"email": "laura@example.com", "password": PASSWORD})

        assert resp.status_code == 400
        assert resp.json() == {"status": "EmailAlreadyUsed"}

    @staticmethod
    async def test_weak_password(client: AsyncClient) -> None:
        resp = await client.post("/v1/user", json={"email": "laura@example.com", "password": "password"})

        assert resp.status_code == 400
        body = resp.json()
        assert body["status"] == "InvalidRequest"
        assert "password" in body["message"]

    @staticmethod
    async def test_malformed_json(client: AsyncClient) -> None:
        resp = await client.post(
            "/v1/user",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "InvalidRequest"


# ============================================================================
# Login & refresh
# ============================================================================


class TestLogin:
    @staticmethod
    async def test_returns_token_pair(client: AsyncClient, user_id: int) -> None:
        resp = await client.post(
            "/v1/user/login",
            json={"email": "laura@example.com", "password": PASSWORD},
        )

        assert resp.status_code == 200
        payload = resp.json()["payload"]
        assert set(payload) == {"access_token", "refresh_token"}

    @staticmethod
    async def test_unknown_email(client: AsyncClient) -> None:
        resp = await client.post(
            "/v1/user/login",
            json={"email": "nobody@example.com", "password": PASSWORD},
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "EmailNotFound"

    @staticmethod
    async def test_wrong_password(client: AsyncClient, user_id: int) -> None:
        resp = await client.post(
            "/v1/user/login",
            json={"email": "laura@example.com", "password": "Wr0ng!pass"},
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "IncorrectPassword"

    @staticmethod
    async def test_over_long_password(client: AsyncClient, user_id: int) -> None:
        resp = await client.post(
            "/v1/user/login",
            json={"email": "laura@example.com", "password": LONG_PASSWORD},
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "InvalidRequest"


class TestRefresh:
    @staticmethod
    async def test_issues_access_token(client: AsyncClient, user_id: int) -> None:
        login = await client.post(
            "/v1/user/login",
            json={"email": "laura@example.com", "password": PASSWORD},
        )
        refresh_token = login.json()["payload"]["refresh_token"]

        resp = await client.get(
            "/v1/user/refresh",
            headers={"Authorization": f"Bearer {refresh_token}"},
        )

        assert resp.status_code == 200
        access_token = resp.json()["payload"]
        me = await client.get(
            f"/v1/authorized/user/{user_id}",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        assert me.status_code == 200

    @staticmethod
    async def test_missing_token(client: AsyncClient) -> None:
        resp = await client.get("/v1/user/refresh")

        assert resp.status_code == 400
        assert resp.json()["status"] == "TokenMissingOrMalformed"

    @staticmethod
    async def test_invalid_token(client: AsyncClient) -> None:
        resp = await client.get("/v1/user/refresh", headers={"Authorization": "Bearer garbage"})

        assert resp.status_code == 400
        assert resp.json()["status"] == "TokenInvalid"


# ============================================================================
# Token enforcement
# ============================================================================


class TestAuthorization:
    @staticmethod
    async def test_missing_header(client: AsyncClient, user_id: int) -> None:
        resp = await client.get(f"/v1/authorized/user/{user_id}")

        assert resp.status_code == 401
        assert resp.json()["status"] == "TokenMissingOrMalformed"

    @staticmethod
    async def test_wrong_scheme(client: AsyncClient, user_id: int) -> None:
        resp = await client.get(
            f"/v1/authorized/user/{user_id}",
            headers={"Authorization": "Basic bGF1cmE6cGFzcw=="},
        )

        assert resp.status_code == 401
        assert resp.json()["status"] == "TokenMissingOrMalformed"

    @staticmethod
    async def test_invalid_token(client: AsyncClient, user_id: int) -> None:
        resp = await client.get(
            f"/v1/authorized/user/{user_id}",
            headers={"Authorization": "Bearer garbage"},
        )

        assert resp.status_code == 401
        assert resp.json()["status"] == "TokenInvalid"


# ============================================================================
# Profile
# ============================================================================


class TestProfile:
    @staticmethod
    async def test_get_user(client: AsyncClient, user_id: int, auth_headers: dict[str, str]) -> None:
        resp = await client.get(f"/v1/authorized/user/{user_id}", headers=auth_headers)

        assert resp.status_code == 200
        payload = resp.json()["payload"]
        assert payload["id"] == user_id
        assert payload["email"] == "laura@example.com"
        assert "hashed_password" not in payload

    @staticmethod
    async def test_get_missing_user(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.get("/v1/authorized/user/999", headers=auth_headers)

        assert resp.status_code == 404
        assert resp.json()["status"] == "NotFound"

    @staticmethod
    async def test_invalid_user_id(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        for bad in ("abc", "0"):
            resp = await client.get(f"/v1/authorized/user/{bad}", headers=auth_headers)
            assert resp.status_code == 400
            assert resp.json()["status"] == "InvalidURLParameter"

    @staticmethod
    async def test_patch_only_submitted_fields(
        client: AsyncClient,
        user_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        await client.patch("/v1/authorized/user", json={"bio": "Diarist"}, headers=auth_headers)

        resp = await client.patch(
            "/v1/authorized/user",
            json={"first_name": "Laura", "bio": None},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        assert resp.json() == {"status": "OK"}
        payload = (await client.get(f"/v1/authorized/user/{user_id}", headers=auth_headers)).json()[
            "payload"
        ]
        assert payload["first_name"] == "Laura"
        assert payload["bio"] == "Diarist"

    @staticmethod
    async def test_patch_unknown_field(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.patch(
            "/v1/authorized/user",
            json={"email": "other@example.com"},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "InvalidRequest"

    @staticmethod
    async def test_change_email(client: AsyncClient, user_id: int, auth_headers: dict[str, str]) -> None:
        resp = await client.put(
            "/v1/authorized/user/email",
            json={"email": "palmer@example.com"},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        login = await client.post(
            "/v1/user/login",
            json={"email": "palmer@example.com", "password": PASSWORD},
        )
        assert login.status_code == 200

    @staticmethod
    async def test_change_email_to_taken(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        await client.post("/v1/user", json={"email": "donna@example.com", "password": PASSWORD})

        resp = await client.put(
            "/v1/authorized/user/email",
            json={"email": "donna@example.com"},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "EmailAlreadyUsed"


# ============================================================================
# Password & deletion
# ============================================================================


class TestPasswordAndDeletion:
    @staticmethod
    async def test_change_password(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.put(
            "/v1/authorized/user/password",
            json={"current_password": PASSWORD, "new_password": NEW_PASSWORD},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        login = await client.post(
            "/v1/user/login",
            json={"email": "laura@example.com", "password": NEW_PASSWORD},
        )
        assert login.status_code == 200

    @staticmethod
    async def test_same_new_password(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.put(
            "/v1/authorized/user/password",
            json={"current_password": NEW_PASSWORD, "new_password": NEW_PASSWORD},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "SameNewPassword"

    @staticmethod
    async def test_wrong_current_password(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.put(
            "/v1/authorized/user/password",
            json={"current_password": "Wr0ng!pass", "new_password": NEW_PASSWORD},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "IncorrectPassword"

    @staticmethod
    async def test_delete_account(client: AsyncClient, user_id: int, auth_headers: dict[str, str]) -> None:
        resp = await client.request(
            "DELETE",
            "/v1/authorized/user",
            json={"password": PASSWORD},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        gone = await client.get(f"/v1/authorized/user/{user_id}", headers=auth_headers)
        assert gone.status_code == 404

    @staticmethod
    async def test_delete_wrong_password(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.request(
            "DELETE",
            "/v1/authorized/user",
            json={"password": "Wr0ng!pass"},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "IncorrectPassword"

    @staticmethod
    async def test_change_password_over_long_current(
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        resp = await client.put(
            "/v1/authorized/user/password",
            json={"current_password": LONG_PASSWORD, "new_password": NEW_PASSWORD},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "InvalidRequest"

    @staticmethod
    async def test_delete_over_long_password(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.request(
            "DELETE",
            "/v1/authorized/user",
            json={"password": LONG_PASSWORD},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "InvalidRequest"
