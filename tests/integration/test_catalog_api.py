"""Integration tests for the movie, series and episode endpoints.

Tests cover:
- Creation, retrieval, partial updates and invalidation
- Pagination metadata and query clamping
- Audit history
- Season-wide writes and cascading invalidation
- URL parameter validation
"""

from __future__ import annotations

import pytest
from httpx import AsyncClient

ALIEN = {"title": "Alien", "date_released": "1979-05-25", "duration": 117}
TWIN_PEAKS = {"title": "Twin Peaks", "date_started": "1990-04-08"}


def episode(title: str) -> dict:
    return {"title": title, "date_released": "1990-04-08"}


@pytest.fixture
async def movie_id(client: AsyncClient, auth_headers: dict[str, str]) -> int:
    resp = await client.post("/v1/authorized/movie", json=ALIEN, headers=auth_headers)
    assert resp.status_code == 200, resp.text
    return resp.json()["payload"]


@pytest.fixture
async def series_id(client: AsyncClient, auth_headers: dict[str, str]) -> int:
    resp = await client.post("/v1/authorized/series", json=TWIN_PEAKS, headers=auth_headers)
    assert resp.status_code == 200, resp.text
    return resp.json()["payload"]


# ============================================================================
# Movies
# ============================================================================


class TestMovies:
    @staticmethod
    async def test_requires_token(client: AsyncClient) -> None:
        resp = await client.get("/v1/authorized/movie")
        assert resp.status_code == 401

    @staticmethod
    async def test_create_and_get(
        client: AsyncClient,
        user_id: int,
        movie_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        resp = await client.get(f"/v1/authorized/movie/{movie_id}", headers=auth_headers)

        assert resp.status_code == 200
        payload = resp.json()["payload"]
        assert payload["title"] == "Alien"
        assert payload["duration"] == 117
        assert payload["contributed_by"] == user_id
        assert payload["invalidation"] is None

    @staticmethod
    async def test_get_missing(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.get("/v1/authorized/movie/999", headers=auth_headers)

        assert resp.status_code == 404
        assert resp.json() == {"status": "NotFound"}

    @staticmethod
    async def test_create_invalid_body(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.post(
            "/v1/authorized/movie",
            json={"title": "Roundhay Garden Scene", "date_released": "1887-10-14"},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "InvalidRequest"

    @staticmethod
    async def test_list_with_pagination(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        for title in ("Alien", "Heat", "Ran"):
            await client.post(
                "/v1/authorized/movie",
                json={"title": title, "date_released": "1985-01-01"},
                headers=auth_headers,
            )

        resp = await client.get("/v1/authorized/movie?page=2&per_page=2", headers=auth_headers)

        assert resp.status_code == 200
        body = resp.json()
        assert [m["title"] for m in body["payload"]] == ["Ran"]
        assert body["page"] == 2
        assert body["per_page"] == 2
        assert body["page_count"] == 2
        assert body["total_items"] == 3

    @staticmethod
    async def test_list_clamps_pagination(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.get("/v1/authorized/movie?page=-1&per_page=100000", headers=auth_headers)

        assert resp.status_code == 200
        body = resp.json()
        assert body["page"] == 1
        assert body["per_page"] == 100
        assert body["payload"] == []
        assert body["total_items"] == 0

    @staticmethod
    async def test_list_page_beyond_64_bits(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.get("/v1/authorized/movie?page=100000000000000000000", headers=auth_headers)

        assert resp.status_code == 200
        assert resp.json()["page"] == 1

    @staticmethod
    async def test_patch_and_invalidate(
        client: AsyncClient,
        movie_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        patch_resp = await client.patch(
            f"/v1/authorized/movie/{movie_id}",
            json={"descriptions": "In space no one can hear you scream."},
            headers=auth_headers,
        )
        delete_resp = await client.request(
            "DELETE",
            f"/v1/authorized/movie/{movie_id}",
            json={"invalidation": "duplicate"},
            headers=auth_headers,
        )

        assert patch_resp.status_code == 200
        assert delete_resp.status_code == 200
        payload = (await client.get(f"/v1/authorized/movie/{movie_id}", headers=auth_headers)).json()[
            "payload"
        ]
        assert payload["title"] == "Alien"
        assert payload["descriptions"].startswith("In space")
        assert payload["invalidation"] == "duplicate"

    @staticmethod
    async def test_invalidate_requires_reason(
        client: AsyncClient,
        movie_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        resp = await client.request(
            "DELETE",
            f"/v1/authorized/movie/{movie_id}",
            json={"invalidation": ""},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "InvalidRequest"

    @staticmethod
    async def test_audits(client: AsyncClient, movie_id: int, auth_headers: dict[str, str]) -> None:
        await client.patch(
            f"/v1/authorized/movie/{movie_id}",
            json={"title": "Aliens"},
            headers=auth_headers,
        )

        resp = await client.get(f"/v1/authorized/movie/{movie_id}/audits", headers=auth_headers)

        assert resp.status_code == 200
        body = resp.json()
        assert body["total_items"] == 2
        assert [a["title"] for a in body["payload"]] == ["Aliens", "Alien"]
        assert all("audit_id" in a for a in body["payload"])

    @staticmethod
    async def test_audits_of_missing_movie(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.get("/v1/authorized/movie/999/audits", headers=auth_headers)
        assert resp.status_code == 404


# ============================================================================
# Series
# ============================================================================


class TestSeries:
    @staticmethod
    async def test_create_and_get(client: AsyncClient, series_id: int, auth_headers: dict[str, str]) -> None:
        resp = await client.get(f"/v1/authorized/series/{series_id}", headers=auth_headers)

        assert resp.status_code == 200
        payload = resp.json()["payload"]
        assert payload["title"] == "Twin Peaks"
        assert payload["date_ended"] is None

    @staticmethod
    async def test_end_before_start(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.post(
            "/v1/authorized/series",
            json={**TWIN_PEAKS, "date_ended": "1980-01-01"},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "InvalidRequest"

    @staticmethod
    async def test_list(client: AsyncClient, series_id: int, auth_headers: dict[str, str]) -> None:
        resp = await client.get("/v1/authorized/series", headers=auth_headers)

        body = resp.json()
        assert [s["id"] for s in body["payload"]] == [series_id]
        assert body["page_count"] == 1

    @staticmethod
    async def test_patch_and_audits(
        client: AsyncClient,
        series_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        await client.patch(
            f"/v1/authorized/series/{series_id}",
            json={"date_ended": "1991-06-10"},
            headers=auth_headers,
        )

        resp = await client.get(f"/v1/authorized/series/{series_id}/audits", headers=auth_headers)

        body = resp.json()
        assert body["total_items"] == 2
        assert body["payload"][0]["date_ended"] == "1991-06-10"

    @staticmethod
    async def test_patch_missing(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.patch(
            "/v1/authorized/series/999",
            json={"title": "Lost"},
            headers=auth_headers,
        )
        assert resp.status_code == 404

    @staticmethod
    async def test_invalidate_cascades(
        client: AsyncClient,
        series_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        await client.put(
            f"/v1/authorized/series/{series_id}/season/1/episode",
            json={"episodes": [episode("Pilot"), episode("Traces to Nowhere")]},
            headers=auth_headers,
        )

        resp = await client.request(
            "DELETE",
            f"/v1/authorized/series/{series_id}",
            json={"invalidation": "copyright"},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        episodes = (
            await client.get(f"/v1/authorized/series/{series_id}/episode", headers=auth_headers)
        ).json()["payload"]
        assert [e["invalidation"] for e in episodes] == ["copyright", "copyright"]
        series = (await client.get(f"/v1/authorized/series/{series_id}", headers=auth_headers)).json()[
            "payload"
        ]
        assert series["invalidation"] == "copyright"

    @staticmethod
    async def test_invalidate_without_episodes(
        client: AsyncClient,
        series_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        resp = await client.request(
            "DELETE",
            f"/v1/authorized/series/{series_id}",
            json={"invalidation": "copyright"},
            headers=auth_headers,
        )
        assert resp.status_code == 200


# ============================================================================
# Episodes
# ============================================================================


class TestEpisodes:
    @staticmethod
    async def test_put_and_get(client: AsyncClient, series_id: int, auth_headers: dict[str, str]) -> None:
        url = f"/v1/authorized/series/{series_id}/season/1/episode/1"

        put = await client.put(url, json=episode("Pilot"), headers=auth_headers)
        resp = await client.get(url, headers=auth_headers)

        assert put.status_code == 200
        payload = resp.json()["payload"]
        assert payload["title"] == "Pilot"
        assert (payload["series_id"], payload["season_number"], payload["episode_number"]) == (
            series_id,
            1,
            1,
        )

    @staticmethod
    async def test_put_replaces(client: AsyncClient, series_id: int, auth_headers: dict[str, str]) -> None:
        url = f"/v1/authorized/series/{series_id}/season/1/episode/1"
        await client.put(url, json=episode("Pilot"), headers=auth_headers)

        await client.put(url, json=episode("Northwest Passage"), headers=auth_headers)

        listing = (
            await client.get(f"/v1/authorized/series/{series_id}/episode", headers=auth_headers)
        ).json()
        assert listing["total_items"] == 1
        assert listing["payload"][0]["title"] == "Northwest Passage"

    @staticmethod
    async def test_put_into_missing_series(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.put(
            "/v1/authorized/series/999/season/1/episode/1",
            json=episode("Pilot"),
            headers=auth_headers,
        )
        assert resp.status_code == 404

    @staticmethod
    async def test_put_season_numbers_episodes(
        client: AsyncClient,
        series_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        titles = ["Pilot", "Traces to Nowhere", "Zen"]

        await client.put(
            f"/v1/authorized/series/{series_id}/season/2/episode",
            json={"episodes": [episode(t) for t in titles]},
            headers=auth_headers,
        )

        resp = await client.get(
            f"/v1/authorized/series/{series_id}/season/2/episode",
            headers=auth_headers,
        )
        payload = resp.json()["payload"]
        assert [(e["episode_number"], e["title"]) for e in payload] == [
            (1, "Pilot"),
            (2, "Traces to Nowhere"),
            (3, "Zen"),
        ]

    @staticmethod
    async def test_put_season_requires_episodes(
        client: AsyncClient,
        series_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        resp = await client.put(
            f"/v1/authorized/series/{series_id}/season/1/episode",
            json={"episodes": []},
            headers=auth_headers,
        )
        assert resp.status_code == 400

    @staticmethod
    async def test_patch_invalidate_and_audits(
        client: AsyncClient,
        series_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        url = f"/v1/authorized/series/{series_id}/season/1/episode/1"
        await client.put(url, json=episode("Pilot"), headers=auth_headers)

        await client.patch(url, json={"duration": 94}, headers=auth_headers)
        await client.request("DELETE", url, json={"invalidation": "typo"}, headers=auth_headers)

        payload = (await client.get(url, headers=auth_headers)).json()["payload"]
        assert payload["duration"] == 94
        assert payload["invalidation"] == "typo"
        audits = (await client.get(f"{url}/audits", headers=auth_headers)).json()
        assert audits["total_items"] == 3
        assert audits["payload"][0]["invalidation"] == "typo"

    @staticmethod
    async def test_invalidate_season(
        client: AsyncClient,
        series_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        season_url = f"/v1/authorized/series/{series_id}/season/1/episode"
        await client.put(season_url, json={"episodes": [episode("Pilot")]}, headers=auth_headers)

        resp = await client.request(
            "DELETE", season_url, json={"invalidation": "rights"}, headers=auth_headers
        )

        assert resp.status_code == 200
        payload = (await client.get(season_url, headers=auth_headers)).json()["payload"]
        assert payload[0]["invalidation"] == "rights"

    @staticmethod
    async def test_invalidate_empty_season(
        client: AsyncClient,
        series_id: int,
        auth_headers: dict[str, str],
    ) -> None:
        resp = await client.request(
            "DELETE",
            f"/v1/authorized/series/{series_id}/season/4/episode",
            json={"invalidation": "rights"},
            headers=auth_headers,
        )
        assert resp.status_code == 404

    @staticmethod
    async def test_get_missing(client: AsyncClient, series_id: int, auth_headers: dict[str, str]) -> None:
        resp = await client.get(
            f"/v1/authorized/series/{series_id}/season/1/episode/1",
            headers=auth_headers,
        )
        assert resp.status_code == 404

    @staticmethod
    @pytest.mark.parametrize(
        "path",
        [
            "/season/0/episode/1",
            "/season/101/episode/1",
            "/season/1/episode/0",
            "/season/1/episode/1001",
            "/season/one/episode/1",
        ],
    )
    async def test_invalid_url_parameters(
        client: AsyncClient,
        series_id: int,
        auth_headers: dict[str, str],
        path: str,
    ) -> None:
        resp = await client.get(f"/v1/authorized/series/{series_id}{path}", headers=auth_headers)

        assert resp.status_code == 400
        assert resp.json() == {"status": "InvalidURLParameter"}


# ============================================================================
# Record ids
# ============================================================================


class TestRecordIds:
    @staticmethod
    @pytest.mark.parametrize(
        "path",
        [
            "/v1/authorized/movie/100000000000000000000",
            "/v1/authorized/movie/9223372036854775808/audits",
            "/v1/authorized/series/100000000000000000000",
            "/v1/authorized/series/9223372036854775808/episode",
            "/v1/authorized/series/100000000000000000000/season/1/episode/1",
            "/v1/authorized/user/100000000000000000000",
        ],
    )
    async def test_id_beyond_64_bits(
        client: AsyncClient,
        auth_headers: dict[str, str],
        path: str,
    ) -> None:
        resp = await client.get(path, headers=auth_headers)

        assert resp.status_code == 400
        assert resp.json() == {"status": "InvalidURLParameter"}

    @staticmethod
    async def test_largest_id_is_not_found(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.get("/v1/authorized/movie/9223372036854775807", headers=auth_headers)

        assert resp.status_code == 404
        assert resp.json()["status"] == "NotFound"
