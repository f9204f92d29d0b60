import json

import httpx
import pytest

from app.main import app
from app.utils.dependencies import get_post_service

from conftest import make_create_request, unreachable_event_publisher

JD_CONTENT = b"%PDF-1.4 job description"


@pytest.fixture
async def client(service):
    app.dependency_overrides[get_post_service] = lambda: service
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def create_form(**overrides) -> dict:
    payload = make_create_request(**overrides).model_dump(mode="json", by_alias=True)
    return {
        "data": {"post": json.dumps(payload)},
        "files": {"jdFile": ("jd.pdf", JD_CONTENT, "application/pdf")},
    }


async def create_post(client, **overrides) -> httpx.Response:
    return await client.post("/api/posts", headers={"X-User-Id": "U1"}, **create_form(**overrides))


async def test_create_post_returns_camel_case_body(client) -> None:
    response = await create_post(client)

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Backend Engineer"
    assert body["activeStatus"] == "Pending"
    assert body["minSalary"] == 1000
    assert body["recruiterId"] == "U1"
    assert body["applicationDeadline"] == "2024-06-30"
    assert body["business"]["profileImageId"] == "img-1"


async def test_create_post_requires_user_header(client) -> None:
    response = await client.post("/api/posts", **create_form())

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


async def test_create_post_with_invalid_json_part(client) -> None:
    response = await client.post(
        "/api/posts",
        headers={"X-User-Id": "U1"},
        data={"post": json.dumps({"title": "   "})},
        files={"jdFile": ("jd.pdf", JD_CONTENT, "application/pdf")},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


async def test_duplicate_title_is_conflict(client) -> None:
    await create_post(client)

    response = await create_post(client)

    assert response.status_code == 409
    assert response.json()["success"] is False


async def test_unknown_post_uses_error_format(client) -> None:
    response = await client.get("/api/posts/65f000000000000000000000")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": {
            "code": "NOT_FOUND",
            "message": "Post을(를) 찾을 수 없습니다.",
            "details": {"resource": "Post"},
        },
    }


async def test_list_posts_with_filters(client) -> None:
    await create_post(client, title="Backend Engineer")
    await create_post(client, title="Product Designer", professionId="P2")

    response = await client.get(
        "/api/posts",
        params={"search": "backend", "activeStatuses": ["Pending", "Opening"], "pageSize": 5},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["totalElements"] == 1
    assert body["pageSize"] == 5
    assert body["data"][0]["title"] == "Backend Engineer"


async def test_invalid_salary_range_is_bad_request(client) -> None:
    response = await client.get("/api/posts", params={"minSalary": 3000, "maxSalary": 1000})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


async def test_unknown_status_is_bad_request(client) -> None:
    response = await client.get("/api/posts", params={"activeStatus": "Archived"})

    assert response.status_code == 400


async def test_get_post_jd_returns_bytes(client) -> None:
    post_id = (await create_post(client)).json()["id"]

    response = await client.get(f"/api/posts/{post_id}/jd")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content == JD_CONTENT


async def test_update_active_status(client, collaborators) -> None:
    post_id = (await create_post(client)).json()["id"]

    response = await client.put(f"/api/posts/{post_id}/activeStatus", json={"activeStatus": "Opening"})

    assert response.status_code == 200
    assert response.json()["activeStatus"] == "Opening"
    assert collaborators.taxonomy.counter_calls == [("P1", 1)]


async def test_update_counters_and_recruiter_ids(client) -> None:
    post_id = (await create_post(client)).json()["id"]

    views = await client.put(f"/api/posts/{post_id}/totalViews", json={"number": 4})
    negative = await client.put(f"/api/posts/{post_id}/totalApplications", json={"number": -1})
    ids = await client.get("/api/posts/recruiters/U1/ids")

    assert views.json()["totalViews"] == 4
    assert negative.status_code == 400
    assert ids.json() == [post_id]


async def test_update_heading_info(client) -> None:
    post_id = (await create_post(client)).json()["id"]

    response = await client.put(
        f"/api/posts/{post_id}/headingInfo",
        json={"title": "Senior Backend Engineer", "minSalaryString": "20k USD", "maxSalaryString": "30k USD"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Senior Backend Engineer"
    assert (body["minSalary"], body["maxSalary"]) == (20000, 30000)


async def test_event_channel_outage_uses_error_format(client, service) -> None:
    service.event_publisher = unreachable_event_publisher()

    response = await create_post(client)

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "UPSTREAM_ERROR"
    assert response.json()["error"]["details"] == {"service": "event-channel"}
