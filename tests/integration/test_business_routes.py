"""Integration tests for the business endpoints."""

import pytest

from tests.conftest import REVIEW_TEXT

BUSINESSES = "/api/v1/businesses"


async def create_business(client, payload):
    response = await client.post(BUSINESSES, json=payload)
    assert response.status_code == 201
    return response.json()["data"]


class TestBusinessEndpoints:
    """Business CRUD over HTTP."""

    @pytest.mark.asyncio
    async def test_create_business(self, client, sample_business):
        response = await client.post(BUSINESSES, json={**sample_business, "type": "Restaurant"})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == ["Business successfully added", "success"]
        assert body["data"]["id"] == 1
        assert body["data"]["type"] == "Restaurant"
        assert body["data"]["purchased"] is False

    @pytest.mark.asyncio
    async def test_create_trims_whitespace(self, client, sample_business):
        data = await create_business(client, {**sample_business, "name": "  Testing  "})

        assert data["name"] == "Testing"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, client, sample_business):
        original = await create_business(client, sample_business)

        response = await client.post(BUSINESSES, json=sample_business)

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["message"] == ["Business with that information already exists", "warn"]
        assert body["data"]["id"] == original["id"]

    @pytest.mark.asyncio
    async def test_create_invalid_fields(self, client, sample_business):
        response = await client.post(BUSINESSES, json={**sample_business, "name": "abc", "state": "T"})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["data"] is None
        lines = body["message"][0].split("\n")
        assert lines[0].startswith("'name' ")
        assert lines[1].startswith("'state' ")
        assert body["message"][1] == "error"

    @pytest.mark.asyncio
    async def test_create_missing_field(self, client, sample_business):
        payload = {key: value for key, value in sample_business.items() if key != "city"}

        response = await client.post(BUSINESSES, json=payload)

        assert response.status_code == 422
        assert response.json()["message"][0].startswith("'city' ")

    @pytest.mark.asyncio
    async def test_list_businesses_assembled(self, client, sample_business):
        business = await create_business(client, sample_business)
        await client.post(
            "/api/v1/reviews",
            json={"business_id": business["id"], "score": 9, "text": REVIEW_TEXT},
        )

        response = await client.get(BUSINESSES)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == ["Businesses found", "success"]
        [listed] = body["data"]
        assert listed["purchased"] is False
        assert listed["photos"] == []
        assert listed["reviews"][0]["score"] == 9
        assert listed["reviews"][0]["user"] is None
        assert "business" not in listed["reviews"][0]

    @pytest.mark.asyncio
    async def test_get_business(self, client, sample_business):
        business = await create_business(client, sample_business)

        response = await client.get(f"{BUSINESSES}/{business['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == ["Business found", "success"]
        assert response.json()["data"]["name"] == "Testing"

    @pytest.mark.asyncio
    async def test_get_business_not_found(self, client):
        response = await client.get(f"{BUSINESSES}/9000")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": ["Business not found", "warn"],
            "data": None,
        }

    @pytest.mark.asyncio
    async def test_update_business(self, client, sample_business):
        business = await create_business(client, sample_business)

        response = await client.patch(
            f"{BUSINESSES}/{business['id']}", json={"city": "newville", "purchased": True}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == ["Business successfully updated", "success"]
        assert body["data"]["city"] == "newville"
        assert body["data"]["purchased"] is True

    @pytest.mark.asyncio
    async def test_update_clears_type(self, client, sample_business):
        business = await create_business(client, {**sample_business, "type": "Restaurant"})

        response = await client.patch(f"{BUSINESSES}/{business['id']}", json={"type": None})

        assert response.status_code == 200
        assert response.json()["data"]["type"] is None
        assert response.json()["data"]["purchased"] is None

    @pytest.mark.asyncio
    async def test_update_without_changes(self, client, sample_business):
        business = await create_business(client, sample_business)

        response = await client.patch(
            f"{BUSINESSES}/{business['id']}", json={"name": sample_business["name"]}
        )

        assert response.status_code == 400
        assert response.json()["message"] == [
            "None of the provided updates contained new data",
            "warn",
        ]

    @pytest.mark.asyncio
    async def test_update_empty_body(self, client, sample_business):
        business = await create_business(client, sample_business)

        response = await client.patch(f"{BUSINESSES}/{business['id']}", json={})

        assert response.status_code == 422
        message = response.json()["message"][0]
        assert message.startswith("At least one value must be supplied: 'name'")
        assert "'purchased'" in message

    @pytest.mark.asyncio
    async def test_update_into_existing_business(self, client, sample_business):
        existing = await create_business(client, sample_business)
        other = await create_business(client, {**sample_business, "name": "Other"})

        response = await client.patch(
            f"{BUSINESSES}/{other['id']}", json={"name": sample_business["name"]}
        )

        assert response.status_code == 409
        body = response.json()
        assert body["message"] == ["Business with that information already exists", "warn"]
        assert body["data"]["id"] == existing["id"]
        unchanged = (await client.get(f"{BUSINESSES}/{other['id']}")).json()["data"]
        assert unchanged["name"] == "Other"

    @pytest.mark.asyncio
    async def test_update_null_name_rejected(self, client, sample_business):
        business = await create_business(client, sample_business)

        response = await client.patch(f"{BUSINESSES}/{business['id']}", json={"name": None})

        assert response.status_code == 422
        assert response.json()["message"][0].startswith("'name' ")

    @pytest.mark.asyncio
    async def test_update_not_found(self, client):
        response = await client.patch(f"{BUSINESSES}/9000", json={"city": "newville"})

        assert response.status_code == 404
        assert response.json()["message"] == ["Business not found", "warn"]

    @pytest.mark.asyncio
    async def test_delete_business_cascades(self, client, sample_business):
        business = await create_business(client, sample_business)
        created = await client.post(
            "/api/v1/reviews",
            json={"business_id": business["id"], "score": 5, "text": REVIEW_TEXT},
        )
        review_id = created.json()["data"]["id"]

        response = await client.delete(f"{BUSINESSES}/{business['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == ["Business successfully deleted", "success"]
        assert (await client.get(f"{BUSINESSES}/{business['id']}")).status_code == 404
        assert (await client.get(f"/api/v1/reviews/{review_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_business_not_found(self, client):
        response = await client.delete(f"{BUSINESSES}/9000")

        assert response.status_code == 404


class TestPhotoUpload:
    """Multipart photo uploads."""

    @pytest.mark.asyncio
    async def test_upload_photos_in_order(self, client, sample_business, photo_storage):
        business = await create_business(client, sample_business)
        url = f"{BUSINESSES}/{business['id']}/photos"

        first = await client.post(
            url, files={"file": ("front.png", b"png-bytes", "image/png")}, data={"caption": "Front"}
        )
        second = await client.post(url, files={"file": ("inside.jpg", b"jpg-bytes", "image/jpeg")})

        assert first.status_code == 201
        assert first.json()["message"] == ["Photo successfully uploaded", "success"]
        assert first.json()["data"]["position"] == 0
        assert first.json()["data"]["caption"] == "Front"
        assert second.json()["data"]["position"] == 1
        assert (photo_storage.root / f"{first.json()['data']['id']}.png").read_bytes() == b"png-bytes"

        listed = (await client.get(f"{BUSINESSES}/{business['id']}")).json()["data"]
        assert [photo["position"] for photo in listed["photos"]] == [0, 1]

    @pytest.mark.asyncio
    async def test_upload_unsupported_extension(self, client, sample_business):
        business = await create_business(client, sample_business)

        response = await client.post(
            f"{BUSINESSES}/{business['id']}/photos",
            files={"file": ("notes.txt", b"text", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["message"] == ["Unsupported photo extension 'txt'", "error"]

    @pytest.mark.asyncio
    async def test_upload_empty_file(self, client, sample_business):
        business = await create_business(client, sample_business)

        response = await client.post(
            f"{BUSINESSES}/{business['id']}/photos",
            files={"file": ("empty.jpg", b"", "image/jpeg")},
        )

        assert response.status_code == 400
        assert response.json()["message"] == ["File is empty", "error"]

    @pytest.mark.asyncio
    async def test_upload_to_missing_business(self, client):
        response = await client.post(
            f"{BUSINESSES}/9000/photos",
            files={"file": ("front.jpg", b"bytes", "image/jpeg")},
        )

        assert response.status_code == 404
        assert response.json()["message"] == ["Business not found", "warn"]
