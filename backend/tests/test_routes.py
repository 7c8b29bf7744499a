"""
ScholarBeacon Backend: HTTP Endpoint Tests
==========================================

What:  Every route through the ASGI app, against the in-memory store.

What we test:
    ✅ User create → fetch by email round trip, profile patch
    ✅ Scholarship lookup: found, unknown (null), malformed id (400)
    ✅ Enriched review and application listings, with and without relations
    ✅ Deleting an application twice
    ✅ Payment intent endpoint and its error mapping
    ✅ Store failures map to a generic 500
"""

from unittest.mock import AsyncMock, patch

import pytest
from bson import ObjectId

from scholarbeacon.exceptions import PaymentServiceError


class TestRoot:

    @pytest.mark.asyncio
    async def test_liveness_text(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.text == "Scholarship is coming soon"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/users", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_health_without_database_client(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
        assert body["payments"] == "configured"


class TestUsers:

    @pytest.mark.asyncio
    async def test_create_then_fetch_by_email(self, test_client):
        user = {"email": "ada@example.com", "name": "Ada", "image": "ada.png", "role": "student"}

        created = await test_client.post("/users", json=user)
        assert created.status_code == 200
        ack = created.json()
        assert ack["acknowledged"] is True

        fetched = await test_client.get("/users/ada@example.com")
        body = fetched.json()
        assert body.pop("_id") == ack["insertedId"]
        assert body == user

    @pytest.mark.asyncio
    async def test_unknown_email_returns_null(self, test_client):
        response = await test_client.get("/users/nobody@example.com")
        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_list_users(self, test_client, fake_store):
        fake_store.users.collection.seed({"email": "a@x.io"}, {"email": "b@x.io"})
        response = await test_client.get("/users")
        assert [u["email"] for u in response.json()] == ["a@x.io", "b@x.io"]

    @pytest.mark.asyncio
    async def test_patch_updates_name_and_image(self, test_client, fake_store):
        fake_store.users.collection.seed({"email": "ada@example.com", "name": "Ada", "image": "old.png"})

        response = await test_client.patch(
            "/users",
            json={"email": "ada@example.com", "name": "Ada L.", "photo": "new.png"},
        )

        assert response.json() == {"acknowledged": True, "matchedCount": 1, "modifiedCount": 1}
        stored = fake_store.users.collection.documents[0]
        assert stored["name"] == "Ada L."
        assert stored["image"] == "new.png"

    @pytest.mark.asyncio
    async def test_patch_unknown_user_matches_nothing(self, test_client):
        response = await test_client.patch("/users", json={"email": "x@y.z", "name": "X"})
        assert response.status_code == 200
        assert response.json()["matchedCount"] == 0


class TestScholarships:

    @pytest.mark.asyncio
    async def test_get_by_id(self, test_client, fake_store):
        (sid,) = fake_store.scholarships.collection.seed(
            {"subject_name": "CS", "university_name": "MIT", "fee": 19.99}
        )

        response = await test_client.get(f"/scholarships/{sid}")

        assert response.json() == {
            "_id": str(sid), "subject_name": "CS", "university_name": "MIT", "fee": 19.99,
        }

    @pytest.mark.asyncio
    async def test_unknown_id_returns_null(self, test_client):
        response = await test_client.get(f"/scholarships/{ObjectId()}")
        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_malformed_id_is_400(self, test_client):
        response = await test_client.get("/scholarships/not-an-id")
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "invalid_identifier"
        assert body["details"] == {"field": "id", "value": "not-an-id"}

    @pytest.mark.asyncio
    async def test_list(self, test_client, fake_store):
        fake_store.scholarships.collection.seed({"subject_name": "A"}, {"subject_name": "B"})
        response = await test_client.get("/scholarships")
        assert [s["subject_name"] for s in response.json()] == ["A", "B"]


class TestReviews:

    @pytest.mark.asyncio
    async def test_reviewer_summary_resolved(self, test_client, fake_store):
        (s1,) = fake_store.scholarships.collection.seed({"subject_name": "CS", "university_name": "MIT"})
        reviewer = str(ObjectId())
        fake_store.reviews.collection.seed({
            "reviewer_id": reviewer,
            "scholarship_id": str(s1),
            "reviewer_comments": "Great!",
            "review_date": "2024-01-01",
        })

        response = await test_client.get(f"/reviews/r_id/{reviewer}")

        assert response.status_code == 200
        assert response.json() == [{
            "scholarship_name": "CS",
            "university_name": "MIT",
            "review_comments": "Great!",
            "review_date": "2024-01-01",
        }]

    @pytest.mark.asyncio
    async def test_reviewer_summary_unresolved(self, test_client, fake_store):
        reviewer = str(ObjectId())
        fake_store.reviews.collection.seed({
            "reviewer_id": reviewer,
            "scholarship_id": str(ObjectId()),
            "reviewer_comments": "Great!",
            "review_date": "2024-01-01",
        })

        response = await test_client.get(f"/reviews/r_id/{reviewer}")

        assert response.status_code == 200
        assert response.json() == [{
            "scholarship_name": "Unknown",
            "university_name": "Unknown",
            "review_comments": "Great!",
            "review_date": "2024-01-01",
        }]

    @pytest.mark.asyncio
    async def test_reviewer_summary_with_plain_string_ids(self, test_client, fake_store):
        fake_store.scholarships.collection.seed(
            {"_id": "S1", "subject_name": "CS", "university_name": "MIT"}
        )
        fake_store.reviews.collection.seed({
            "reviewer_id": "R1",
            "scholarship_id": "S1",
            "reviewer_comments": "Great!",
            "review_date": "2024-01-01",
        })

        response = await test_client.get("/reviews/r_id/R1")

        assert response.status_code == 200
        assert response.json() == [{
            "scholarship_name": "CS",
            "university_name": "MIT",
            "review_comments": "Great!",
            "review_date": "2024-01-01",
        }]

    @pytest.mark.asyncio
    async def test_reviewer_summary_with_plain_string_ids_unresolved(self, test_client, fake_store):
        fake_store.scholarships.collection.seed(
            {"_id": "S2", "subject_name": "Math", "university_name": "ETH"}
        )
        fake_store.reviews.collection.seed({
            "reviewer_id": "R1",
            "scholarship_id": "S1",
            "reviewer_comments": "Great!",
            "review_date": "2024-01-01",
        })

        response = await test_client.get("/reviews/r_id/R1")

        assert response.status_code == 200
        assert response.json() == [{
            "scholarship_name": "Unknown",
            "university_name": "Unknown",
            "review_comments": "Great!",
            "review_date": "2024-01-01",
        }]

    @pytest.mark.asyncio
    async def test_scholarship_reviews_with_reviewers(self, test_client, fake_store):
        (known,) = fake_store.users.collection.seed({"name": "Ada", "image": "ada.png"})
        scholarship_id = str(ObjectId())
        fake_store.reviews.collection.seed(
            {"scholarship_id": scholarship_id, "reviewer_id": str(known), "rating": 5},
            {"scholarship_id": scholarship_id, "reviewer_id": str(ObjectId()), "rating": 3},
            {"scholarship_id": scholarship_id, "reviewer_id": "R1", "rating": 4},
            {"scholarship_id": "other", "reviewer_id": str(known), "rating": 1},
        )

        response = await test_client.get(f"/reviews/{scholarship_id}")

        assert response.status_code == 200
        body = response.json()
        assert [r["rating"] for r in body] == [5, 3, 4]
        assert (body[0]["reviewer_name"], body[0]["reviewer_image"]) == ("Ada", "ada.png")
        assert (body[1]["reviewer_name"], body[1]["reviewer_image"]) == ("Unknown", "default.jpg")
        assert (body[2]["reviewer_name"], body[2]["reviewer_image"]) == ("Unknown", "default.jpg")
        assert all("_id" in r for r in body)

    @pytest.mark.asyncio
    async def test_create_and_list(self, test_client):
        created = await test_client.post("/reviews", json={"reviewer_comments": "Nice"})
        assert created.json()["acknowledged"] is True

        listed = await test_client.get("/reviews")
        assert [r["reviewer_comments"] for r in listed.json()] == ["Nice"]


class TestApplications:

    @pytest.mark.asyncio
    async def test_applicant_applications_are_enriched(self, test_client, fake_store):
        (s1,) = fake_store.scholarships.collection.seed(
            {"subject_name": "Physics", "university_name": "ETH", "category": "Full fund"}
        )
        fake_store.applications.collection.seed(
            {"user_id": "U1", "scholarship_id": str(s1), "degree": "MSc"},
            {"user_id": "U1", "scholarship_id": "deleted", "degree": "PhD"},
            {"user_id": "U2", "scholarship_id": str(s1), "degree": "BSc"},
        )

        response = await test_client.get("/applications/U1")

        body = response.json()
        assert [a["degree"] for a in body] == ["MSc", "PhD"]
        assert body[0]["scholarship_name"] == "Physics"
        assert body[0]["subject_name"] == "Physics"
        assert body[0]["university_name"] == "ETH"
        assert body[0]["scholarship_category"] == "ETH"
        assert body[1]["scholarship_name"] == "Unknown"
        assert body[1]["scholarship_category"] == "Unknown"

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client):
        created = await test_client.post("/applications", json={"user_id": "U1"})
        application_id = created.json()["insertedId"]

        first = await test_client.delete(f"/applications/{application_id}")
        second = await test_client.delete(f"/applications/{application_id}")

        assert first.json() == {"acknowledged": True, "deletedCount": 1}
        assert second.status_code == 200
        assert second.json() == {"acknowledged": True, "deletedCount": 0}

    @pytest.mark.asyncio
    async def test_delete_malformed_id_is_400(self, test_client):
        response = await test_client.delete("/applications/xyz")
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_identifier"

    @pytest.mark.asyncio
    async def test_list_all(self, test_client, fake_store):
        fake_store.applications.collection.seed({"user_id": "U1"}, {"user_id": "U2"})
        response = await test_client.get("/applications")
        assert len(response.json()) == 2


class TestPayments:

    @pytest.mark.asyncio
    async def test_create_payment_intent(self, test_client):
        create = AsyncMock(return_value="pi_1_secret_2")
        with patch("scholarbeacon.routes.payments.payment_service.create_payment_intent", create):
            response = await test_client.post("/create-payment-intent", json={"fee": 19.99})

        assert response.status_code == 200
        assert response.json() == {"clientSecret": "pi_1_secret_2"}
        create.assert_awaited_once_with(19.99)

    @pytest.mark.asyncio
    async def test_processor_failure_is_500(self, test_client):
        create = AsyncMock(side_effect=PaymentServiceError(context={"stripe_code": "amount_too_small"}))
        with patch("scholarbeacon.routes.payments.payment_service.create_payment_intent", create):
            response = await test_client.post("/create-payment-intent", json={"fee": 0.1})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "payment_error"
        assert "amount_too_small" not in response.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_fee", ["NaN", "Infinity", "-Infinity"])
    async def test_non_finite_fee_is_422(self, test_client, raw_fee):
        create = AsyncMock()
        with patch("scholarbeacon.routes.payments.payment_service.create_payment_intent", create):
            response = await test_client.post(
                "/create-payment-intent",
                content=f'{{"fee": {raw_fee}}}',
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "fee"]
        create.assert_not_awaited()


class TestStoreFailures:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/users"),
            ("GET", "/users/ada@example.com"),
            ("GET", "/scholarships"),
            ("GET", "/applications/U1"),
            ("GET", "/reviews/r_id/R1"),
            ("GET", f"/reviews/{ObjectId()}"),
            ("DELETE", f"/applications/{ObjectId()}"),
        ],
    )
    async def test_generic_500(self, failing_client, method, path):
        response = await failing_client.request(method, path)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["message"] == "An internal error occurred. Please try again later."
        assert "No servers" not in response.text
