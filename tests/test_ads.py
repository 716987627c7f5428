"""Tests for the advertisement endpoints."""

import pytest


class TestSubmitAd:
    def test_created_as_pending_in_camel_case(self, client) -> None:
        response = client.post("/api/ads", json={
            "clientName": "Acme Bakery",
            "email": "ads@acme.example",
            "plan": "monthly",
            "amount": 15000,
            "receiptImage": "data:image/png;base64,AAAA",
            "adImage": "https://cdn.example/ad.png",
            "adContent": "Fresh bread daily",
            "adUrl": "https://acme.example",
            "adHeadline": "Acme",
            "adContentFile": "brochure.pdf",
        })

        assert response.status_code == 201
        body = response.get_json()
        assert body["status"] == "pending"
        assert body["clientName"] == "Acme Bakery"
        assert body["amount"] == 15000
        assert body["receiptImage"] == "data:image/png;base64,AAAA"
        assert body["adContentFile"] == "brochure.pdf"
        assert body["dateSubmitted"]
        assert "client_name" not in body

    def test_missing_plan_rejected_and_nothing_stored(self, client) -> None:
        response = client.post("/api/ads", json={"clientName": "Acme", "email": "ads@acme.example"})

        assert response.status_code == 400
        assert response.get_json()["message"] == "Client name, email, and plan are required"
        assert client.get("/api/admin/ads").get_json() == []

    def test_malformed_email_rejected(self, client) -> None:
        response = client.post("/api/ads", json={"clientName": "Acme", "email": "not-an-email", "plan": "weekly"})

        assert response.status_code == 400
        body = response.get_json()
        assert body["message"] == "Invalid field 'email': Invalid email address"
        assert body["details"][0]["field"] == "email"

    def test_negative_amount_rejected(self, client) -> None:
        response = client.post(
            "/api/ads", json={"clientName": "Acme", "email": "ads@acme.example", "plan": "weekly", "amount": -1}
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("amount", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_amount_rejected(self, client, amount) -> None:
        raw = '{"clientName": "Acme", "email": "ads@acme.example", "plan": "weekly", "amount": %s}' % amount

        response = client.post("/api/ads", data=raw, content_type="application/json")

        assert response.status_code == 400
        assert response.get_json()["message"].startswith("Invalid field 'amount'")
        assert client.get("/api/admin/ads").get_json() == []


class TestAdListings:
    def test_only_activated_ad_is_public(self, client, make_ad) -> None:
        ads = [make_ad(clientName=f"Client {i}") for i in range(3)]

        client.patch(f"/api/admin/ads/{ads[1]['id']}/approve")
        active = client.get("/api/ads/active").get_json()

        assert len(active) == 1
        assert active[0]["id"] == ads[1]["id"]
        assert active[0]["status"] == "active"
        assert active[0]["clientName"] == "Client 1"

    def test_admin_sees_every_ad_newest_first(self, client, make_ad) -> None:
        old = make_ad(dateSubmitted="2022-05-01T10:00:00")
        new = make_ad(dateSubmitted="2024-05-01T10:00:00")
        client.patch(f"/api/admin/ads/{old['id']}/approve")

        listed = client.get("/api/admin/ads").get_json()

        assert [ad["id"] for ad in listed] == [new["id"], old["id"]]
        assert [ad["status"] for ad in listed] == ["pending", "active"]
        assert listed[0]["dateSubmitted"] == "2024-05-01T10:00:00"


class TestModerateAd:
    def test_approve_activates(self, client, make_ad) -> None:
        ad = make_ad()

        response = client.patch(f"/api/admin/ads/{ad['id']}/approve")

        assert response.status_code == 200
        assert response.get_json()["status"] == "active"

    def test_reject(self, client, make_ad) -> None:
        ad = make_ad()

        response = client.patch(f"/api/admin/ads/{ad['id']}/reject")

        assert response.get_json()["status"] == "rejected"
        assert client.get("/api/ads/active").get_json() == []

    def test_approve_unknown_ad_not_found(self, client) -> None:
        response = client.patch("/api/admin/ads/5/approve")

        assert response.status_code == 404
        assert response.get_json()["message"] == "Ad not found"


class TestDeleteAd:
    def test_delete_removes_ad(self, client, make_ad) -> None:
        ad = make_ad()
        client.patch(f"/api/admin/ads/{ad['id']}/approve")

        response = client.delete(f"/api/ads/{ad['id']}")

        assert response.status_code == 200
        assert client.get("/api/ads/active").get_json() == []
        assert client.get("/api/admin/ads").get_json() == []

    def test_delete_unknown_ad_not_found(self, client) -> None:
        assert client.delete("/api/ads/9").status_code == 404
