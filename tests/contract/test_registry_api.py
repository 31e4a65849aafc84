"""Contract tests for member and cooperative endpoints."""

MEMBER_PAYLOAD = {
    "tc_number": "10000000146",
    "full_name": "Fatma Koç",
    "phone_1": "5321112233",
    "registration_date": "2024-02-01",
}


class TestMemberEndpoints:
    def test_create_member(self, client):
        response = client.post("/api/members", json=MEMBER_PAYLOAD)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] > 0
        assert body["full_name"] == "Fatma Koç"
        assert body["phone_2"] is None

    def test_duplicate_member(self, client):
        client.post("/api/members", json=MEMBER_PAYLOAD)

        response = client.post("/api/members", json=MEMBER_PAYLOAD)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "duplicate_member"

    def test_tc_number_too_long(self, client):
        response = client.post("/api/members", json={**MEMBER_PAYLOAD, "tc_number": "1" * 12})

        assert response.status_code == 422

    def test_list_and_search(self, client, member):
        client.post("/api/members", json=MEMBER_PAYLOAD)

        listed = client.get("/api/members").json()
        found = client.get("/api/members/search", params={"q": "Fatma"}).json()

        assert [m["full_name"] for m in listed] == ["Ayşe Yılmaz", "Fatma Koç"]
        assert [m["tc_number"] for m in found] == ["10000000146"]

    def test_update_member(self, client, member):
        response = client.put(
            f"/api/members/{member.id}",
            json={**MEMBER_PAYLOAD, "tc_number": member.tc_number, "phone_2": "2160000000"},
        )

        assert response.status_code == 200
        assert response.json()["phone_2"] == "2160000000"

    def test_update_unknown_member(self, client):
        response = client.put("/api/members/999", json=MEMBER_PAYLOAD)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "not_found"


class TestCooperativeEndpoints:
    def test_create_and_get(self, client):
        created = client.post(
            "/api/cooperatives", json={"name": "Lale Sitesi", "start_date": "2022-09-01"}
        )

        assert created.status_code == 201
        coop_id = created.json()["id"]
        assert client.get(f"/api/cooperatives/{coop_id}").json()["name"] == "Lale Sitesi"
        assert [c["id"] for c in client.get("/api/cooperatives").json()] == [coop_id]

    def test_get_unknown(self, client):
        assert client.get("/api/cooperatives/999").status_code == 404

    def test_enroll_and_list(self, client, cooperative, member):
        response = client.post(
            f"/api/cooperatives/{cooperative.id}/members",
            json={"member_ids": [member.id], "entry_date": "2025-01-01"},
        )

        assert response.status_code == 201
        link = response.json()[0]
        assert link["member_id"] == member.id
        assert link["full_name"] == member.full_name

        enrolled = client.get(f"/api/cooperatives/{cooperative.id}/members").json()
        available = client.get(f"/api/cooperatives/{cooperative.id}/available-members").json()
        assert [m["id"] for m in enrolled] == [link["id"]]
        assert available == []

    def test_enroll_twice(self, client, coop_member, cooperative, member):
        response = client.post(
            f"/api/cooperatives/{cooperative.id}/members",
            json={"member_ids": [member.id], "entry_date": "2025-01-01"},
        )

        assert response.status_code == 409

    def test_enroll_empty_list(self, client, cooperative):
        response = client.post(
            f"/api/cooperatives/{cooperative.id}/members",
            json={"member_ids": [], "entry_date": "2025-01-01"},
        )

        assert response.status_code == 422
