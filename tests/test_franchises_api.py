"""Integration tests for the franchise endpoints."""

from fastapi.testclient import TestClient

from franchise_api.app.schemas.franchise import new_franchise_id

BASE = "/api/franchises"
MISSING_ID = "0" * 32


# ============== Create ==============

class TestCreateFranchise:

    def test_create_returns_persisted_record(self, client, franchise_payload):
        res = client.post(BASE, json=franchise_payload)
        assert res.status_code == 201
        data = res.json()
        assert data["name"] == franchise_payload["name"]
        assert data["company"] == franchise_payload["company"]
        assert data["contactName"] == franchise_payload["contactName"]
        assert data["contactEmail"] == franchise_payload["contactEmail"]
        assert data["contactPhone"] == franchise_payload["contactPhone"]
        assert len(data["id"]) == 32
        assert data["createdAt"]

    def test_create_minimal_then_get_returns_identical_record(self, client):
        res = client.post(BASE, json={"name": "A", "company": "B", "contactName": "C"})
        assert res.status_code == 201
        created = res.json()
        assert created["contactEmail"] is None
        assert created["contactPhone"] is None

        res = client.get(f"{BASE}/{created['id']}")
        assert res.status_code == 200
        assert res.json() == created

    def test_create_with_trailing_slash(self, client):
        res = client.post(f"{BASE}/", json={"name": "A", "company": "B", "contactName": "C"})
        assert res.status_code == 201

    def test_client_supplied_id_and_created_at_are_ignored(self, client):
        res = client.post(BASE, json={
            "id": MISSING_ID,
            "createdAt": "1999-01-01T00:00:00Z",
            "name": "A",
            "company": "B",
            "contactName": "C",
            "unknownField": "dropped",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["id"] != MISSING_ID
        assert not data["createdAt"].startswith("1999")
        assert "unknownField" not in data

    def test_create_missing_required_field_400(self, client):
        for missing in ("name", "company", "contactName"):
            body = {"name": "A", "company": "B", "contactName": "C"}
            del body[missing]
            res = client.post(BASE, json=body)
            assert res.status_code == 400
            data = res.json()
            assert data["message"] == "Error creating franchise"
            assert missing in data["error"]
        assert client.get(BASE).json() == []

    def test_create_empty_required_field_400(self, client):
        res = client.post(BASE, json={"name": "", "company": "", "contactName": "C"})
        assert res.status_code == 400
        error = res.json()["error"]
        assert "name" in error
        assert "company" in error
        assert client.get(BASE).json() == []

    def test_create_whitespace_required_field_is_stored_as_is(self, client):
        res = client.post(BASE, json={"name": "  ", "company": "B", "contactName": "C"})
        assert res.status_code == 201
        assert res.json()["name"] == "  "

    def test_create_number_is_stored_as_string(self, client):
        res = client.post(BASE, json={"name": 12, "company": "B", "contactName": "C", "contactPhone": 5550100})
        assert res.status_code == 201
        data = res.json()
        assert data["name"] == "12"
        assert data["contactPhone"] == "5550100"

    def test_create_wrong_type_400(self, client):
        res = client.post(BASE, json={"name": {"first": "A"}, "company": ["B"], "contactName": "C"})
        assert res.status_code == 400
        assert res.json()["message"] == "Invalid request body"
        assert client.get(BASE).json() == []

    def test_create_malformed_json_400(self, client):
        res = client.post(BASE, content=b"{not json", headers={"Content-Type": "application/json"})
        assert res.status_code == 400
        assert res.json()["message"] == "Invalid request body"


# ============== Read ==============

class TestReadFranchise:

    def test_list_empty(self, client):
        res = client.get(BASE)
        assert res.status_code == 200
        assert res.json() == []

    def test_list_newest_first(self, client, create_franchise):
        ids = [create_franchise(name=f"Franchise {i}")["id"] for i in range(5)]
        res = client.get(BASE)
        assert res.status_code == 200
        assert [f["id"] for f in res.json()] == list(reversed(ids))

    def test_list_with_trailing_slash(self, client, create_franchise):
        create_franchise()
        res = client.get(f"{BASE}/")
        assert res.status_code == 200
        assert len(res.json()) == 1

    def test_get_nonexistent_404(self, client):
        res = client.get(f"{BASE}/{MISSING_ID}")
        assert res.status_code == 404
        assert res.json() == {"message": "Franchise not found"}

    def test_get_malformed_id_500(self, client):
        res = client.get(f"{BASE}/not-an-id")
        assert res.status_code == 500
        data = res.json()
        assert data["message"] == "Error fetching franchise"
        assert "not-an-id" in data["error"]


# ============== Update ==============

class TestUpdateFranchise:

    def test_update_changes_only_supplied_fields(self, client, create_franchise):
        created = create_franchise(contactEmail="old@test.com", contactPhone="123")
        res = client.put(f"{BASE}/{created['id']}", json={"contactEmail": "new@test.com"})
        assert res.status_code == 200
        data = res.json()
        assert data["contactEmail"] == "new@test.com"
        assert data["contactPhone"] == "123"
        assert data["name"] == created["name"]
        assert data["id"] == created["id"]
        assert data["createdAt"] == created["createdAt"]

        # Verify update persisted
        res = client.get(f"{BASE}/{created['id']}")
        assert res.json() == data

    def test_update_null_clears_optional_field(self, client, create_franchise):
        created = create_franchise(contactPhone="123")
        res = client.put(f"{BASE}/{created['id']}", json={"contactPhone": None})
        assert res.status_code == 200
        assert res.json()["contactPhone"] is None

    def test_update_empty_body_returns_record_unchanged(self, client, create_franchise):
        created = create_franchise()
        res = client.put(f"{BASE}/{created['id']}", json={})
        assert res.status_code == 200
        assert res.json() == created

    def test_update_cannot_change_id(self, client, create_franchise):
        created = create_franchise()
        res = client.put(f"{BASE}/{created['id']}", json={"id": MISSING_ID, "name": "Renamed"})
        assert res.status_code == 200
        assert res.json()["id"] == created["id"]
        assert res.json()["name"] == "Renamed"

    def test_update_blank_required_field_400(self, client, create_franchise):
        created = create_franchise()
        res = client.put(f"{BASE}/{created['id']}", json={"company": ""})
        assert res.status_code == 400
        data = res.json()
        assert data["message"] == "Error updating franchise"
        assert "company" in data["error"]
        assert client.get(f"{BASE}/{created['id']}").json()["company"] == created["company"]

    def test_update_null_required_field_400(self, client, create_franchise):
        created = create_franchise()
        res = client.put(f"{BASE}/{created['id']}", json={"contactName": None})
        assert res.status_code == 400
        assert "contactName" in res.json()["error"]

    def test_update_nonexistent_404(self, client):
        res = client.put(f"{BASE}/{MISSING_ID}", json={"name": "X"})
        assert res.status_code == 404
        assert res.json() == {"message": "Franchise not found"}

    def test_update_malformed_id_400(self, client):
        res = client.put(f"{BASE}/bogus", json={"name": "X"})
        assert res.status_code == 400
        assert res.json()["message"] == "Error updating franchise"


# ============== Delete ==============

class TestDeleteFranchise:

    def test_delete_then_get_404(self, client, create_franchise):
        created = create_franchise()
        res = client.delete(f"{BASE}/{created['id']}")
        assert res.status_code == 200
        assert res.json() == {"message": "Franchise deleted successfully"}

        res = client.get(f"{BASE}/{created['id']}")
        assert res.status_code == 404

    def test_delete_twice_404(self, client, create_franchise):
        created = create_franchise()
        assert client.delete(f"{BASE}/{created['id']}").status_code == 200
        assert client.delete(f"{BASE}/{created['id']}").status_code == 404

    def test_delete_nonexistent_404(self, client):
        res = client.delete(f"{BASE}/{new_franchise_id()}")
        assert res.status_code == 404

    def test_delete_malformed_id_500(self, client):
        res = client.delete(f"{BASE}/xyz")
        assert res.status_code == 500
        assert res.json()["message"] == "Error deleting franchise"


# ============== Search ==============

class TestSearchFranchises:

    def test_search_is_case_insensitive_substring(self, client, create_franchise):
        created = create_franchise(name="Acme Corp")
        for term in ("acme", "ACME", "me%20Co"):
            res = client.get(f"{BASE}/search/{term}")
            assert res.status_code == 200
            assert [f["id"] for f in res.json()] == [created["id"]], term

        res = client.get(f"{BASE}/search/xyz")
        assert res.status_code == 200
        assert res.json() == []

    def test_search_matches_any_text_field(self, client, create_franchise):
        by_company = create_franchise(company="Globex")
        by_contact = create_franchise(contactName="Hank Globex")
        by_email = create_franchise(contactEmail="ops@globex.test")
        create_franchise(contactPhone="555 0199")
        by_phone = create_franchise(contactPhone="globex-hotline")

        res = client.get(f"{BASE}/search/globex")
        assert res.status_code == 200
        ids = {f["id"] for f in res.json()}
        assert ids == {by_company["id"], by_contact["id"], by_email["id"], by_phone["id"]}

    def test_search_term_is_literal(self, client, create_franchise):
        create_franchise(name="Abc Franchise")
        res = client.get(f"{BASE}/search/a.c")
        assert res.status_code == 200
        assert res.json() == []

    def test_search_empty_term_matches_everything(self, client, create_franchise):
        create_franchise(name="One")
        create_franchise(name="Two")
        res = client.get(f"{BASE}/search/")
        assert res.status_code == 200
        assert len(res.json()) == 2

    def test_search_is_not_mistaken_for_an_id(self, client, create_franchise):
        create_franchise(name="search")
        res = client.get(f"{BASE}/search/search")
        assert res.status_code == 200
        assert len(res.json()) == 1


# ============== Store failures and ambient behaviour ==============

class TestStoreFailures:

    def test_store_unavailable_maps_to_error_responses(self, app, client, create_franchise):
        created = create_franchise()
        app.state.store.close()

        res = client.get(BASE)
        assert res.status_code == 500
        assert res.json()["message"] == "Error fetching franchises"
        assert res.json()["error"] == "Franchise store is not connected"

        assert client.get(f"{BASE}/{created['id']}").status_code == 500
        assert client.get(f"{BASE}/search/x").status_code == 500
        assert client.delete(f"{BASE}/{created['id']}").status_code == 500

        res = client.post(BASE, json={"name": "A", "company": "B", "contactName": "C"})
        assert res.status_code == 400
        assert res.json()["message"] == "Error creating franchise"

        res = client.put(f"{BASE}/{created['id']}", json={"name": "X"})
        assert res.status_code == 400

    def test_health(self, app, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}

        app.state.store.close()
        res = client.get("/health")
        assert res.status_code == 503
        assert res.json() == {"status": "unavailable"}

    def test_cors_allows_any_origin(self, client):
        res = client.get(BASE, headers={"Origin": "http://example.com"})
        assert res.status_code == 200
        assert res.headers["access-control-allow-origin"] == "*"

    def test_cors_preflight(self, client):
        res = client.options(BASE, headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "DELETE",
        })
        assert res.status_code == 200
        assert res.headers["access-control-allow-origin"] == "*"


class TestErrorHandlers:

    def test_unexpected_error_becomes_logged_500(self, app, caplog):
        async def boom(term):
            raise RuntimeError("boom")

        app.state.store.search_franchises = boom
        with TestClient(app, raise_server_exceptions=False) as test_client:
            res = test_client.get(f"{BASE}/search/x")
        assert res.status_code == 500
        assert res.json() == {"message": "Internal server error", "error": "boom"}
        assert "Unhandled error on GET /api/franchises/search/x" in caplog.text
