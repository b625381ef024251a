from fastapi.testclient import TestClient

SCENARIO_A = "12345678901 12345678902 99999999999"
USER = {"X-User-Id": "1"}


class TestRoot:
    """Test informational endpoints"""

    def test_root(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert "version" in response.json()

    def test_health(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["storage"] == "ok"


class TestAuthAPI:
    """Test login and heartbeat endpoints"""

    def test_login(self, client: TestClient):
        """Test logging in with a bare number"""
        response = client.post("/api/v1/auth/login", json={"user_id": "5"})
        assert response.status_code == 200

        data = response.json()
        assert data["user_id"] == "MINDA005"
        assert data["is_admin"] is False
        assert data["heartbeat_interval_seconds"] == 30

    def test_login_invalid_user_id(self, client: TestClient):
        response = client.post("/api/v1/auth/login", json={"user_id": "not-an-id"})
        assert response.status_code == 422
        assert response.json()["code"] == "invalid_user_id"

    def test_admin_login_wrong_password(self, client: TestClient, admin_password):
        response = client.post("/api/v1/auth/login", json={"user_id": "77", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["code"] == "authentication_failed"

    def test_admin_login(self, client: TestClient, admin_password):
        response = client.post("/api/v1/auth/login", json={"user_id": "MINDA077", "password": admin_password})
        assert response.status_code == 200
        assert response.json()["is_admin"] is True

    def test_heartbeat(self, client: TestClient):
        client.post("/api/v1/auth/login", json={"user_id": "1"})

        response = client.post("/api/v1/auth/heartbeat", headers=USER)
        assert response.status_code == 204

    def test_heartbeat_requires_user_header(self, client: TestClient):
        response = client.post("/api/v1/auth/heartbeat")
        assert response.status_code == 422


class TestExecuteAPI:
    """Test the execute endpoint"""

    def test_execute(self, client: TestClient):
        """Test saving a sequential pair"""
        response = client.post("/api/v1/ids/execute", json={"text": SCENARIO_A}, headers=USER)
        assert response.status_code == 200

        data = response.json()
        assert data["new_count"] == 2
        assert data["duplicate_count"] == 0
        assert data["new_ids"] == ["12345678901", "12345678902"]
        assert data["total_found"] == 2

    def test_execute_twice(self, client: TestClient):
        client.post("/api/v1/ids/execute", json={"text": SCENARIO_A}, headers=USER)

        response = client.post("/api/v1/ids/execute", json={"text": SCENARIO_A}, headers=USER)

        data = response.json()
        assert data["new_count"] == 0
        assert data["duplicate_count"] == 2

    def test_empty_input(self, client: TestClient):
        response = client.post("/api/v1/ids/execute", json={"text": "  "}, headers=USER)
        assert response.status_code == 400
        assert response.json()["code"] == "empty_input"

    def test_no_identifiers(self, client: TestClient):
        response = client.post("/api/v1/ids/execute", json={"text": "1234567890123"}, headers=USER)
        assert response.status_code == 422
        assert response.json()["code"] == "no_identifiers_found"

    def test_no_sequential(self, client: TestClient):
        response = client.post("/api/v1/ids/execute", json={"text": "99999999999"}, headers=USER)
        assert response.status_code == 422
        assert response.json()["code"] == "no_sequential_identifiers"


class TestRecordsAPI:
    """Test record listing, stats and report"""

    def _seed(self, client: TestClient):
        client.post("/api/v1/ids/execute", json={"text": SCENARIO_A}, headers=USER)

    def test_list_records(self, client: TestClient):
        self._seed(client)

        response = client.get("/api/v1/records/", headers=USER)
        assert response.status_code == 200

        data = response.json()
        assert {r["id"] for r in data} == {"12345678901", "12345678902"}
        assert all(r["date"] == "2026-03-14" and r["hour"] == 9 for r in data)

    def test_filter_fifteen_digit(self, client: TestClient):
        self._seed(client)

        response = client.get("/api/v1/records/", params={"digit_length": "15"}, headers=USER)
        assert response.status_code == 200
        assert response.json() == []

    def test_filter_search_and_date(self, client: TestClient):
        self._seed(client)

        response = client.get(
            "/api/v1/records/",
            params={"search": "8902", "date": "2026-03-14"},
            headers=USER,
        )
        assert [r["id"] for r in response.json()] == ["12345678902"]

    def test_invalid_digit_length(self, client: TestClient):
        response = client.get("/api/v1/records/", params={"digit_length": "12"}, headers=USER)
        assert response.status_code == 422

    def test_records_are_per_user(self, client: TestClient):
        self._seed(client)

        response = client.get("/api/v1/records/", headers={"X-User-Id": "2"})
        assert response.json() == []

    def test_stats(self, client: TestClient):
        self._seed(client)

        response = client.get("/api/v1/records/stats", headers=USER)
        assert response.json() == {"total": 2, "today": 2, "searches": 1}

    def test_report(self, client: TestClient):
        self._seed(client)

        data = client.get("/api/v1/records/report", headers=USER).json()
        assert data["total"] == 2
        assert data["eleven_digit_count"] == 2
        assert data["fifteen_digit_count"] == 0
        assert data["unique_dates"] == 1


class TestAdminAPI:
    """Test admin-only endpoints"""

    ADMIN = "MINDA077"

    def test_requires_admin(self, client: TestClient, admin_password):
        response = client.get("/api/v1/admin/analytics", headers={"X-User-Id": "1", "X-Admin-Password": admin_password})
        assert response.status_code == 403

    def test_requires_password(self, client: TestClient, admin_password):
        response = client.get("/api/v1/admin/users", headers={"X-User-Id": self.ADMIN, "X-Admin-Password": "nope"})
        assert response.status_code == 403

    def test_global_analytics(self, client: TestClient, admin_password):
        client.post("/api/v1/auth/login", json={"user_id": "1"})
        client.post("/api/v1/ids/execute", json={"text": SCENARIO_A}, headers=USER)

        response = client.get(
            "/api/v1/admin/analytics",
            headers={"X-User-Id": self.ADMIN, "X-Admin-Password": admin_password},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["total_ids"] == 2
        assert data["total_searches"] == 1
        assert data["hourly"][9] == 2
        assert data["daily"]["2026-03-14"] == {"logins": 1, "searches": 1, "ids": 2}

    def test_users(self, client: TestClient, admin_password):
        client.post("/api/v1/auth/login", json={"user_id": "1"})
        client.post("/api/v1/ids/execute", json={"text": SCENARIO_A}, headers=USER)

        response = client.get(
            "/api/v1/admin/users",
            headers={"X-User-Id": self.ADMIN, "X-Admin-Password": admin_password},
        )

        [user] = response.json()
        assert user["id"] == "MINDA001"
        assert user["total_ids"] == 2
        assert user["today_ids"] == 2
        assert user["searches"] == 1

    def test_overview(self, client: TestClient, admin_password):
        client.post("/api/v1/auth/login", json={"user_id": "1"})
        client.post("/api/v1/ids/execute", json={"text": SCENARIO_A}, headers=USER)

        response = client.get(
            "/api/v1/admin/overview",
            headers={"X-User-Id": self.ADMIN, "X-Admin-Password": admin_password},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["total_users"] == 1
        assert data["logins_today"] == 1
        assert data["ids_today"] == 2
        assert data["searches_today"] == 1
        assert data["peak_hour"] == 9
        assert data["peak_hour_label"] == "09:00"

    def test_overview_requires_admin(self, client: TestClient, admin_password):
        response = client.get("/api/v1/admin/overview", headers=USER)
        assert response.status_code == 403
