class TestProfiles:
    def _register(self, client, email="alice@example.com", passphrase="test-passphrase-123"):
        return client.post("/api/v1/profiles", json={
            "email": email,
            "full_name": "Alice Poster",
            "passphrase": passphrase,
        })

    def _sign_in(self, client, email="alice@example.com", passphrase="test-passphrase-123"):
        return client.post("/api/v1/sessions", json={"email": email, "passphrase": passphrase})

    def test_register(self, client):
        r = self._register(client)
        assert r.status_code == 201
        data = r.json()
        assert data["email"] == "alice@example.com"
        assert data["rating"] is None
        assert data["total_reviews"] == 0
        assert "passphrase_hash" not in data

    def test_register_duplicate_email(self, client):
        self._register(client)
        r = self._register(client, email="ALICE@example.com")
        assert r.status_code == 409
        assert r.json()["error"] == "AccountExists"

    def test_register_short_passphrase(self, client):
        r = self._register(client, passphrase="short")
        assert r.status_code == 400

    def test_sign_in_and_me(self, client):
        profile_id = self._register(client).json()["id"]
        r = self._sign_in(client)
        assert r.status_code == 200
        token = r.json()["token"]
        assert r.json()["profile_id"] == profile_id

        r = client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 200
        assert r.json()["id"] == profile_id

    def test_wrong_passphrase(self, client):
        self._register(client)
        r = self._sign_in(client, passphrase="wrong-passphrase")
        assert r.status_code == 401
        assert r.json()["error"] == "InvalidCredentials"

    def test_me_requires_session(self, client):
        r = client.get("/api/v1/profiles/me")
        assert r.status_code == 401

    def test_sign_out(self, client):
        self._register(client)
        token = self._sign_in(client).json()["token"]
        h = {"Authorization": f"Bearer {token}"}

        assert client.delete("/api/v1/sessions", headers=h).status_code == 200
        assert client.get("/api/v1/profiles/me", headers=h).status_code == 401

    def test_expired_session(self, client, restore_settings):
        restore_settings.session_ttl_seconds = -1
        self._register(client)
        token = self._sign_in(client).json()["token"]

        r = client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
