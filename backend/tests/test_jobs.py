class TestJobsAPI:
    def _sign_up(self, client, name="Alice Poster"):
        email = f"{name.lower().replace(' ', '.')}@example.com"
        client.post("/api/v1/profiles", json={
            "email": email,
            "full_name": name,
            "passphrase": "test-passphrase-123",
        })
        r = client.post("/api/v1/sessions", json={"email": email, "passphrase": "test-passphrase-123"})
        return {"Authorization": f"Bearer {r.json()['token']}"}

    def _job(self, **overrides):
        job = {
            "title": "Move a sofa",
            "description": "Third floor, no lift",
            "category": "moving",
            "location": "Harbour Street",
            "budget": 60,
        }
        job.update(overrides)
        return job

    def test_create_job(self, client):
        h = self._sign_up(client)
        r = client.post("/api/v1/jobs", json=self._job(duration="1 hour"), headers=h)
        assert r.status_code == 201
        data = r.json()
        assert data["title"] == "Move a sofa"
        assert data["status"] == "active"
        assert data["budget"] == 60.0
        assert data["duration"] == "1 hour"
        assert data["poster"]["full_name"] == "Alice Poster"
        assert data["poster"]["rating"] is None
        assert data["poster"]["rating_display"] == "unrated"

    def test_create_requires_auth(self, client):
        r = client.post("/api/v1/jobs", json=self._job())
        assert r.status_code == 401
        assert r.json()["error"] == "Unauthenticated"

        r = client.get("/api/v1/jobs")
        assert r.json()["total"] == 0

    def test_expired_or_unknown_token_is_unauthenticated(self, client):
        r = client.post("/api/v1/jobs", json=self._job(), headers={"Authorization": "Bearer nope"})
        assert r.status_code == 401

    def test_invalid_fields(self, client):
        h = self._sign_up(client)
        r = client.post("/api/v1/jobs", json=self._job(category="plumbing"), headers=h)
        assert r.status_code == 400
        assert r.json()["error"] == "InvalidCategory"

        r = client.post("/api/v1/jobs", json=self._job(budget="-3"), headers=h)
        assert r.json()["error"] == "InvalidBudget"

        for budget in ("1e400", "1e-400"):
            r = client.post("/api/v1/jobs", json=self._job(budget=budget), headers=h)
            assert r.status_code == 400
            assert r.json()["error"] == "InvalidBudget"
        assert client.get("/api/v1/jobs").json()["total"] == 0

        r = client.post("/api/v1/jobs", json=self._job(title=""), headers=h)
        assert r.json()["error"] == "InvalidInput"

    def test_list_jobs(self, client):
        h = self._sign_up(client)
        client.post("/api/v1/jobs", json=self._job(title="Job 1"), headers=h)
        client.post("/api/v1/jobs", json=self._job(title="Job 2"), headers=h)

        r = client.get("/api/v1/jobs")
        assert r.status_code == 200
        data = r.json()
        assert data["total"] == 2
        assert {j["title"] for j in data["jobs"]} == {"Job 1", "Job 2"}

    def test_filter_and_search(self, client):
        h = self._sign_up(client)
        client.post("/api/v1/jobs", json=self._job(title="Mow lawn", category="gardening"), headers=h)
        client.post("/api/v1/jobs", json=self._job(title="Lawn party help", category="event_help"), headers=h)

        r = client.get("/api/v1/jobs?category=gardening")
        assert [j["title"] for j in r.json()["jobs"]] == ["Mow lawn"]

        r = client.get("/api/v1/jobs?category=not-a-category")
        assert r.status_code == 200
        assert r.json()["total"] == 2

        r = client.get("/api/v1/jobs?search=LAWN&category=event_help")
        assert [j["title"] for j in r.json()["jobs"]] == ["Lawn party help"]

    def test_sort_by_budget(self, client):
        h = self._sign_up(client)
        for budget in (30, 90, 60):
            client.post("/api/v1/jobs", json=self._job(budget=budget), headers=h)

        r = client.get("/api/v1/jobs?sort=budget_high")
        assert [j["budget"] for j in r.json()["jobs"]] == [90.0, 60.0, 30.0]

        r = client.get("/api/v1/jobs?sort=budget_low&limit=2")
        assert [j["budget"] for j in r.json()["jobs"]] == [30.0, 60.0]

    def test_recent_jobs(self, client, restore_settings):
        restore_settings.recent_jobs_limit = 1
        h = self._sign_up(client)
        client.post("/api/v1/jobs", json=self._job(title="Job 1"), headers=h)
        client.post("/api/v1/jobs", json=self._job(title="Job 2"), headers=h)

        r = client.get("/api/v1/jobs/recent")
        assert r.status_code == 200
        assert r.json()["total"] == 1

    def test_get_job(self, client):
        h = self._sign_up(client)
        job_id = client.post("/api/v1/jobs", json=self._job(), headers=h).json()["id"]

        r = client.get(f"/api/v1/jobs/{job_id}")
        assert r.status_code == 200
        assert r.json()["title"] == "Move a sofa"
        assert r.json()["poster"]["total_reviews"] == 0
        assert r.json()["viewer"] is None

    def test_get_job_viewer_state(self, client):
        poster = self._sign_up(client, "Alice Poster")
        worker = self._sign_up(client, "Bob Worker")
        job_id = client.post("/api/v1/jobs", json=self._job(), headers=poster).json()["id"]

        viewer = client.get(f"/api/v1/jobs/{job_id}", headers=poster).json()["viewer"]
        assert viewer["is_poster"] is True
        assert viewer["can_apply"] is False

        viewer = client.get(f"/api/v1/jobs/{job_id}", headers=worker).json()["viewer"]
        assert viewer["can_apply"] is True
        assert viewer["application_status"] is None

        client.post(f"/api/v1/jobs/{job_id}/applications", json={"message": "Happy to"}, headers=worker)
        viewer = client.get(f"/api/v1/jobs/{job_id}", headers=worker).json()["viewer"]
        assert viewer["can_apply"] is False
        assert viewer["application_status"] == "pending"

    def test_get_missing_job(self, client):
        r = client.get("/api/v1/jobs/does-not-exist")
        assert r.status_code == 404
        assert r.json()["error"] == "NotFound"

    def test_close_job(self, client):
        poster = self._sign_up(client, "Alice Poster")
        other = self._sign_up(client, "Bob Worker")
        job_id = client.post("/api/v1/jobs", json=self._job(), headers=poster).json()["id"]

        r = client.post(f"/api/v1/jobs/{job_id}/close", headers=other)
        assert r.status_code == 403

        r = client.post(f"/api/v1/jobs/{job_id}/close", headers=poster)
        assert r.status_code == 200
        assert r.json()["status"] == "closed"

        r = client.post(f"/api/v1/jobs/{job_id}/close", headers=poster)
        assert r.status_code == 409
        assert r.json()["error"] == "JobNotOpen"

        # Closed jobs drop out of browsing but stay reachable by id
        assert client.get("/api/v1/jobs").json()["total"] == 0
        assert client.get(f"/api/v1/jobs/{job_id}").json()["status"] == "closed"
