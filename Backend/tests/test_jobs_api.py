"""Job catalog endpoints against the seeded catalog (companies 1-3, jobs 1-5)."""

import pytest


def _ids(resp):
    return [job["id"] for job in resp.json()["data"]["jobs"]]


# ---------------------------------------------------------------------------
# GET /api/jobs
# ---------------------------------------------------------------------------


class TestListJobs:
    def test_defaults(self, client):
        resp = client.get("/api/jobs")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "success"
        assert body["results"] == 5
        assert body["pagination"] == {"total": 5, "page": 1, "limit": 10, "total_pages": 1}
        # default sort is id DESC
        assert _ids(resp) == ["5", "4", "3", "2", "1"]

    def test_jobs_carry_company_and_saved_flag(self, client):
        job = client.get("/api/jobs").json()["data"]["jobs"][0]
        assert job["company"]["id"] == job["company_id"]
        assert job["isSaved"] is False
        assert "is_saved" not in job

    def test_remote_react_jobs(self, client):
        resp = client.get("/api/jobs", params={"remote": "true", "skills": "react"})
        assert resp.status_code == 200
        jobs = resp.json()["data"]["jobs"]
        assert [j["id"] for j in jobs] == ["3"]
        assert jobs[0]["title"] == "Frontend Developer"
        assert jobs[0]["company"]["name"] == "Amazon"
        assert jobs[0]["isSaved"] is False

    def test_title_and_location_are_and_combined(self, client):
        resp = client.get("/api/jobs", params={"title": "developer", "location": "remote"})
        assert sorted(_ids(resp)) == ["3", "4"]
        resp = client.get("/api/jobs", params={"title": "engineer", "location": "remote"})
        assert _ids(resp) == []

    def test_company_name_filter(self, client):
        assert _ids(client.get("/api/jobs", params={"company": "amazon"})) == ["4", "3"]

    def test_type_filter_uses_type_parameter(self, client):
        resp = client.get("/api/jobs", params={"type": "part-time"})
        body = resp.json()
        assert body["results"] == 0
        assert body["pagination"]["total"] == 0
        assert body["pagination"]["total_pages"] == 0
        assert len(_ids(client.get("/api/jobs", params={"type": "full-time"}))) == 5

    def test_salary_range_must_fit(self, client):
        resp = client.get("/api/jobs", params={"salary_min": 110000, "salary_max": 170000})
        assert _ids(resp) == ["4"]

    def test_sort_by_salary_ascending(self, client):
        resp = client.get("/api/jobs", params={"sort_by": "salary_max", "sort_dir": "ASC"})
        assert _ids(resp) == ["3", "4", "1", "2", "5"]

    def test_unknown_sort_field_is_rejected(self, client):
        resp = client.get("/api/jobs", params={"sort_by": "bogus"})
        assert resp.status_code == 400
        assert resp.json()["status"] == "fail"

    def test_unknown_sort_direction_is_rejected(self, client):
        assert client.get("/api/jobs", params={"sort_dir": "UP"}).status_code == 400

    def test_pages_partition_the_result(self, client):
        seen = []
        for page in (1, 2, 3):
            body = client.get("/api/jobs", params={"limit": 2, "page": page}).json()
            assert body["pagination"]["total_pages"] == 3
            assert body["pagination"]["total"] == 5
            seen.extend(j["id"] for j in body["data"]["jobs"])
        assert seen == ["5", "4", "3", "2", "1"]

        past_end = client.get("/api/jobs", params={"limit": 2, "page": 4}).json()
        assert past_end["data"]["jobs"] == []
        assert past_end["pagination"]["total"] == 5

    @pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"page": 0}, {"salary_min": "lots"}])
    def test_bad_paging_or_numbers_are_rejected(self, client, params):
        resp = client.get("/api/jobs", params=params)
        assert resp.status_code == 400
        assert resp.json()["status"] == "fail"

    def test_invalid_token_is_treated_as_anonymous(self, client):
        resp = client.get("/api/jobs", headers={"Authorization": "Bearer not-a-token"})
        assert resp.status_code == 200
        assert resp.json()["results"] == 5


# ---------------------------------------------------------------------------
# GET /api/jobs/search, /trending, /{id}
# ---------------------------------------------------------------------------


class TestSearchJobs:
    def test_relevance_ranks_title_matches_first(self, client):
        # Every requirement mentions "Computer Science"; only job 5's title matches
        resp = client.get("/api/jobs/search", params={"query": "scien"})
        assert _ids(resp) == ["5", "1", "2", "3", "4"]

    def test_no_query_returns_catalog_order(self, client):
        assert _ids(client.get("/api/jobs/search")) == ["1", "2", "3", "4", "5"]

    def test_sort_by_salary(self, client):
        resp = client.get("/api/jobs/search", params={"sort_by": "salary", "sort_dir": "ASC"})
        assert _ids(resp) == ["3", "4", "1", "2", "5"]

    def test_sort_by_date_newest_first(self, client):
        resp = client.get("/api/jobs/search", params={"sort_by": "date"})
        assert _ids(resp) == ["5", "4", "3", "2", "1"]

    def test_company_and_level_lists(self, client):
        assert sorted(_ids(client.get("/api/jobs/search", params={"company_ids": "1,2"}))) == ["1", "2", "5"]
        assert sorted(_ids(client.get("/api/jobs/search", params={"experience_levels": "senior"}))) == ["2", "5"]

    def test_posted_within(self, client):
        ids = _ids(client.get("/api/jobs/search", params={"posted_within": 2}))
        assert "4" in ids and "5" in ids
        assert "1" not in ids and "2" not in ids

    def test_search_is_paginated(self, client):
        body = client.get("/api/jobs/search", params={"limit": 2, "page": 3}).json()
        assert [j["id"] for j in body["data"]["jobs"]] == ["5"]
        assert body["pagination"]["total_pages"] == 3


def test_trending_returns_first_three_jobs(client):
    resp = client.get("/api/jobs/trending")
    assert resp.status_code == 200
    assert _ids(resp) == ["1", "2", "3"]
    assert resp.json()["results"] == 3


def test_get_job_by_id(client):
    resp = client.get("/api/jobs/3")
    assert resp.status_code == 200
    job = resp.json()["data"]["job"]
    assert job["title"] == "Frontend Developer"
    assert job["company"]["name"] == "Amazon"
    assert job["isSaved"] is False


def test_get_missing_job_is_404(client):
    resp = client.get("/api/jobs/99")
    assert resp.status_code == 404
    assert resp.json() == {"status": "fail", "message": "Job not found"}


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------


def test_list_companies(client):
    body = client.get("/api/companies").json()
    assert body["results"] == 3
    assert [c["name"] for c in body["data"]["companies"]] == ["Google", "Microsoft", "Amazon"]
    assert body["pagination"]["total"] == 3


def test_company_detail_lists_its_jobs(client):
    resp = client.get("/api/companies/3")
    assert resp.status_code == 200
    company = resp.json()["data"]["company"]
    assert company["name"] == "Amazon"
    assert sorted(j["id"] for j in company["jobs"]) == ["3", "4"]
    assert all(j["isSaved"] is False for j in company["jobs"])


def test_missing_company_is_404(client):
    assert client.get("/api/companies/42").status_code == 404


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["status"] == "fail"


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
