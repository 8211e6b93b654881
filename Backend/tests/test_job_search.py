"""Unit tests for the stateless job query functions."""

from datetime import datetime, timedelta

import pytest

from referrals.errors import ValidationError
from referrals.models import Company, Job
from referrals.services.job_search import (
    JobFilters,
    SearchFilters,
    filter_jobs,
    paginate,
    parse_csv,
    parse_remote,
    search_jobs,
    sort_jobs,
    sort_search_results,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)


def _job(job_id: str, **overrides) -> Job:
    fields = dict(
        id=job_id,
        title=f"Job {job_id}",
        description="A role on our team.",
        requirements="Some experience.",
        location="Berlin",
        job_type="full-time",
        experience_level="mid",
        salary_min=100000,
        salary_max=150000,
        company_id="c1",
        is_remote=False,
        skills=[],
        created_at=NOW,
    )
    fields.update(overrides)
    return Job(**fields)


@pytest.fixture()
def companies():
    return [Company(id="c1", name="Globex"), Company(id="c2", name="Initech")]


@pytest.fixture()
def jobs():
    return [
        _job("1", title="Python Engineer", skills=["Python", "Django"], salary_min=90000, salary_max=140000),
        _job("2", title="Frontend Developer", location="Remote", is_remote=True, skills=["React", "CSS"],
             company_id="c2", created_at=NOW - timedelta(days=10)),
        _job("3", title="Data Engineer", description="Pipelines in Python.", experience_level="senior",
             salary_min=130000, salary_max=190000, created_at=NOW - timedelta(days=3)),
        _job("4", title="Support Specialist", job_type="part-time", salary_min=40000, salary_max=60000,
             company_id="c2", skills=["Zendesk"]),
    ]


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def test_parse_csv_trims_and_drops_empty_parts():
    assert parse_csv(" a, b,,c ,") == ["a", "b", "c"]
    assert parse_csv(None) == []
    assert parse_csv("") == []


@pytest.mark.parametrize("raw,expected", [("true", True), ("false", False), ("yes", None), ("TRUE", None), (None, None)])
def test_parse_remote_only_accepts_literal_booleans(raw, expected):
    assert parse_remote(raw) is expected


# ---------------------------------------------------------------------------
# filter_jobs
# ---------------------------------------------------------------------------


class TestFilterJobs:
    def test_no_filters_returns_everything(self, jobs, companies):
        assert [j.id for j in filter_jobs(jobs, JobFilters(), companies)] == ["1", "2", "3", "4"]

    def test_title_is_case_insensitive_substring(self, jobs, companies):
        result = filter_jobs(jobs, JobFilters(title="ENGINEER"), companies)
        assert [j.id for j in result] == ["1", "3"]

    def test_company_matches_on_company_name(self, jobs, companies):
        result = filter_jobs(jobs, JobFilters(company="init"), companies)
        assert [j.id for j in result] == ["2", "4"]

    def test_unknown_company_name_matches_nothing(self, jobs, companies):
        assert filter_jobs(jobs, JobFilters(company="Umbrella"), companies) == []

    def test_remote_true_and_false(self, jobs, companies):
        assert [j.id for j in filter_jobs(jobs, JobFilters(remote="true"), companies)] == ["2"]
        assert [j.id for j in filter_jobs(jobs, JobFilters(remote="false"), companies)] == ["1", "3", "4"]

    def test_remote_with_other_value_is_ignored(self, jobs, companies):
        assert len(filter_jobs(jobs, JobFilters(remote="maybe"), companies)) == 4

    def test_exact_match_on_type_and_level(self, jobs, companies):
        assert [j.id for j in filter_jobs(jobs, JobFilters(job_type="part-time"), companies)] == ["4"]
        assert [j.id for j in filter_jobs(jobs, JobFilters(experience_level="senior"), companies)] == ["3"]
        # exact, not substring
        assert filter_jobs(jobs, JobFilters(job_type="part"), companies) == []

    def test_salary_bounds_require_the_range_to_fit_inside(self, jobs, companies):
        assert [j.id for j in filter_jobs(jobs, JobFilters(salary_min=100000), companies)] == ["2", "3"]
        assert [j.id for j in filter_jobs(jobs, JobFilters(salary_max=150000), companies)] == ["1", "2", "4"]
        # Job 1 (90k-140k) overlaps 100k-150k but does not fit inside it
        assert [j.id for j in filter_jobs(jobs, JobFilters(salary_min=100000, salary_max=150000), companies)] == ["2"]

    def test_skills_match_any_case_insensitively(self, jobs, companies):
        result = filter_jobs(jobs, JobFilters(skills="react, zendesk"), companies)
        assert [j.id for j in result] == ["2", "4"]

    def test_skills_do_not_match_substrings(self, jobs, companies):
        assert filter_jobs(jobs, JobFilters(skills="Py"), companies) == []

    def test_filters_are_and_combined(self, jobs, companies):
        result = filter_jobs(jobs, JobFilters(title="engineer", location="berlin", skills="python"), companies)
        assert [j.id for j in result] == ["1"]

    def test_every_result_satisfies_every_filter(self, jobs, companies):
        filters = JobFilters(location="e", salary_max=200000, remote="false")
        for job in filter_jobs(jobs, filters, companies):
            assert "e" in job.location.lower()
            assert job.salary_max <= 200000
            assert job.is_remote is False


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


class TestSortJobs:
    def test_default_is_id_descending(self, jobs):
        assert [j.id for j in sort_jobs(jobs)] == ["4", "3", "2", "1"]

    def test_numeric_field_ascending(self, jobs):
        assert [j.id for j in sort_jobs(jobs, "salary_min", "ASC")] == ["4", "1", "2", "3"]

    def test_direction_is_case_insensitive(self, jobs):
        assert [j.id for j in sort_jobs(jobs, "id", "asc")] == ["1", "2", "3", "4"]

    def test_unknown_field_is_rejected(self, jobs):
        with pytest.raises(ValidationError):
            sort_jobs(jobs, "password_hash")

    def test_unknown_direction_is_rejected(self, jobs):
        with pytest.raises(ValidationError):
            sort_jobs(jobs, "id", "sideways")

    def test_string_ids_sort_lexicographically(self):
        jobs = [_job("9"), _job("10"), _job("2")]
        assert [j.id for j in sort_jobs(jobs, "id", "ASC")] == ["10", "2", "9"]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class TestSearchJobs:
    def test_query_matches_title_description_or_requirements(self, jobs):
        result = search_jobs(jobs, SearchFilters(query="python"), now=NOW)
        assert [j.id for j in result] == ["1", "3"]

    def test_csv_filters_match_any_listed_value(self, jobs):
        assert [j.id for j in search_jobs(jobs, SearchFilters(company_ids="c2"), now=NOW)] == ["2", "4"]
        result = search_jobs(jobs, SearchFilters(job_types="part-time,contract"), now=NOW)
        assert [j.id for j in result] == ["4"]
        result = search_jobs(jobs, SearchFilters(experience_levels="senior, entry"), now=NOW)
        assert [j.id for j in result] == ["3"]

    def test_posted_within_days(self, jobs):
        result = search_jobs(jobs, SearchFilters(posted_within=5), now=NOW)
        assert [j.id for j in result] == ["1", "3", "4"]

    def test_posted_within_zero_keeps_only_jobs_posted_now(self, jobs):
        result = search_jobs(jobs, SearchFilters(posted_within=0), now=NOW)
        assert [j.id for j in result] == ["1", "4"]

    def test_relevance_puts_title_matches_first(self, jobs):
        # Job 3 only mentions Python in its description
        ordered = sort_search_results([jobs[2], jobs[0]], "relevance", "DESC", "python")
        assert [j.id for j in ordered] == ["1", "3"]

    def test_relevance_keeps_catalog_order_within_a_bucket(self, jobs):
        ordered = sort_search_results(jobs, "relevance", "DESC", "engineer")
        assert [j.id for j in ordered] == ["1", "3", "2", "4"]

    def test_relevance_without_query_keeps_order(self, jobs):
        assert [j.id for j in sort_search_results(jobs, "relevance", "DESC", None)] == ["1", "2", "3", "4"]

    def test_date_and_salary_sorts(self, jobs):
        assert [j.id for j in sort_search_results(jobs, "date", "ASC")][:2] == ["2", "3"]
        assert [j.id for j in sort_search_results(jobs, "salary", "DESC")] == ["3", "2", "1", "4"]


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


class TestPaginate:
    def test_slices_one_based_pages(self):
        page = paginate(list(range(7)), page=2, limit=3)
        assert page.items == [3, 4, 5]
        assert page.total == 7

    def test_page_past_the_end_is_empty_but_keeps_total(self):
        page = paginate(list(range(7)), page=5, limit=3)
        assert page.items == []
        assert page.total == 7

    def test_pages_cover_every_item_exactly_once(self):
        items = list(range(23))
        collected = []
        for n in range(1, 5):
            collected.extend(paginate(items, page=n, limit=6).items)
        assert collected == items

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
    def test_rejects_non_positive_page_or_limit(self, page, limit):
        with pytest.raises(ValidationError):
            paginate([1, 2, 3], page=page, limit=limit)
