"""
Tests for crud/jobs.py.
"""

import pytest

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.crud import jobs
from jobly.db.query import run_query


def _listing(job_ids, *idx):
    rows = [
        {"title": "test1", "salary": 100, "equity": "0.1"},
        {"title": "test2", "salary": 200, "equity": "0.2"},
        {"title": "test3", "salary": 300, "equity": "0"},
        {"title": "test4", "salary": None, "equity": None},
    ]
    return [
        {"id": job_ids[i], **rows[i], "companyHandle": "c1", "companyName": "C1"}
        for i in idx
    ]


class TestCreate:

    NEW = {"companyHandle": "c1", "title": "Test", "salary": 100, "equity": "0.1"}

    def test_create(self, db):
        job = jobs.create(db, self.NEW)
        assert isinstance(job.pop("id"), int)
        assert job == self.NEW

    def test_create_then_get(self, db, c1):
        job = jobs.create(db, self.NEW)
        assert jobs.get(db, job["id"]) == {
            "id": job["id"],
            "title": "Test",
            "salary": 100,
            "equity": "0.1",
            "company": c1,
        }

    def test_unknown_company(self, db):
        with pytest.raises(BadRequestError):
            jobs.create(db, {**self.NEW, "companyHandle": "nope"})


class TestFindAll:

    def test_no_filter(self, db, job_ids):
        assert jobs.find_all(db) == _listing(job_ids, 0, 1, 2, 3)

    def test_title(self, db, job_ids):
        assert jobs.find_all(db, {"title": "EST1"}) == _listing(job_ids, 0)

    def test_min_salary(self, db, job_ids):
        assert jobs.find_all(db, {"minSalary": 200}) == _listing(job_ids, 1, 2)

    def test_has_equity(self, db, job_ids):
        assert jobs.find_all(db, {"hasEquity": True}) == _listing(job_ids, 0, 1)

    def test_has_equity_false_is_ignored(self, db, job_ids):
        assert jobs.find_all(db, {"hasEquity": False}) == _listing(job_ids, 0, 1, 2, 3)

    def test_salary_and_equity(self, db, job_ids):
        assert jobs.find_all(db, {"minSalary": 200, "hasEquity": True}) == _listing(job_ids, 1)

    def test_all_filters(self, db, job_ids):
        filters = {"minSalary": 100, "hasEquity": True, "title": "2"}
        assert jobs.find_all(db, filters) == _listing(job_ids, 1)

    def test_empty_result(self, db):
        assert jobs.find_all(db, {"title": "notgonnafindme"}) == []


class TestGet:

    def test_get(self, db, c1, job_ids):
        job = jobs.get(db, job_ids[0])
        assert job == {
            "id": job_ids[0],
            "title": "test1",
            "salary": 100,
            "equity": "0.1",
            "company": c1,
        }
        assert "companyHandle" not in job

    def test_not_found(self, db):
        with pytest.raises(NotFoundError):
            jobs.get(db, 0)


class TestUpdate:

    DATA = {"title": "Updated", "salary": 550, "equity": "0.5"}

    def test_update(self, db, job_ids):
        job = jobs.update(db, job_ids[0], self.DATA)
        assert job == {"id": job_ids[0], "companyHandle": "c1", **self.DATA}

    def test_partial(self, db, job_ids):
        job = jobs.update(db, job_ids[3], {"salary": 5})
        assert job["salary"] == 5
        assert job["title"] == "test4"

    def test_not_found(self, db):
        with pytest.raises(NotFoundError):
            jobs.update(db, 0, self.DATA)

    def test_empty_data(self, db, job_ids):
        with pytest.raises(BadRequestError):
            jobs.update(db, job_ids[0], {})

    @pytest.mark.parametrize("field", ["id", "companyHandle"])
    def test_immutable(self, db, job_ids, field):
        with pytest.raises(BadRequestError):
            jobs.update(db, job_ids[0], {field: "c2"})
        assert jobs.find_all(db, {"title": "test1"})[0]["companyHandle"] == "c1"

    def test_null_title(self, db, job_ids):
        with pytest.raises(BadRequestError):
            jobs.update(db, job_ids[0], {"title": None})
        assert jobs.get(db, job_ids[0])["title"] == "test1"

    def test_null_salary_and_equity_allowed(self, db, job_ids):
        job = jobs.update(db, job_ids[0], {"salary": None, "equity": None})
        assert job["salary"] is None
        assert job["equity"] is None

    def test_negative_salary_from_storage_check(self, db, job_ids):
        with pytest.raises(BadRequestError):
            jobs.update(db, job_ids[0], {"salary": -1})
        assert jobs.get(db, job_ids[0])["salary"] == 100


class TestRemove:

    def test_remove(self, db, job_ids):
        jobs.remove(db, job_ids[0])
        assert run_query(db, "SELECT id FROM jobs WHERE id = $1", [job_ids[0]]) == []

    def test_not_found(self, db):
        with pytest.raises(NotFoundError):
            jobs.remove(db, 0)
