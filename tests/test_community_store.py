from __future__ import annotations

import sqlite3
from concurrent.futures import ThreadPoolExecutor
from statistics import mean

import pytest

from community_store import CommunityStore


def _row_count(db_path: str, template_id: str) -> int:
    conn = sqlite3.connect(db_path)
    try:
        return conn.execute(
            "SELECT COUNT(*) FROM ratings WHERE template_id = ?", (template_id,)
        ).fetchone()[0]
    finally:
        conn.close()


def test_schema_is_created_idempotently(db_path):
    CommunityStore(db_path)
    store = CommunityStore(db_path)

    assert store.list_aggregates() == []
    assert store.list_downloads() == []


def test_submit_rating_returns_recomputed_aggregate(store):
    store.submit_rating("t1", "a", 5)
    store.submit_rating("t1", "b", 2)
    aggregate = store.submit_rating("t1", "c", 2, "fine")

    assert aggregate.template_id == "t1"
    assert aggregate.average_rating == 3
    assert aggregate.rating_count == 3


def test_resubmission_keeps_one_row_per_user(store, db_path):
    for value in (1, 2, 3, 4):
        aggregate = store.submit_rating("t1", "same-user", value)

    assert _row_count(db_path, "t1") == 1
    assert aggregate.average_rating == 4
    assert aggregate.rating_count == 1


def test_empty_comment_is_stored_as_null(store, db_path):
    store.submit_rating("t1", "a", 3, "")

    conn = sqlite3.connect(db_path)
    comment = conn.execute("SELECT comment FROM ratings").fetchone()[0]
    conn.close()

    assert comment is None
    assert store.get_template_ratings("t1", "a").user_comment is None


def test_recent_ratings_limit_is_configurable(db_path):
    store = CommunityStore(db_path, recent_ratings_limit=3)
    for i in range(5):
        store.submit_rating("t1", f"u{i}", 4, f"note {i}")

    recent = store.get_template_ratings("t1").recent_ratings

    assert [r.comment for r in recent] == ["note 4", "note 3", "note 2"]


def test_concurrent_ratings_keep_aggregate_consistent(store, db_path):
    ratings = {f"user-{i}": 1 + (i * 7) % 5 for i in range(40)}

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(
            pool.map(
                lambda item: store.submit_rating("hot", item[0], item[1]),
                ratings.items(),
            )
        )

    detail = store.get_template_ratings("hot")
    assert detail.rating_count == len(ratings) == _row_count(db_path, "hot")
    assert abs(detail.average_rating - mean(ratings.values())) < 1e-9


def test_concurrent_resubmissions_by_one_user_leave_one_row(store, db_path):
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda value: store.submit_rating("t1", "u", value), [1, 5] * 10))

    detail = store.get_template_ratings("t1", "u")
    assert _row_count(db_path, "t1") == 1
    assert detail.rating_count == 1
    assert detail.average_rating == detail.user_rating


def test_concurrent_increments_are_not_lost(store):
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: store.increment_download("t1"), range(200)))

    assert sorted(results) == list(range(1, 201))
    assert store.list_downloads()[0].download_count == 200


def test_failed_write_rolls_back(store, db_path):
    store.submit_rating("t1", "a", 4)

    # The CHECK constraint rejects the row inside the transaction
    with pytest.raises(sqlite3.IntegrityError):
        store.submit_rating("t1", "b", 9)

    detail = store.get_template_ratings("t1")
    assert detail.rating_count == 1
    assert _row_count(db_path, "t1") == 1


def test_template_detail_reads_from_one_transaction(store, monkeypatch):
    store.submit_rating("t1", "a", 4, "good")
    statements = []
    connect = store._connect

    def traced_connect():
        conn = connect()
        conn.set_trace_callback(statements.append)
        return conn

    monkeypatch.setattr(store, "_connect", traced_connect)
    detail = store.get_template_ratings("t1", "a")

    selects = [i for i, sql in enumerate(statements) if "SELECT" in sql]
    assert len(selects) == 3
    assert statements.index("BEGIN") < selects[0]
    assert statements.index("COMMIT") > selects[-1]
    assert detail.rating_count == len(detail.recent_ratings) == 1
