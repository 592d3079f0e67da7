import sqlite3
from dataclasses import dataclass

import pytest

from dokit.columns import EntityWithTotal, entity_with_total_mapper, row_mapper
from dokit.db import (
    Finder,
    batch,
    exec_with_batch,
    find_first,
    find_func_helper,
    find_list,
    find_with_batch,
    handle_result,
    wrap_tx,
    wrap_tx_find_all,
)


@dataclass
class User:
    id: int
    name: str


@dataclass
class FakeResult:
    lastrowid: int
    rowcount: int


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.execute("create table user (id integer primary key, name text)")
    connection.executemany(
        "insert into user (id, name) values (?, ?)",
        [(1, "jd"), (2, "jc"), (3, "ja"), (4, "jb"), (5, "je")],
    )
    connection.commit()
    yield connection
    connection.close()


def _count(conn):
    return conn.execute("select count(*) from user").fetchone()[0]


@pytest.mark.parametrize(
    "result, want_id, want_n",
    [
        (FakeResult(lastrowid=1, rowcount=1), 1, 1),
        (FakeResult(lastrowid=0, rowcount=0), 0, 0),
        (FakeResult(lastrowid=1, rowcount=0), 0, 0),
    ],
    ids=["exist", "not-exist", "id-exist-n-not-exist"],
)
def test_handle_result(result, want_id, want_n):
    assert handle_result(result) == (want_id, want_n)


def test_handle_result_with_real_cursor(conn):
    cursor = conn.execute("insert into user (id, name) values (10, 'x')")
    assert handle_result(cursor) == (10, 1)


def test_find_list(conn):
    finder = find_func_helper(User, "select id, name from user where id <= ? order by id", (2,))
    assert find_list(conn, finder) == [User(1, "jd"), User(2, "jc")]


def test_find_list_empty(conn):
    finder = find_func_helper(User, "select id, name from user where id > ?", (100,))
    assert find_list(conn, finder) == []


def test_find_first(conn):
    finder = find_func_helper(User, "select id, name from user order by id desc")
    assert find_first(conn, finder) == User(5, "je")


def test_find_first_none(conn):
    finder = find_func_helper(User, "select id, name from user where id = 0")
    assert find_first(conn, finder) is None


def test_find_scalar(conn):
    finder = find_func_helper(str, "select name from user where id = ?", (3,))
    assert find_list(conn, finder) == ["ja"]


def test_finder_query():
    finder = Finder("select 1", (7,))
    assert finder.query() == ("select 1", (7,))


def test_finder_without_mapper_raises():
    with pytest.raises(TypeError):
        Finder("select 1").map_row([("a",)], (1,))


def test_entity_with_total(conn):
    finder = Finder(
        "select id, name, (select count(*) from user) as total from user where id = 1",
        (),
        entity_with_total_mapper(row_mapper(User)),
    )
    assert find_list(conn, finder) == [EntityWithTotal(inner=User(1, "jd"), total=5)]


def test_batch_splits(conn):
    seen = []
    finder = find_func_helper(User, "select id, name from user order by id")
    batch(conn, finder, 2, lambda items: seen.append([u.id for u in items]))
    assert seen == [[1, 2], [3, 4], [5]]


def test_batch_zero_is_one_batch(conn):
    seen = []
    finder = find_func_helper(User, "select id, name from user order by id")
    batch(conn, finder, 0, lambda items: seen.append(len(items)))
    assert seen == [5]


def test_batch_handler_failure(conn):
    def handler(items):
        raise ValueError("boom")

    finder = find_func_helper(User, "select id, name from user")
    with pytest.raises(RuntimeError, match="batch handle failed boom"):
        batch(conn, finder, 2, handler)


def test_find_with_batch(conn):
    finders = [
        find_func_helper(User, "select id, name from user where id = ?", (i,))
        for i in (3, 1)
    ]
    assert find_with_batch(conn, finders) == [User(3, "ja"), User(1, "jd")]


def test_find_with_batch_batcher(conn):
    class Batcher:
        def batch(self):
            return [find_func_helper(User, "select id, name from user where id = 2")]

    assert find_with_batch(conn, Batcher()) == [User(2, "jc")]


def test_exec_with_batch(conn):
    affected, last_id = exec_with_batch(
        conn,
        [
            Finder("insert into user (id, name) values (?, ?)", (20, "a")),
            ("insert into user (id, name) values (?, ?)", (21, "b")),
        ],
    )
    assert (affected, last_id) == (2, 21)
    assert _count(conn) == 7


def test_wrap_tx_commits(conn):
    result = wrap_tx(
        conn, lambda tx: tx.execute("insert into user (id, name) values (30, 'z')").rowcount
    )
    assert result == 1
    assert _count(conn) == 6


def test_wrap_tx_rolls_back(conn):
    def work(tx):
        tx.execute("insert into user (id, name) values (31, 'y')")
        raise ValueError("fail")

    with pytest.raises(ValueError, match="fail"):
        wrap_tx(conn, work)
    assert _count(conn) == 5


def test_wrap_tx_find_all(conn):
    finder = find_func_helper(User, "select id, name from user where id in (4, 5) order by id")
    assert wrap_tx_find_all(conn, finder) == [User(4, "jb"), User(5, "je")]