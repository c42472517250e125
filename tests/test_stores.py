import pytest
from sqlalchemy import event

from contentmodel import ContentModel, QueryType, SortOrder


class Track(ContentModel):
    pass


@pytest.fixture(params=["memory", "sql"])
def any_store(request):
    """Each bundled Store implementation in turn."""
    return request.getfixturevalue("store" if request.param == "memory" else "sql_store")


def test_create_assigns_uuid(any_store):
    data = any_store.create("Track", {"title": "Intro"})
    assert data["title"] == "Intro"
    assert isinstance(data["uuid"], str) and len(data["uuid"]) == 36
    assert any_store.load(data["uuid"]) == data


def test_load_unknown(any_store):
    assert any_store.load("nope") is None


def test_query_filters_by_type_and_fields(any_store):
    any_store.create("Track", {"title": "A", "genre": "jazz"})
    any_store.create("Track", {"title": "B", "genre": "rock"})
    any_store.create("Album", {"title": "A", "genre": "jazz"})

    found = any_store.query({"type": "Track", "genre": "jazz"})
    assert [r["title"] for r in found] == ["A"]

    found = any_store.query({"type": "Track", "title": "A", "genre": "rock"}, QueryType.OR)
    assert sorted(r["title"] for r in found) == ["A", "B"]

    found = any_store.query({"genre": "jazz"})
    assert len(found) == 2


def test_query_and_requires_every_field(any_store):
    any_store.create("Track", {"title": "A"})
    assert any_store.query({"type": "Track", "title": "A", "genre": "jazz"}) == []


def test_query_sort(any_store):
    for n in (2, 3, 1):
        any_store.create("Track", {"n": n})
    any_store.create("Track", {"title": "unnumbered"})

    asc = any_store.query({"type": "Track"}, "AND", "n", SortOrder.ASC)
    assert [r.get("n") for r in asc] == [None, 1, 2, 3]

    desc = any_store.query({"type": "Track"}, "AND", "n", "DESC")
    assert [r.get("n") for r in desc] == [None, 3, 2, 1]


def test_update_merges(any_store):
    data = any_store.create("Track", {"title": "A", "genre": "jazz"})
    updated = any_store.update(data["uuid"], {"genre": "rock", "bpm": 120})
    assert updated == {"title": "A", "genre": "rock", "bpm": 120, "uuid": data["uuid"]}
    assert any_store.load(data["uuid"]) == updated


def test_update_unknown(any_store):
    assert any_store.update("nope", {"a": 1}) is None


def test_delete(any_store):
    data = any_store.create("Track", {})
    assert any_store.delete(data["uuid"]) is True
    assert any_store.delete(data["uuid"]) is False
    assert any_store.load(data["uuid"]) is None


def test_model_lifecycle(any_store):
    track = Track.get_new(store=any_store)
    track["title"] = "Intro"
    track["genre"] = "jazz"
    track.save()
    assert track.exists

    Track.create({"title": "Outro", "genre": "jazz"}, store=any_store)

    first = Track.findFirstByTitleAndGenre("Intro", "jazz", store=any_store)
    assert first.uuid == track.uuid

    assert first.update({"genre": "fusion"}) is first
    assert Track.find(track.uuid, store=any_store).get("genre") == "fusion"
    assert len(Track.findAllByGenre("jazz", store=any_store)) == 1

    assert first.delete() is True
    assert Track.find(track.uuid, store=any_store) is None


def test_query_sort_null_and_mixed_values(any_store):
    for n in ("b", 2, None, "a", 1):
        any_store.create("Track", {"n": n})
    any_store.create("Track", {})

    asc = any_store.query({"type": "Track"}, "AND", "n", "ASC")
    assert [r.get("n") for r in asc] == [None, None, 1, 2, "a", "b"]

    desc = any_store.query({"type": "Track"}, "AND", "n", "DESC")
    assert [r.get("n") for r in desc] == [None, None, "b", "a", 2, 1]


def test_query_matches_typed_values(any_store):
    any_store.create("Track", {"bpm": 120, "live": True, "tags": ["a"], "ratio": 0.5})
    any_store.create("Track", {"bpm": "120", "live": False, "tags": ["b"], "ratio": 1.5})

    assert len(any_store.query({"type": "Track", "bpm": 120})) == 1
    assert len(any_store.query({"type": "Track", "live": True})) == 1
    assert len(any_store.query({"type": "Track", "ratio": 1.5})) == 1
    assert [r["bpm"] for r in any_store.query({"type": "Track", "tags": ["b"]})] == ["120"]
    found = any_store.query({"type": "Track", "tags": ["a"], "bpm": "120"}, "OR")
    assert len(found) == 2


def test_sql_query_filters_and_orders_in_sql(sql_store):
    statements = []

    def capture(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement.lower())

    sql_store.create("Track", {"genre": "jazz", "n": 2})
    sql_store.create("Track", {"genre": "rock", "n": 1})

    event.listen(sql_store.engine, "before_cursor_execute", capture)
    try:
        found = sql_store.query({"type": "Track", "genre": "jazz"}, "AND", "n", "DESC")
    finally:
        event.remove(sql_store.engine, "before_cursor_execute", capture)

    assert [r["genre"] for r in found] == ["jazz"]
    (statement,) = statements
    where, _, order = statement.partition("order by")
    assert "json_extract" in where
    assert "json_extract" in order and "nulls first" in order
