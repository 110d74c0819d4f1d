from local_crud.schemas import SearchConditionRequest, SearchRequest
from local_crud.services.search import build_conditions, search_items
from local_crud.services.store.base import QueryCondition
from tests.helpers import create_item


def test_empty_conditions_hide_attachments_and_notes():
    assert build_conditions([]) == [
        QueryCondition("itemType", "isNot", "attachment"),
        QueryCondition("itemType", "isNot", "note"),
    ]


def test_condition_defaults_and_skips():
    conditions = build_conditions(
        [
            SearchConditionRequest(operator="is", value="ignored"),
            SearchConditionRequest(condition="title"),
            SearchConditionRequest(condition="numPages", operator="isGreaterThan", value=100, required=False),
        ]
    )
    assert conditions == [
        QueryCondition("title", "contains", "", True),
        QueryCondition("numPages", "isGreaterThan", "100", False),
    ]


def test_default_search_excludes_hidden_types_regardless_of_limit(store):
    note = create_item(store, "note")
    book = create_item(store, "book", fields={"title": "Dune"})
    attachment = create_item(store, "attachment", fields={"title": "dune.pdf"})
    article = create_item(store, "journalArticle", fields={"title": "Sandworms"})

    for limit in (None, 1, 2, 50):
        items, _ = search_items(store, SearchRequest(limit=limit), default_limit=100)
        keys = [item["key"] for item in items]
        assert store.describe(note).key not in keys
        assert store.describe(attachment).key not in keys

    items, limit = search_items(store, SearchRequest(), default_limit=100)
    assert limit == 100
    assert [item["key"] for item in items] == [store.describe(book).key, store.describe(article).key]


def test_limit_truncates_after_matching(store):
    for index in range(5):
        create_item(store, "book", fields={"title": f"Volume {index}"})

    items, limit = search_items(store, SearchRequest(limit=3), default_limit=100)
    assert limit == 3
    assert [item["title"] for item in items] == ["Volume 0", "Volume 1", "Volume 2"]


def test_zero_limit_falls_back_to_default(store):
    for index in range(3):
        create_item(store, "book", fields={"title": f"Volume {index}"})
    items, limit = search_items(store, SearchRequest(limit=0), default_limit=2)
    assert limit == 2
    assert len(items) == 2


def test_compact_and_full_projections(store):
    create_item(store, "book", fields={"title": "Dune", "date": "1965"}, tags=["classic"])
    create_item(store, "note")

    compact, _ = search_items(
        store,
        SearchRequest(conditions=[SearchConditionRequest(condition="title", value="dune")]),
        default_limit=100,
    )
    assert len(compact) == 1
    assert set(compact[0]) == {"key", "itemID", "itemType", "title", "dateModified"}
    assert compact[0]["title"] == "Dune"

    full, _ = search_items(
        store,
        SearchRequest(conditions=[SearchConditionRequest(condition="tag", operator="is", value="classic")], includeFullData=True),
        default_limit=100,
    )
    assert full[0]["fields"] == {"title": "Dune", "date": "1965"}
    assert full[0]["tags"] == [{"tag": "classic", "type": 0}]


def test_compact_projection_of_untitled_types(store):
    note = create_item(store, "note")
    items, _ = search_items(
        store,
        SearchRequest(conditions=[SearchConditionRequest(condition="itemType", operator="is", value="note")]),
        default_limit=100,
    )
    assert items == [
        {
            "key": store.describe(note).key,
            "itemID": store.describe(note).item_id,
            "itemType": "note",
            "title": "",
            "dateModified": store.describe(note).date_modified,
        }
    ]


def test_non_object_conditions_are_skipped():
    conditions = build_conditions(["oops", 7, None, {"condition": "title", "value": "Dune"}])
    assert conditions == [QueryCondition("title", "contains", "Dune", True)]


def test_only_non_object_conditions_match_everything(store):
    create_item(store, "book", fields={"title": "Dune"})
    create_item(store, "note")

    items, _ = search_items(store, SearchRequest(conditions=["oops"]), default_limit=100)
    assert sorted(item["itemType"] for item in items) == ["book", "note"]
