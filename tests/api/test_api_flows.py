from tests.helpers import create_collection, create_item_via_api, item_action


def test_ping_reports_plugin_and_host(client):
    response = client.get("/ping")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["plugin"] == "zotero-local-crud"
    assert body["version"] == "1.0.0-test"
    assert body["hostVersion"] == "7.0.11"
    assert body["libraryID"] == 1
    assert body["timestamp"]


def test_create_returns_identity(client):
    response = client.post(
        "/items",
        json={
            "itemType": "book",
            "fields": {"title": "Dune", "date": "1965"},
            "creators": [{"firstName": "Frank", "lastName": "Herbert", "creatorType": "author"}],
            "tags": ["classic", {"tag": "sci-fi", "type": 1}],
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"key", "itemID", "version", "itemType"}
    assert len(body["key"]) == 8
    assert body["itemType"] == "book"
    assert body["version"] == 1


def test_create_with_malformed_json_is_distinct_from_missing_item_type(client):
    malformed = client.post("/items", content=b'{"itemType": "book",', headers={"Content-Type": "application/json"})
    missing = client.post("/items", json={"fields": {"title": "Dune"}})

    assert malformed.status_code == 400
    assert missing.status_code == 400
    assert malformed.json() == {"error": "Invalid JSON in request body"}
    assert missing.json() == {"error": "itemType is required"}


def test_create_with_empty_body_requires_item_type(client):
    response = client.post("/items")
    assert response.status_code == 400
    assert response.json()["error"] == "itemType is required"


def test_create_with_unknown_item_type_lists_valid_types(client):
    response = client.post("/items", json={"itemType": "spaceship"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid itemType: spaceship"
    assert body["validTypes"]
    assert "book" in body["validTypes"]
    assert "spaceship" not in body["validTypes"]


def test_create_with_wrong_shape_is_a_bad_request(client):
    response = client.post("/items", json={"itemType": "book", "fields": ["title"]})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid request body: fields")


def test_get_returns_full_record(client):
    create_collection("Reading list", "READ2345")
    created = create_item_via_api(
        client,
        fields={"title": "Dune", "notAField": "dropped"},
        tags=["classic"],
        collections=["READ2345", "NOPE2345"],
    )

    response = item_action(client, "get", created["key"])
    assert response.status_code == 200
    body = response.json()
    assert body["key"] == created["key"]
    assert body["itemID"] == created["itemID"]
    assert body["itemType"] == "book"
    assert body["fields"] == {"title": "Dune"}
    assert body["creators"] == []
    assert body["tags"] == [{"tag": "classic", "type": 0}]
    assert body["collections"] == ["READ2345"]
    assert body["dateAdded"]
    assert body["dateModified"]


def test_update_applies_partial_changes(client):
    created = create_item_via_api(client, fields={"title": "Dune", "date": "1965"}, tags=["classic"])

    response = item_action(client, "update", created["key"], fields={"date": "1966"}, tags=[])
    assert response.status_code == 200
    body = response.json()
    assert body["key"] == created["key"]
    assert body["version"] == 2
    assert body["dateModified"]

    record = item_action(client, "get", created["key"]).json()
    assert record["fields"] == {"title": "Dune", "date": "1966"}
    assert record["tags"] == []


def test_update_collections_can_clear_membership(client):
    create_collection("Reading list", "READ2345")
    created = create_item_via_api(client, collections=["READ2345"])

    item_action(client, "update", created["key"], fields={"title": "Kept"})
    assert item_action(client, "get", created["key"]).json()["collections"] == ["READ2345"]

    item_action(client, "update", created["key"], collections=[])
    assert item_action(client, "get", created["key"]).json()["collections"] == []


def test_update_with_malformed_json(client):
    response = client.post("/item", content=b"{oops", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON in request body"}


def test_delete_then_delete_again_is_not_found(client):
    created = create_item_via_api(client, fields={"title": "Ephemeral"})

    first = item_action(client, "delete", created["key"])
    assert first.status_code == 204
    assert first.content == b""

    second = item_action(client, "delete", created["key"])
    assert second.status_code == 404
    assert second.json() == {"error": "Item not found", "key": created["key"]}


def test_item_requires_key(client):
    response = client.post("/item", json={"action": "get"})
    assert response.status_code == 400
    assert response.json() == {"error": "key is required"}


def test_item_rejects_unknown_action_before_lookup(client):
    response = client.post("/item", json={"action": "patch", "key": "NOPE2345"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid action: patch"
    assert body["validActions"] == ["get", "update", "delete"]


def test_unknown_key_is_not_found(client):
    response = item_action(client, "get", "NOPE2345")
    assert response.status_code == 404
    assert response.json()["key"] == "NOPE2345"


def test_unsupported_method_uses_error_envelope(client):
    response = client.get("/items")
    assert response.status_code == 405
    assert "error" in response.json()


def test_unknown_path_uses_error_envelope(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert "error" in response.json()


def test_search_default_hides_attachments_and_notes(client):
    book = create_item_via_api(client, "book", fields={"title": "Dune"})
    create_item_via_api(client, "note")
    create_item_via_api(client, "attachment", fields={"title": "dune.pdf"})
    article = create_item_via_api(client, "journalArticle", fields={"title": "Sandworms"})

    response = client.post("/search", json={})
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["limit"] == 100
    assert [item["key"] for item in body["items"]] == [book["key"], article["key"]]
    assert body["items"][0] == {
        "key": book["key"],
        "itemID": book["itemID"],
        "itemType": "book",
        "title": "Dune",
        "dateModified": body["items"][0]["dateModified"],
    }


def test_search_total_is_truncated_count(client):
    for index in range(4):
        create_item_via_api(client, fields={"title": f"Volume {index}"})

    body = client.post("/search", json={"conditions": [], "limit": 2}).json()
    assert body["total"] == 2
    assert body["limit"] == 2
    assert len(body["items"]) == 2


def test_search_with_conditions_and_full_data(client):
    create_item_via_api(client, fields={"title": "Dune"}, tags=["classic"])
    create_item_via_api(client, fields={"title": "Solaris"})

    body = client.post(
        "/search",
        json={
            "conditions": [{"condition": "title", "operator": "contains", "value": "dun"}, {"operator": "is"}],
            "includeFullData": True,
        },
    ).json()
    assert body["total"] == 1
    assert body["items"][0]["fields"] == {"title": "Dune"}
    assert body["items"][0]["tags"] == [{"tag": "classic", "type": 0}]


def test_search_with_malformed_json(client):
    response = client.post("/search", content=b"[", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON in request body"}


def test_search_store_failure_is_a_server_error(client):
    response = client.post("/search", json={"conditions": [{"condition": "colour", "operator": "is", "value": "red"}]})
    assert response.status_code == 500
    assert response.json() == {"error": "Invalid condition 'colour'"}


def test_create_store_failure_is_a_server_error(client):
    response = client.post("/items", json={"itemType": "book", "creators": ["Frank Herbert"]})
    assert response.status_code == 500
    assert response.json() == {"error": "Creator at position 0 must be an object"}

    listing = client.post("/search", json={}).json()
    assert listing["total"] == 0


def test_search_skips_conditions_that_are_not_objects(client):
    create_item_via_api(client, fields={"title": "Dune"})
    create_item_via_api(client, fields={"title": "Solaris"})

    response = client.post(
        "/search",
        json={"conditions": ["oops", {"condition": "title", "operator": "contains", "value": "sol"}]},
    )
    assert response.status_code == 200
    assert [item["title"] for item in response.json()["items"]] == ["Solaris"]


def test_search_condition_with_wrong_shape_is_a_bad_request(client):
    response = client.post("/search", json={"conditions": [{"condition": "title", "value": ["a", "b"]}]})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid request body: value")


def test_update_with_non_list_tags_clears_them(client):
    created = create_item_via_api(client, fields={"title": "Dune"}, tags=["classic"])

    response = item_action(client, "update", created["key"], tags="x")
    assert response.status_code == 200
    assert item_action(client, "get", created["key"]).json()["tags"] == []
