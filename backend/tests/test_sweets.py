import pytest


def test_admin_creates_sweet(client, admin_headers):
    resp = client.post(
        "/api/sweets",
        json={"name": "  Chocolate Bar ", "category": "Chocolate", "price": 2.99, "quantity": 10},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Sweet added successfully"
    sweet = body["sweet"]
    assert sweet["name"] == "Chocolate Bar"
    assert sweet["category"] == "Chocolate"
    assert sweet["price"] == 2.99
    assert sweet["quantity"] == 10
    assert sweet["id"] > 0
    assert sweet["createdAt"] and sweet["updatedAt"]


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"name": "C", "category": "Chocolate", "price": 1.0, "quantity": 1}, "name"),
        ({"name": "x" * 101, "category": "Chocolate", "price": 1.0, "quantity": 1}, "name"),
        ({"name": "Chocolate Bar", "category": "Cake", "price": 1.0, "quantity": 1}, "category"),
        ({"name": "Chocolate Bar", "category": "Chocolate", "price": -0.5, "quantity": 1}, "price"),
        ({"name": "Chocolate Bar", "category": "Chocolate", "price": 1.0, "quantity": -1}, "quantity"),
        ({"name": "Chocolate Bar", "category": "Chocolate", "price": 1.0}, "quantity"),
    ],
)
def test_create_validation(client, admin_headers, payload, field):
    resp = client.post("/api/sweets", json=payload, headers=admin_headers)
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == [field]


def test_create_with_wrong_types_is_a_400(client, admin_headers):
    resp = client.post(
        "/api/sweets",
        json={"name": "Chocolate Bar", "category": "Chocolate", "price": "cheap", "quantity": 1},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation failed"


def test_admin_only_catalog_mutations(client, user_headers, make_sweet):
    sweet = make_sweet()
    payload = {"name": "Gummy Bears", "category": "Gummy", "price": 1.99, "quantity": 5}

    for headers, expected in ((user_headers, 403), ({}, 401)):
        assert client.post("/api/sweets", json=payload, headers=headers).status_code == expected
        assert client.put(f"/api/sweets/{sweet['id']}", json={"price": 1.0}, headers=headers).status_code == expected
        assert client.delete(f"/api/sweets/{sweet['id']}", headers=headers).status_code == expected

    resp = client.post("/api/sweets", json=payload, headers=user_headers)
    assert resp.json()["error"] == "Admin access required"


def test_list_requires_auth_and_is_newest_first(client, user_headers, make_sweet):
    first = make_sweet(name="First Sweet")
    second = make_sweet(name="Second Sweet")

    assert client.get("/api/sweets").status_code == 401

    resp = client.get("/api/sweets", headers=user_headers)
    assert resp.status_code == 200
    ids = [s["id"] for s in resp.json()["sweets"]]
    assert ids == [second["id"], first["id"]]


def test_get_sweet(client, user_headers, make_sweet):
    sweet = make_sweet()
    resp = client.get(f"/api/sweets/{sweet['id']}", headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["sweet"]["name"] == "Chocolate Bar"

    resp = client.get("/api/sweets/9999", headers=user_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "Sweet not found"


@pytest.fixture
def catalog(make_sweet):
    return {
        "milk": make_sweet(name="Milk Chocolate", category="Chocolate", price=1.99),
        "bears": make_sweet(name="Gummy Bears", category="Gummy", price=2.0),
        "worms": make_sweet(name="Sour Gummy Worms", category="Gummy", price=2.5),
        "toffee": make_sweet(name="English Toffee", category="Toffee", price=3.0),
        "bark": make_sweet(name="Chocolate Bark 100%", category="Chocolate", price=3.01),
    }


def _search(client, headers, **params):
    resp = client.get("/api/sweets/search", params=params, headers=headers)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["count"] == len(body["sweets"])
    return {s["name"] for s in body["sweets"]}


def test_search_by_name_is_case_insensitive_substring(client, user_headers, catalog):
    assert _search(client, user_headers, name="gummy") == {"Gummy Bears", "Sour Gummy Worms"}
    assert _search(client, user_headers, name="CHOCOLATE") == {"Milk Chocolate", "Chocolate Bark 100%"}


def test_search_name_wildcards_are_literal(client, user_headers, catalog):
    assert _search(client, user_headers, name="%") == {"Chocolate Bark 100%"}
    assert _search(client, user_headers, name="_") == set()


def test_search_by_category_is_exact(client, user_headers, catalog):
    assert _search(client, user_headers, category="Gummy") == {"Gummy Bears", "Sour Gummy Worms"}
    assert _search(client, user_headers, category="gummy") == set()


def test_search_price_bounds_are_inclusive(client, user_headers, catalog):
    assert _search(client, user_headers, minPrice=2, maxPrice=3) == {
        "Gummy Bears",
        "Sour Gummy Worms",
        "English Toffee",
    }
    assert _search(client, user_headers, minPrice=3) == {"English Toffee", "Chocolate Bark 100%"}
    assert _search(client, user_headers, maxPrice=1.99) == {"Milk Chocolate"}


def test_search_filters_combine(client, user_headers, catalog):
    assert _search(client, user_headers, name="gummy", maxPrice=2.2) == {"Gummy Bears"}
    assert _search(client, user_headers, category="Chocolate", minPrice=2) == {"Chocolate Bark 100%"}
    assert len(_search(client, user_headers)) == 5


def test_search_requires_auth(client, catalog):
    assert client.get("/api/sweets/search", params={"name": "gummy"}).status_code == 401


def test_update_only_touches_supplied_fields(client, admin_headers, make_sweet):
    sweet = make_sweet()
    resp = client.put(f"/api/sweets/{sweet['id']}", json={"price": 3.49}, headers=admin_headers)
    assert resp.status_code == 200
    updated = resp.json()["sweet"]
    assert updated["price"] == 3.49
    assert updated["name"] == sweet["name"]
    assert updated["quantity"] == sweet["quantity"]


def test_update_validates_supplied_fields(client, admin_headers, make_sweet):
    sweet = make_sweet()
    resp = client.put(f"/api/sweets/{sweet['id']}", json={"category": "Cake"}, headers=admin_headers)
    assert resp.status_code == 400
    resp = client.put(f"/api/sweets/{sweet['id']}", json={"quantity": -3}, headers=admin_headers)
    assert resp.status_code == 400

    resp = client.get(f"/api/sweets/{sweet['id']}", headers=admin_headers)
    assert resp.json()["sweet"]["category"] == "Chocolate"
    assert resp.json()["sweet"]["quantity"] == 10


def test_update_missing_sweet(client, admin_headers):
    resp = client.put("/api/sweets/9999", json={"price": 1.0}, headers=admin_headers)
    assert resp.status_code == 404


def test_delete_sweet(client, admin_headers, make_sweet):
    sweet = make_sweet()
    resp = client.delete(f"/api/sweets/{sweet['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["sweet"]["id"] == sweet["id"]

    assert client.get(f"/api/sweets/{sweet['id']}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/sweets/{sweet['id']}", headers=admin_headers).status_code == 404


@pytest.mark.parametrize("raw_price", ["Infinity", "-Infinity", "NaN", '"NaN"', '"inf"'])
def test_non_finite_price_is_a_400(client, admin_headers, make_sweet, raw_price):
    body = '{"name": "Chocolate Bar", "category": "Chocolate", "price": %s, "quantity": 1}' % raw_price
    headers = {**admin_headers, "Content-Type": "application/json"}
    resp = client.post("/api/sweets", content=body, headers=headers)
    assert resp.status_code == 400

    sweet = make_sweet()
    resp = client.put(f"/api/sweets/{sweet['id']}", content='{"price": %s}' % raw_price, headers=headers)
    assert resp.status_code == 400

    resp = client.get(f"/api/sweets/{sweet['id']}", headers=admin_headers)
    assert resp.json()["sweet"]["price"] == 2.99


def test_search_rejects_non_finite_bounds(client, user_headers):
    for params in ({"minPrice": "nan"}, {"maxPrice": "inf"}):
        resp = client.get("/api/sweets/search", params=params, headers=user_headers)
        assert resp.status_code == 400
