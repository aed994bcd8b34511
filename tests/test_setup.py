def test_init_seeds_sample_data(client):
    res = client.post("/api/setup/init")
    body = res.get_json()
    assert res.status_code == 200
    assert body["success"] is True
    assert body["data"]["message"] == "Database initialized successfully with sample data"
    assert body["data"]["seeded"] == {"users": 2, "products": 6}

    emails = {u["email"] for u in client.get("/api/users").get_json()["data"]}
    assert emails == {"john@example.com", "jane@example.com"}


def test_init_is_idempotent(client):
    client.post("/api/setup/init")
    res = client.post("/api/setup/init")
    assert res.get_json()["data"]["seeded"] == {"users": 0, "products": 0}
    assert len(client.get("/api/products").get_json()["data"]) == 6
    assert len(client.get("/api/users").get_json()["data"]) == 2


def test_seeded_products_have_slugs(client):
    client.post("/api/setup/init")
    slugs = {p["slug"] for p in client.get("/api/products").get_json()["data"]}
    assert {"laptop", "wireless-mouse", "mechanical-keyboard"} <= slugs
