from storefront.config.catalog_config import DEFAULT_CATEGORIES


def test_list_categories_seeds_defaults(client, fake_supabase):
    resp = client.get("/api/categories")
    assert resp.status_code == 200
    names = [c["name"] for c in resp.json()["categories"]]
    assert names == sorted(c["name"] for c in DEFAULT_CATEGORIES)


def test_list_categories_filters_root(client, fake_supabase):
    fake_supabase.tables["categories"] = [
        {"id": "c-mugs", "name": "Mugs", "slug": "mugs", "parent_id": "c-drink"},
    ]
    resp = client.get("/api/categories", params={"parent_id": ""})
    slugs = {c["slug"] for c in resp.json()["categories"]}
    assert "mugs" not in slugs
    assert "apparel" in slugs

    resp = client.get("/api/categories", params={"parent_id": "c-drink"})
    assert [c["slug"] for c in resp.json()["categories"]] == ["mugs"]


def test_get_category_by_slug(client, fake_supabase):
    fake_supabase.tables["categories"] = [{"id": "c1", "name": "Bags", "slug": "bags", "parent_id": None}]
    resp = client.get("/api/categories/bags")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Bags"
    assert client.get("/api/categories/unknown").status_code == 404
