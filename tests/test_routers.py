"""End-to-end RPC procedures through the FastAPI app."""

from __future__ import annotations

import pytest

from .conftest import login

RPC = "/api/rpc"


def create(client, procedure: str, payload: dict) -> int:
    response = client.post(f"{RPC}/{procedure}", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["id"]


class TestCategories:
    def test_create_fetch_delete_cycle(self, admin_client):
        category_id = create(
            admin_client,
            "categories.create",
            {"name": "Karavan", "slug": "karavan", "color": "#0ea5e9"},
        )

        found = admin_client.get(f"{RPC}/categories.getBySlug", params={"slug": "karavan"})
        assert found.json()["id"] == category_id
        assert found.json()["is_active"] is True

        deleted = admin_client.post(f"{RPC}/categories.delete", json={"id": category_id})
        assert deleted.json() == {"success": True}

        gone = admin_client.get(f"{RPC}/categories.getBySlug", params={"slug": "karavan"})
        assert gone.status_code == 200
        assert gone.json() is None

    def test_partial_update_leaves_other_fields(self, admin_client):
        category_id = create(
            admin_client,
            "categories.create",
            {"name": "Denizcilik", "slug": "denizcilik", "icon": "ri-ship-line"},
        )

        admin_client.post(
            f"{RPC}/categories.update", json={"id": category_id, "color": "#1e3a8a"}
        )

        category = admin_client.get(
            f"{RPC}/categories.getById", params={"id": category_id}
        ).json()
        assert category["icon"] == "ri-ship-line"
        assert category["color"] == "#1e3a8a"

    def test_null_for_required_column_is_rejected(self, admin_client):
        category_id = create(
            admin_client, "categories.create", {"name": "X", "slug": "x"}
        )

        response = admin_client.post(
            f"{RPC}/categories.update", json={"id": category_id, "name": None}
        )

        assert response.status_code == 422

    def test_duplicate_slug_is_conflict(self, admin_client):
        create(admin_client, "categories.create", {"name": "A", "slug": "same"})

        response = admin_client.post(
            f"{RPC}/categories.create", json={"name": "B", "slug": "same"}
        )

        assert response.status_code == 409
        assert response.json()["code"] == "DuplicateKeyError"

    def test_update_missing_id_is_not_found(self, admin_client):
        response = admin_client.post(
            f"{RPC}/categories.update", json={"id": 404, "name": "Yok"}
        )

        assert response.status_code == 404
        assert response.json()["code"] == "NotFound"

    def test_inactive_category_hidden_from_public(self, admin_client):
        create(
            admin_client,
            "categories.create",
            {"name": "Gizli", "slug": "gizli", "is_active": False},
        )
        admin_all = admin_client.get(
            f"{RPC}/categories.list", params={"active_only": "false"}
        ).json()
        assert [c["slug"] for c in admin_all] == ["gizli"]

        admin_client.cookies.clear()
        public = admin_client.get(
            f"{RPC}/categories.list", params={"active_only": "false"}
        ).json()
        assert public == []
        assert (
            admin_client.get(f"{RPC}/categories.getBySlug", params={"slug": "gizli"}).json()
            is None
        )


class TestPosts:
    @pytest.fixture
    def seeded(self, admin_client):
        create(
            admin_client,
            "posts.create",
            {"title": "Marmaris Koyları", "is_published": True, "is_featured": True},
        )
        create(admin_client, "posts.create", {"title": "Taslak Yazı"})
        admin_client.cookies.clear()
        return admin_client

    def test_public_list_never_contains_drafts(self, seeded):
        for params in ({}, {"published_only": "false"}, {"published_only": "true"}):
            posts = seeded.get(f"{RPC}/posts.list", params=params).json()
            assert [p["slug"] for p in posts] == ["marmaris-koylari"]

    def test_admin_can_list_drafts(self, seeded):
        login(seeded)

        posts = seeded.get(f"{RPC}/posts.list", params={"published_only": "false"}).json()

        assert {p["slug"] for p in posts} == {"marmaris-koylari", "taslak-yazi"}

    def test_get_by_slug_counts_every_view(self, seeded):
        for _ in range(3):
            response = seeded.get(
                f"{RPC}/posts.getBySlug", params={"slug": "marmaris-koylari"}
            )

        assert response.json()["view_count"] == 3

    def test_draft_by_slug_is_null_for_public(self, seeded):
        response = seeded.get(f"{RPC}/posts.getBySlug", params={"slug": "taslak-yazi"})

        assert response.json() is None

    def test_featured(self, seeded):
        featured = seeded.get(f"{RPC}/posts.getFeatured").json()

        assert [p["slug"] for p in featured] == ["marmaris-koylari"]

    def test_by_category(self, admin_client):
        category_id = create(
            admin_client, "categories.create", {"name": "Rota", "slug": "rota"}
        )
        create(
            admin_client,
            "posts.create",
            {"title": "Kapadokya", "category_id": category_id, "is_published": True},
        )
        create(admin_client, "posts.create", {"title": "Bodrum", "is_published": True})

        posts = admin_client.get(
            f"{RPC}/posts.getByCategory", params={"category_id": category_id}
        ).json()

        assert [p["slug"] for p in posts] == ["kapadokya"]


class TestCaravanRoutes:
    def test_route_with_map_points(self, admin_client):
        route_id = create(
            admin_client,
            "caravanRoutes.create",
            {
                "name": "Likya Yolu",
                "slug": "likya-yolu",
                "difficulty": "hard",
                "locations": ["Fethiye", "Kaş", "Olympos"],
                "map_coordinates": [{"lat": 36.62, "lng": 29.11, "label": "Fethiye"}],
                "is_published": True,
                "is_featured": True,
            },
        )

        route = admin_client.get(
            f"{RPC}/caravanRoutes.getById", params={"id": route_id}
        ).json()
        assert route["difficulty"] == "hard"
        assert route["locations"] == ["Fethiye", "Kaş", "Olympos"]
        assert route["map_coordinates"][0]["label"] == "Fethiye"
        featured = admin_client.get(f"{RPC}/caravanRoutes.getFeatured").json()
        assert [r["slug"] for r in featured] == ["likya-yolu"]

    def test_unknown_difficulty_is_rejected(self, admin_client):
        response = admin_client.post(
            f"{RPC}/caravanRoutes.create",
            json={"name": "X", "slug": "x", "difficulty": "extreme"},
        )

        assert response.status_code == 422


class TestPagesAndBlocks:
    def test_unpublished_page_hidden(self, admin_client):
        create(admin_client, "pages.create", {"title": "Hakkımızda", "slug": "hakkimizda"})
        admin_client.cookies.clear()

        assert admin_client.get(f"{RPC}/pages.list").json() == []

    def test_hero_sections(self, admin_client):
        create(admin_client, "heroSections.create", {"title": "Rüzgarı Yakala", "sort_order": 2})
        create(admin_client, "heroSections.create", {"title": "Yola Çık", "sort_order": 1})

        active = admin_client.get(f"{RPC}/heroSections.getActive").json()

        assert active["title"] == "Yola Çık"

    def test_team_member_update_and_delete(self, admin_client):
        member_id = create(
            admin_client,
            "teamMembers.create",
            {"name": "Ayşe", "social_links": {"instagram": "@ayse"}},
        )
        admin_client.post(
            f"{RPC}/teamMembers.update", json={"id": member_id, "title": "Kaptan"}
        )

        member = admin_client.get(f"{RPC}/teamMembers.getById", params={"id": member_id}).json()
        assert member["title"] == "Kaptan"
        assert member["social_links"] == {"instagram": "@ayse"}

        admin_client.post(f"{RPC}/teamMembers.delete", json={"id": member_id})
        assert admin_client.get(f"{RPC}/teamMembers.list").json() == []


class TestSiteSettings:
    def test_upsert_bulk_and_delete(self, admin_client):
        admin_client.post(
            f"{RPC}/siteSettings.upsert",
            json={"key": "site_name", "value": "Kaptan", "group": "general"},
        )
        admin_client.post(
            f"{RPC}/siteSettings.bulkUpsert",
            json=[
                {"key": "site_name", "label": "Site adı"},
                {"key": "phone", "value": "+90 555 000 00 00", "group": "contact"},
            ],
        )

        setting = admin_client.get(
            f"{RPC}/siteSettings.getByKey", params={"key": "site_name"}
        ).json()
        assert setting["value"] == "Kaptan"
        assert setting["label"] == "Site adı"
        contact = admin_client.get(
            f"{RPC}/siteSettings.getByGroup", params={"group": "contact"}
        ).json()
        assert [s["key"] for s in contact] == ["phone"]

        deleted = admin_client.post(f"{RPC}/siteSettings.delete", json={"key": "phone"})
        assert deleted.json() == {"success": True}
        missing = admin_client.post(f"{RPC}/siteSettings.delete", json={"key": "phone"})
        assert missing.status_code == 404

    def test_public_cannot_upsert(self, client):
        response = client.post(
            f"{RPC}/siteSettings.upsert", json={"key": "site_name", "value": "x"}
        )

        assert response.status_code == 401


class TestAggregates:
    def test_homepage_data(self, admin_client):
        create(admin_client, "heroSections.create", {"title": "Hoş geldiniz"})
        create(admin_client, "featureCards.create", {"title": "Tekne Turları"})
        create(
            admin_client,
            "featureCards.create",
            {"title": "Pasif", "is_active": False},
        )
        for n in range(4):
            create(
                admin_client,
                "posts.create",
                {"title": f"Yazı {n}", "is_published": True, "is_featured": True},
            )
        admin_client.post(
            f"{RPC}/siteSettings.bulkUpsert",
            json=[
                {"key": "site_name", "value": "Kaptan"},
                {"key": "empty", "value": ""},
            ],
        )
        admin_client.cookies.clear()

        data = admin_client.get(f"{RPC}/homepage.getData").json()

        assert data["hero"]["title"] == "Hoş geldiniz"
        assert [f["title"] for f in data["features"]] == ["Tekne Turları"]
        assert len(data["posts"]) == 3
        assert data["routes"] == []
        assert data["settings"] == {"site_name": "Kaptan"}

    def test_dashboard_stats_requires_admin(self, client):
        assert client.get(f"{RPC}/dashboard.stats").status_code == 401

    def test_dashboard_stats(self, admin_client):
        create(admin_client, "posts.create", {"title": "Bir"})
        create(admin_client, "pages.create", {"title": "İletişim", "slug": "iletisim"})

        stats = admin_client.get(f"{RPC}/dashboard.stats").json()

        assert stats == {"posts": 1, "routes": 0, "categories": 0, "pages": 1}
