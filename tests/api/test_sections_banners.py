import re

JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 16


class TestSectionApi:
    def test_create_with_image_url_key(self, client, fake_db):
        response = client.post(
            "/api/sections",
            json={"name": "Living", "image": "https://cdn.example.com/sections/x.jpg", "order": 1},
        )

        assert response.status_code == 200
        assert response.json()["imageUrl"] == "https://cdn.example.com/sections/x.jpg"
        raw = next(iter(fake_db.Table("test-sections").items.values()))
        assert raw["image"] == "https://cdn.example.com/sections/x.jpg"
        assert raw["PK"] == f"SECTION#{response.json()['id']}"

    def test_multipart_with_upload(self, client):
        response = client.post(
            "/api/sections",
            data={"name": "Living Room", "showOnHome": "true", "isActive": "false"},
            files={"image": ("room.jpg", JPEG, "image/jpeg")},
        )

        section = response.json()
        assert re.fullmatch(
            r"https://cdn\.example\.com/sections/living-room-\d+\.jpg", section["imageUrl"]
        )
        assert section["showOnHome"] is True
        assert section["isActive"] is False

    def test_update_replaces_image(self, client, fake_boto_s3):
        created = client.post(
            "/api/sections",
            data={"name": "Living"},
            files={"image": ("a.jpg", JPEG, "image/jpeg")},
        ).json()

        updated = client.put(
            f"/api/sections/{created['id']}",
            files={"image": ("b.png", b"\x89PNG", "image/png")},
        ).json()

        assert updated["imageUrl"].endswith(".png")
        assert fake_boto_s3.deleted == [created["imageUrl"].removeprefix("https://cdn.example.com/")]

    def test_name_is_required(self, client):
        assert client.post("/api/sections", json={"order": 1}).status_code == 400


class TestBannerApi:
    def test_create_without_image(self, client):
        response = client.post(
            "/api/banners", json={"title": "Summer Sale", "position": "HOME_HERO"}
        )

        assert response.status_code == 200
        banner = response.json()
        assert banner["image"] == ""
        assert banner["position"] == "HOME_HERO"

    def test_create_with_upload(self, client):
        response = client.post(
            "/api/banners",
            data={"title": "Summer Sale", "position": "HOME_MIDDLE", "order": "3"},
            files={"image": ("s.webp", b"RIFF", "image/webp")},
        )

        banner = response.json()
        assert re.fullmatch(r"https://cdn\.example\.com/banners/summer-sale-\d+\.webp", banner["image"])
        assert banner["order"] == 3

    def test_category_top_requires_category(self, client):
        response = client.post(
            "/api/banners", json={"title": "Beds", "position": "CATEGORY_TOP"}
        )
        assert response.status_code == 400
        assert "categoryId" in response.json()["error"]

    def test_unknown_position(self, client):
        response = client.post("/api/banners", json={"title": "Beds", "position": "FOOTER"})
        assert response.status_code == 400

    def test_update_and_delete(self, client):
        created = client.post("/api/banners", json={"title": "Sale", "isActive": True}).json()

        updated = client.put(f"/api/banners/{created['id']}", json={"isActive": False}).json()
        assert updated["isActive"] is False
        assert updated["title"] == "Sale"
        assert updated["createdAt"] == created["createdAt"]

        assert client.delete(f"/api/banners/{created['id']}").json() == {"success": True}
        assert client.get(f"/api/banners/{created['id']}").status_code == 404

    def test_update_to_category_top_uses_stored_category(self, client):
        created = client.post(
            "/api/banners", json={"title": "Beds", "position": "HOME_HERO", "categoryId": "c1"}
        ).json()

        response = client.put(f"/api/banners/{created['id']}", json={"position": "CATEGORY_TOP"})

        assert response.status_code == 200
        assert response.json()["position"] == "CATEGORY_TOP"
        assert response.json()["categoryId"] == "c1"

    def test_update_to_category_top_without_any_category(self, client):
        created = client.post("/api/banners", json={"title": "Beds"}).json()

        response = client.put(f"/api/banners/{created['id']}", json={"position": "CATEGORY_TOP"})

        assert response.status_code == 400
        assert response.json() == {"error": "categoryId is required for CATEGORY_TOP banners"}
