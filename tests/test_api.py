"""HTTP API 테스트."""

import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image as PILImage

from conftest import make_cube_text
from colorgrade.api.main import create_app


def _png(pixels: np.ndarray) -> bytes:
    buf = io.BytesIO()
    PILImage.fromarray(pixels).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def client(tmp_path):
    app = create_app(catalog_dir=tmp_path / "catalog")
    with TestClient(app) as c:
        yield c


@pytest.fixture
def pixels() -> np.ndarray:
    return (np.arange(6 * 7 * 3).reshape(6, 7, 3) % 256).astype(np.uint8)


def _import(client, payload: bytes, name: str | None = None):
    data = {"name": name} if name else {}
    return client.post(
        "/v1/presets",
        files={"file": ("look.cube", payload, "text/plain")},
        data=data,
    )


class TestPresetAPI:
    """프리셋 엔드포인트 테스트."""

    def test_import_list_rename_delete(self, client, identity_cube):
        resp = _import(client, identity_cube, name="Identity")
        assert resp.status_code == 201
        preset_id = resp.json()["id"]

        listing = client.get("/v1/presets").json()
        assert listing["total"] == 1
        assert listing["items"][0]["name"] == "Identity"

        resp = client.patch(f"/v1/presets/{preset_id}", json={"name": "Renamed"})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Renamed"

        assert client.delete(f"/v1/presets/{preset_id}").status_code == 204
        assert client.get("/v1/presets").json()["total"] == 0

    def test_import_uses_filename_when_unnamed(self, client, identity_cube):
        resp = _import(client, identity_cube)
        assert resp.json()["name"] == "look"

    def test_invalid_cube_rejected(self, client):
        resp = _import(client, make_cube_text(2, [(0, 0, 0)] * 7).encode())
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "INVALID_CUBE_FILE"
        assert client.get("/v1/presets").json()["total"] == 0

    def test_undecodable_rejected(self, client):
        resp = _import(client, b"\xff\xfe\xfa")
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "INVALID_FORMAT"

    def test_unknown_preset(self, client):
        assert client.patch("/v1/presets/nope", json={"name": "x"}).status_code == 404
        assert client.delete("/v1/presets/nope").status_code == 404

    def test_apply_identity(self, client, identity_cube, pixels):
        preset_id = _import(client, identity_cube).json()["id"]
        resp = client.post(
            f"/v1/presets/{preset_id}/apply",
            params={"intensity": 1.0},
            files={"image": ("in.png", _png(pixels), "image/png")},
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        out = np.asarray(PILImage.open(io.BytesIO(resp.content)).convert("RGB"))
        assert np.abs(out.astype(int) - pixels.astype(int)).max() <= 1

    def test_apply_unavailable(self, client, tmp_path, identity_cube, pixels):
        preset_id = _import(client, identity_cube).json()["id"]
        for path in (tmp_path / "catalog").glob("*.cube"):
            path.unlink()
        resp = client.post(
            f"/v1/presets/{preset_id}/apply",
            files={"image": ("in.png", _png(pixels), "image/png")},
        )
        assert resp.status_code == 409

    def test_apply_bad_image(self, client, identity_cube):
        preset_id = _import(client, identity_cube).json()["id"]
        resp = client.post(
            f"/v1/presets/{preset_id}/apply",
            files={"image": ("in.png", b"not an image", "image/png")},
        )
        assert resp.status_code == 415

    def test_apply_intensity_out_of_range(self, client, identity_cube, pixels):
        preset_id = _import(client, identity_cube).json()["id"]
        resp = client.post(
            f"/v1/presets/{preset_id}/apply",
            params={"intensity": 1.5},
            files={"image": ("in.png", _png(pixels), "image/png")},
        )
        assert resp.status_code == 422

    def test_thumbnail_reencoded_as_jpeg(self, client, identity_cube):
        """업로드한 PNG 썸네일은 긴 변이 제한된 JPEG로 저장된다."""
        large = np.full((300, 600, 3), 120, dtype=np.uint8)
        resp = client.post(
            "/v1/presets",
            files={
                "file": ("look.cube", identity_cube, "text/plain"),
                "thumbnail": ("thumb.png", _png(large), "image/png"),
            },
        )
        assert resp.status_code == 201
        assert resp.json()["has_thumbnail"] is True

        thumb = client.get(f"/v1/presets/{resp.json()['id']}/thumbnail")
        assert thumb.status_code == 200
        assert thumb.content.startswith(b"\xff\xd8")
        with PILImage.open(io.BytesIO(thumb.content)) as img:
            assert img.format == "JPEG"
            assert max(img.size) <= 256

    def test_non_image_thumbnail_rejected(self, client, identity_cube):
        resp = client.post(
            "/v1/presets",
            files={
                "file": ("look.cube", identity_cube, "text/plain"),
                "thumbnail": ("thumb.png", b"not an image", "image/png"),
            },
        )
        assert resp.status_code == 415
        assert client.get("/v1/presets").json()["total"] == 0

    def test_catalog_reloaded_on_startup(self, tmp_path, identity_cube):
        app = create_app(catalog_dir=tmp_path / "catalog")
        with TestClient(app) as c:
            _import(c, identity_cube, name="persisted")
        with TestClient(create_app(catalog_dir=tmp_path / "catalog")) as c:
            items = c.get("/v1/presets").json()["items"]
        assert [i["name"] for i in items] == ["persisted"]


class TestLooksAPI:
    """내장 룩 및 톤 커브 엔드포인트 테스트."""

    def test_list_looks(self, client):
        looks = client.get("/v1/looks").json()
        assert [l["look"] for l in looks][:2] == ["-", "Natural"]
        assert len(looks) == 10

    def test_get_look(self, client):
        resp = client.get("/v1/looks/Warm")
        assert resp.status_code == 200
        body = resp.json()
        assert body["category"] == "COLOR"
        assert body["settings"]["temperature"] == 4800

    def test_unknown_look(self, client):
        assert client.get("/v1/looks/Unknown").status_code == 404

    def test_tone_curve_default(self, client):
        resp = client.post("/v1/tone-curve/evaluate", json={"x": 0.3})
        assert resp.json()["y"] == pytest.approx(0.3)

    def test_tone_curve_duplicate_inputs(self, client):
        resp = client.post(
            "/v1/tone-curve/evaluate",
            json={"points": [[0.5, 0.1], [0.5, 0.2]], "x": 0.5},
        )
        assert resp.status_code == 422

    def test_health(self, client):
        """헬스 체크는 /v1 아래에만 노출된다."""
        assert client.get("/v1/health").json()["status"] == "ok"
        ready = client.get("/v1/health/ready").json()
        assert ready["status"] == "ok"
        assert client.get("/health").status_code == 404
