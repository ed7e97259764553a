"""프리셋 카탈로그 테스트."""

import json

import pytest

from conftest import make_cube_text
from colorgrade.core.errors import (
    FormatError,
    InvalidCUBEFile,
    PresetIOError,
    PresetNotFound,
    PresetUnavailable,
)
from colorgrade.presets.catalog import PresetCatalog
from colorgrade.presets.models import CustomPreset
from colorgrade.presets.repository import CatalogRepository


class TestImport:
    """가져오기 테스트."""

    def test_import_bytes(self, catalog, identity_cube):
        preset = catalog.import_from_source(identity_cube, name="Identity")
        assert preset.name == "Identity"
        assert preset.file_name.endswith(".cube")
        assert catalog.list_all() == [preset]
        assert catalog.read_payload(preset) == identity_cube

    def test_import_path_uses_stem(self, catalog, identity_cube, tmp_path):
        source = tmp_path / "Kodak Look.cube"
        source.write_bytes(identity_cube)
        preset = catalog.import_from_source(source)
        assert preset.name == "Kodak Look"
        # 백업 파일 이름은 사용자 이름과 무관하게 생성된다
        assert "Kodak" not in preset.file_name

    def test_import_default_name_for_bytes(self, catalog, identity_cube):
        assert catalog.import_from_source(identity_cube).name == "Custom Preset"

    def test_identical_bytes_not_deduplicated(self, catalog, identity_cube):
        """같은 바이트를 두 번 가져오면 레코드와 파일이 각각 생긴다."""
        a = catalog.import_from_source(identity_cube, name="A")
        b = catalog.import_from_source(identity_cube, name="B")
        assert a.id != b.id
        assert a.file_name != b.file_name
        root = catalog.repository.root
        assert (root / a.file_name).is_file()
        assert (root / b.file_name).is_file()
        assert len(catalog) == 2

    def test_thumbnail_persisted(self, catalog, identity_cube):
        preset = catalog.import_from_source(identity_cube, thumbnail=b"\xff\xd8jpeg")
        reloaded = PresetCatalog(catalog.repository)
        reloaded.load_catalog()
        assert reloaded.get(preset.id).thumbnail_data == b"\xff\xd8jpeg"

    @pytest.mark.parametrize(
        "payload, error",
        [
            (b"\xff\xfe\xfa", FormatError),
            (b"not a lut at all", InvalidCUBEFile),
            (make_cube_text(2, [(0, 0, 0)] * 7).encode(), InvalidCUBEFile),
            (make_cube_text(2, header="DOMAIN_MIN 0 0").encode(), InvalidCUBEFile),
            ((make_cube_text(2) + "nan nan nan\n").encode(), InvalidCUBEFile),
        ],
    )
    def test_invalid_import_leaves_catalog_unchanged(self, catalog, payload, error):
        with pytest.raises(error):
            catalog.import_from_source(payload)
        assert catalog.list_all() == []
        assert list(catalog.repository.root.glob("*.cube")) == []

    def test_missing_source_file(self, catalog, tmp_path):
        with pytest.raises(PresetIOError):
            catalog.import_from_source(tmp_path / "nope.cube")
        assert len(catalog) == 0

    def test_index_write_failure_rolls_back(self, catalog, identity_cube, monkeypatch):
        def fail(presets):
            raise PresetIOError("disk full")

        monkeypatch.setattr(catalog.repository, "save", fail)
        with pytest.raises(PresetIOError):
            catalog.import_from_source(identity_cube)
        assert len(catalog) == 0
        assert list(catalog.repository.root.glob("*.cube")) == []

    def test_dimension_limit(self, tmp_path):
        catalog = PresetCatalog.from_directory(tmp_path, max_lut_dimension=2)
        with pytest.raises(InvalidCUBEFile):
            catalog.import_from_source(make_cube_text(3).encode())


class TestRenameDelete:
    """이름 변경/삭제 테스트."""

    def test_rename_keeps_backing_file(self, catalog, identity_cube):
        preset = catalog.import_from_source(identity_cube, name="Old")
        renamed = catalog.rename(preset, "  New  ")
        assert renamed.name == "New"
        assert renamed.id == preset.id
        assert renamed.file_name == preset.file_name
        assert renamed.created_at == preset.created_at
        assert catalog.list_all() == [renamed]

    def test_rename_persisted(self, catalog, identity_cube):
        preset = catalog.import_from_source(identity_cube, name="Old")
        catalog.rename(preset, "New")
        reloaded = PresetCatalog(catalog.repository)
        assert [p.name for p in reloaded.load_catalog()] == ["New"]

    def test_rename_unknown(self, catalog):
        ghost = CustomPreset(name="ghost", file_name="ghost.cube")
        with pytest.raises(PresetNotFound):
            catalog.rename(ghost, "x")

    def test_rename_blank(self, catalog, identity_cube):
        preset = catalog.import_from_source(identity_cube)
        with pytest.raises(ValueError):
            catalog.rename(preset, "   ")

    def test_delete_removes_record_and_file(self, catalog, identity_cube):
        preset = catalog.import_from_source(identity_cube)
        path = catalog.repository.payload_path(preset.file_name)
        catalog.delete(preset)
        assert catalog.list_all() == []
        assert not path.exists()
        assert PresetCatalog(catalog.repository).load_catalog() == []

    def test_delete_survives_file_delete_failure(self, catalog, identity_cube, monkeypatch):
        """파일 삭제가 실패해도 레코드는 제거된다."""
        preset = catalog.import_from_source(identity_cube)

        def fail(file_name):
            raise PresetIOError("permission denied")

        monkeypatch.setattr(catalog.repository, "delete_payload", fail)
        catalog.delete(preset)
        assert catalog.list_all() == []

    def test_read_payload_after_external_delete(self, catalog, identity_cube):
        preset = catalog.import_from_source(identity_cube)
        catalog.repository.payload_path(preset.file_name).unlink()
        with pytest.raises(PresetUnavailable):
            catalog.read_payload(preset)


class TestLoadCatalog:
    """시작 시 로드 및 정합성 복구 테스트."""

    def test_prunes_missing_backing_files(self, catalog, identity_cube):
        keep = catalog.import_from_source(identity_cube, name="keep")
        gone = catalog.import_from_source(identity_cube, name="gone")
        catalog.repository.payload_path(gone.file_name).unlink()

        reloaded = PresetCatalog(catalog.repository)
        assert reloaded.load_catalog() == [keep]
        assert len(reloaded) == 1

        # 인덱스도 다시 저장되어 있어야 함
        doc = json.loads(catalog.repository.index_path.read_text(encoding="utf-8"))
        assert [p["id"] for p in doc["presets"]] == [keep.id]

    def test_missing_index_is_empty(self, tmp_path):
        catalog = PresetCatalog.from_directory(tmp_path / "fresh")
        assert catalog.load_catalog() == []

    def test_corrupt_index_is_empty(self, tmp_path):
        repo = CatalogRepository(tmp_path)
        repo.index_path.write_text("{not json", encoding="utf-8")
        assert PresetCatalog(repo).load_catalog() == []

    def test_wrong_shape_index_is_empty(self, tmp_path):
        repo = CatalogRepository(tmp_path)
        repo.index_path.write_text('{"presets": [{"id": 1}]}', encoding="utf-8")
        assert PresetCatalog(repo).load_catalog() == []

    def test_order_preserved(self, catalog, identity_cube):
        names = ["one", "two", "three"]
        for name in names:
            catalog.import_from_source(identity_cube, name=name)
        reloaded = PresetCatalog(catalog.repository)
        assert [p.name for p in reloaded.load_catalog()] == names


class TestRepository:
    """저장소 계약 테스트 (디스크 상태와 무관)."""

    def test_reconcile_with_predicate(self, tmp_path):
        repo = CatalogRepository(tmp_path)
        a = CustomPreset(name="a", file_name="a.cube")
        b = CustomPreset(name="b", file_name="b.cube")
        c = CustomPreset(name="c", file_name="c.cube")
        kept, dropped = repo.reconcile([a, b, c], exists=lambda p: p.name != "b")
        assert kept == [a, c]
        assert dropped == [b]

    def test_save_then_load(self, tmp_path):
        repo = CatalogRepository(tmp_path)
        presets = [CustomPreset(name="x", file_name="x.cube", thumbnail_data=b"\x00\x01")]
        repo.save(presets)
        assert repo.load() == presets
        assert not repo.index_path.with_suffix(".json.tmp").exists()

    @pytest.mark.parametrize("name", ["../evil.cube", "a/b.cube", "..", ""])
    def test_payload_path_rejects_traversal(self, tmp_path, name):
        with pytest.raises(PresetIOError):
            CatalogRepository(tmp_path).payload_path(name)

    def test_tampered_file_name_pruned(self, tmp_path):
        repo = CatalogRepository(tmp_path)
        repo.save([CustomPreset(name="x", file_name="../outside.cube")])
        (tmp_path.parent / "outside.cube").write_text("LUT_3D_SIZE 1\n0 0 0\n")
        assert PresetCatalog(repo).load_catalog() == []
