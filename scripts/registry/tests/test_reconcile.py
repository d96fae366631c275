"""Tests for stale unit reconciliation."""

from pathlib import Path

from scripts.registry.reconcile import CleanupResult, find_stale_units, reconcile, remove_unit


def _units(components_dir, *names):
    components_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (components_dir / f"{name}.json").write_text('{"files": []}')


class TestFindStaleUnits:
    def test_difference(self, tmp_path):
        _units(tmp_path, "a", "b", "c")
        assert find_stale_units(tmp_path, ["a", "c"]) == ["b"]

    def test_missing_directory(self, tmp_path):
        assert find_stale_units(tmp_path / "absent", ["a"]) == []

    def test_non_json_files_ignored(self, tmp_path):
        _units(tmp_path, "a")
        (tmp_path / "notes.txt").write_text("keep me")
        (tmp_path / "x.json.tmp").write_text("{}")

        assert find_stale_units(tmp_path, []) == ["a"]


class TestReconcile:
    """Tests for stale unit removal."""

    def test_removes_only_stale_units(self, tmp_path):
        """Units a, b, c with a and c discovered leaves a and c."""
        _units(tmp_path, "a", "b", "c")

        results = reconcile(tmp_path, ["a", "c"])

        assert results == [CleanupResult(name="b", path=str(tmp_path / "b.json"), removed=True)]
        assert not (tmp_path / "b.json").exists()
        assert (tmp_path / "a.json").exists()
        assert (tmp_path / "c.json").exists()

    def test_nothing_stale(self, tmp_path):
        _units(tmp_path, "a")
        assert reconcile(tmp_path, ["a", "new"]) == []

    def test_failure_does_not_block_others(self, tmp_path, monkeypatch):
        """A unit that cannot be removed is reported; the rest are removed."""
        _units(tmp_path, "a", "b", "c")
        original_unlink = Path.unlink

        def flaky_unlink(self, *args, **kwargs):
            if self.name == "a.json":
                raise PermissionError("read-only")
            return original_unlink(self, *args, **kwargs)

        monkeypatch.setattr(Path, "unlink", flaky_unlink)

        results = reconcile(tmp_path, [])

        by_name = {r.name: r for r in results}
        assert by_name["a"].removed is False
        assert "read-only" in by_name["a"].error
        assert by_name["b"].removed and by_name["c"].removed
        assert (tmp_path / "a.json").exists()
        assert not (tmp_path / "b.json").exists()

    def test_remove_already_gone_counts_as_removed(self, tmp_path):
        result = remove_unit(tmp_path, "ghost")
        assert result.removed is True
        assert result.error is None
