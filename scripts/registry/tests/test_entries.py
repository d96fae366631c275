"""Tests for registry entry synthesis and persistence."""

import json

import pytest

from scripts.registry.discovery import ComponentSource, discover_components
from scripts.registry.entries import (
    read_source,
    synthesize_all,
    synthesize_component,
    synthesize_entry,
    target_path,
    write_entries,
    write_entry,
)
from scripts.registry.metadata import extract_metadata

GENERATED_AT = "2026-01-31T14:30:00+00:00"


def _source(project, category, filename):
    path = project / "src" / "components" / category / filename
    return ComponentSource(
        name=path.stem,
        relative_path=f"{category}/{filename}",
        category=category,
        path=path,
    )


class TestSynthesizeEntry:
    """Tests for entry shape."""

    def test_alert_entry_document(self, tmp_path, config, make_component, alert_source):
        """The alert example produces the documented unit."""
        make_component("ui", "alert.tsx", alert_source)
        source = _source(tmp_path, "ui", "alert.tsx")
        metadata = extract_metadata(alert_source, "alert", config)

        doc = synthesize_entry(source, alert_source, metadata, config, GENERATED_AT).to_dict()

        assert doc["name"] == "alert"
        assert doc["type"] == "components:ui"
        assert doc["description"] == "Displays a dismissible message."
        assert doc["version"] == "0.1.0"
        assert doc["dependencies"] == []
        assert doc["devDependencies"] == []
        assert doc["registryDependencies"] == []
        assert doc["files"] == [
            {
                "name": "alert.tsx",
                "content": alert_source,
                "targetPath": "src/components/ui/alert.tsx",
            }
        ]
        assert doc["styleExtensions"] == {"config": {"theme": {"extend": {}}}}
        assert doc["meta"] == {
            "sourcePath": "ui/alert.tsx",
            "generatedAt": GENERATED_AT,
            "exportedSymbols": ["Alert"],
            "hasVariants": False,
            "hasSizes": False,
        }

    def test_target_path_keeps_extension(self, tmp_path, config):
        assert target_path(_source(tmp_path, "custom", "use-stats.ts"), config) == (
            "src/components/custom/use-stats.ts"
        )

    def test_summary(self, tmp_path, config):
        source = _source(tmp_path, "custom", "chip.tsx")
        content = "variants: { variant: {} }"
        metadata = extract_metadata(content, "chip", config)

        entry = synthesize_entry(source, content, metadata, config, GENERATED_AT)

        assert entry.summary() == {
            "name": "chip",
            "type": "components:custom",
            "description": "Chip component",
            "version": "0.1.0",
            "hasVariants": True,
            "hasSizes": False,
        }


class TestReadSource:
    """Tests for verbatim source reading."""

    def test_crlf_preserved(self, tmp_path):
        """Line endings are not translated."""
        path = tmp_path / "src" / "components" / "ui" / "crlf.tsx"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"export const A = 1\r\nexport const B = 2\r\n")

        assert read_source(_source(tmp_path, "ui", "crlf.tsx")) == "export const A = 1\r\nexport const B = 2\r\n"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            read_source(_source(tmp_path, "ui", "gone.tsx"))


class TestSynthesizeAll:
    """Tests for per-component failure isolation."""

    def test_unreadable_file_isolated(self, component_project, config):
        """A file deleted after discovery fails alone."""
        sources = discover_components(config, component_project).sources
        (component_project / "src" / "components" / "ui" / "button.tsx").unlink()

        results = synthesize_all(sources, config, GENERATED_AT)

        assert [r.name for r in results] == ["alert", "button", "dialog", "stat-card"]
        assert [r.success for r in results] == [True, False, True, True]
        assert results[1].error.startswith("read failed")

    def test_non_utf8_file_fails(self, tmp_path, config):
        path = tmp_path / "src" / "components" / "ui" / "latin.tsx"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"export const Caf\xe9 = 1\n")

        result = synthesize_component(_source(tmp_path, "ui", "latin.tsx"), config, GENERATED_AT)

        assert not result.success
        assert result.entry is None


class TestWriteEntries:
    """Tests for unit persistence."""

    def test_write_entry_round_trips_content(self, component_project, config, tmp_path, alert_source):
        sources = discover_components(config, component_project).sources
        result = synthesize_component(sources[0], config, GENERATED_AT)
        components_dir = tmp_path / "registry" / "components"

        path = write_entry(result.entry, components_dir)

        assert path == components_dir / "alert.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["files"][0]["content"] == alert_source

    def test_write_failure_isolated(self, component_project, config, tmp_path):
        """An unwritable unit fails without stopping its siblings."""
        sources = discover_components(config, component_project).sources
        results = synthesize_all(sources, config, GENERATED_AT)
        components_dir = tmp_path / "registry" / "components"
        # A directory occupying button.json makes that one write fail
        (components_dir / "button.json").mkdir(parents=True)

        write_entries(results, components_dir)

        by_name = {r.name: r for r in results}
        assert not by_name["button"].success
        assert by_name["button"].error.startswith("write failed")
        for name in ["alert", "dialog", "stat-card"]:
            assert by_name[name].success
            assert (components_dir / f"{name}.json").is_file()
