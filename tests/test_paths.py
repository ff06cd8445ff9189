"""Tests for path resolution utilities."""

from pathlib import Path

from npcforge.utils import display_path, resolve_relative_to


class TestResolveRelativeTo:
    """Tests for resolve_relative_to function."""

    def test_relative_path_resolved(self):
        """Relative paths should be resolved against base file's directory."""
        result = resolve_relative_to("names.txt", Path("/campaign/npcs/blueprints.yaml"))
        assert result == Path("/campaign/npcs/names.txt")

    def test_absolute_path_unchanged(self):
        """Absolute paths should be returned unchanged."""
        result = resolve_relative_to("/abs/lists/names.txt", Path("/campaign/blueprints.yaml"))
        assert result == Path("/abs/lists/names.txt")

    def test_nested_relative_path(self):
        result = resolve_relative_to("lists/names.txt", Path("/campaign/blueprints.yaml"))
        assert result == Path("/campaign/lists/names.txt")

    def test_parent_relative_path(self):
        """Parent-relative paths (../) should resolve correctly."""
        result = resolve_relative_to(
            "../shared/names.txt", Path("/campaign/npcs/blueprints.yaml")
        )
        assert result == Path("/campaign/shared/names.txt")

    def test_home_expanded(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        result = resolve_relative_to("~/names.txt", Path("/campaign/blueprints.yaml"))
        assert result == tmp_path / "names.txt"


class TestDisplayPath:
    def test_inside_base_dir(self, tmp_path):
        path = tmp_path / "lists" / "names.txt"
        assert display_path(path, tmp_path) == str(Path("lists") / "names.txt")

    def test_outside_base_dir(self, tmp_path):
        other = tmp_path / "a"
        base = tmp_path / "b"
        assert display_path(other, base) == str(other.resolve())
