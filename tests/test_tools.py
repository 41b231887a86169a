"""Tests for outline tool implementations."""

import os

import pytest

from orgoutline.security import ROOT_ENV_VAR
from orgoutline.tools.common import line_count
from orgoutline.tools.get_outline import get_outline
from orgoutline.tools.get_section import get_section, get_sections
from orgoutline.tools.list_org_files import discover_org_files, list_org_files
from orgoutline.tools.search_sections import score_section, search_sections
from orgoutline.parser import Section


class TestListOrgFiles:
    def test_basic(self, root_dir):
        result = list_org_files(root=str(root_dir))
        assert "error" not in result
        assert result["path"] == "."
        assert result["files"] == ["notes.org", "projects/alpha.org"]
        assert result["count"] == 2

    def test_subdirectory_prefix(self, root_dir):
        result = list_org_files(path="projects", root=str(root_dir))
        assert result["files"] == ["projects/alpha.org"]

    def test_gitignore_respected(self, root_dir):
        files = discover_org_files(str(root_dir))
        assert not any(f.startswith("archive/") for f in files)

    def test_extra_ignore_patterns(self, root_dir):
        files = discover_org_files(str(root_dir), extra_ignore_patterns=["projects/"])
        assert files == ["notes.org"]

    def test_max_depth(self, root_dir):
        files = discover_org_files(str(root_dir), max_depth=0)
        assert files == ["notes.org"]

    def test_sensitive_files_skipped(self, root_dir_with_secrets):
        files = discover_org_files(str(root_dir_with_secrets))
        assert "secrets.org" not in files
        assert "clean.org" in files

    def test_outside_root(self, root_dir):
        result = list_org_files(path="..", root=str(root_dir))
        assert "error" in result

    def test_missing_directory(self, root_dir):
        result = list_org_files(path="nope", root=str(root_dir))
        assert "error" in result

    def test_root_from_environment(self, root_dir, monkeypatch):
        monkeypatch.setenv(ROOT_ENV_VAR, str(root_dir))
        result = list_org_files()
        assert result["count"] == 2

    @pytest.mark.skipif(os.name == 'nt', reason="Symlinks require admin on Windows")
    def test_symlink_outside_skipped(self, tmp_path):
        base = tmp_path / "base"
        base.mkdir()
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "private.org").write_text("* Private\n")
        (base / "link").symlink_to(outside)
        (base / "normal.org").write_text("* Normal\n")

        assert discover_org_files(str(base)) == ["normal.org"]
        assert discover_org_files(str(base), follow_symlinks=True) == ["normal.org"]

    def test_root_gitignore_applies_to_subdirectory(self, root_dir):
        (root_dir / ".gitignore").write_text("archive/\nprivate.org\n")
        (root_dir / "projects" / "private.org").write_text("* Private\n")

        from_root = list_org_files(root=str(root_dir))
        from_subdir = list_org_files(path="projects", root=str(root_dir))
        assert "projects/private.org" not in from_root["files"]
        assert from_subdir["files"] == ["projects/alpha.org"]

    def test_listing_ignored_directory(self, root_dir):
        result = list_org_files(path="archive", root=str(root_dir))
        assert result["files"] == []

    def test_subdirectory_gitignore_not_used(self, root_dir):
        (root_dir / "projects" / ".gitignore").write_text("alpha.org\n")
        result = list_org_files(path="projects", root=str(root_dir))
        assert result["files"] == ["projects/alpha.org"]

    def test_ignore_root_must_contain_base(self, root_dir, tmp_path_factory):
        other = tmp_path_factory.mktemp("other")
        with pytest.raises(ValueError):
            discover_org_files(str(root_dir), ignore_root=str(other))


class TestGetOutline:
    def test_basic(self, root_dir):
        result = get_outline("notes.org", root=str(root_dir))
        assert "error" not in result
        assert result["file"] == "notes.org"
        assert result["section_count"] == 9
        outline = result["outline"]
        assert [n["title"] for n in outline] == ["Getting Started", "API Reference", "Changelog"]
        assert [n["id"] for n in outline[0]["children"]] == ["1.1", "1.2"]
        assert outline[0]["children"][1]["children"][0]["title"] == "Basic Config"

    def test_no_bodies(self, root_dir):
        result = get_outline("notes.org", root=str(root_dir))
        assert "body" not in result["outline"][0]

    def test_line_count(self, root_dir):
        result = get_outline("projects/alpha.org", root=str(root_dir))
        alpha = result["outline"][0]
        assert alpha["line_count"] == 1
        assert alpha["children"][0]["line_count"] == 2

    def test_max_depth(self, root_dir):
        result = get_outline("notes.org", max_depth=1, root=str(root_dir))
        assert len(result["outline"]) == 3
        assert all(n["children"] == [] for n in result["outline"])

    def test_max_depth_prunes_gaps(self, root_dir):
        result = get_outline("notes.org", max_depth=3, root=str(root_dir))
        auth = result["outline"][1]["children"][0]
        assert auth["title"] == "Authentication"
        assert auth["children"] == []

    def test_file_not_found(self, root_dir):
        result = get_outline("missing.org", root=str(root_dir))
        assert "error" in result

    def test_traversal_refused(self, root_dir):
        result = get_outline("../elsewhere.org", root=str(root_dir))
        assert "outside" in result["error"]

    def test_secrets_refused(self, root_dir_with_secrets):
        result = get_outline("keys.org", root=str(root_dir_with_secrets))
        assert "AWS access key" in result["error"]

    def test_sensitive_name_refused(self, root_dir_with_secrets):
        result = get_outline("secrets.org", root=str(root_dir_with_secrets))
        assert "sensitive" in result["error"]

    def test_deep_outline(self, tmp_path):
        lines = [f"{'*' * d} level {d}" for d in range(1, 151)]
        (tmp_path / "deep.org").write_text("\n".join(lines) + "\n")
        result = get_outline("deep.org", root=str(tmp_path))
        assert "error" not in result
        assert result["section_count"] == 150

        node = result["outline"][0]
        levels = 1
        while node["children"]:
            node = node["children"][0]
            levels += 1
        assert levels == 150
        assert node["id"] == ".".join(["1"] * 150)
        assert node["title"] == "level 150"

    def test_too_deep_outline_reports_error(self, tmp_path):
        lines = [f"{'*' * d} level {d}" for d in range(1, 1201)]
        (tmp_path / "deep.org").write_text("\n".join(lines) + "\n")
        result = get_outline("deep.org", root=str(tmp_path))
        assert "nests deeper" in result["error"]
        assert result["file"] == "deep.org"

    def test_too_deep_outline_allowed_with_max_depth(self, tmp_path):
        lines = [f"{'*' * d} level {d}" for d in range(1, 1201)]
        (tmp_path / "deep.org").write_text("\n".join(lines) + "\n")
        result = get_outline("deep.org", max_depth=3, root=str(tmp_path))
        assert "error" not in result
        assert result["outline"][0]["children"][0]["children"][0]["children"] == []

    def test_line_count_ignores_other_separators(self, tmp_path):
        (tmp_path / "sep.org").write_text("* Page\none\fstill one same\nlast")
        result = get_outline("sep.org", root=str(tmp_path))
        assert result["outline"][0]["line_count"] == 3

    @pytest.mark.parametrize("body,expected", [
        ("", 1),
        ("a\nb", 3),
        ("a\nb\n", 3),
        ("a\fb\u2028c\x1cd\n", 2),
    ])
    def test_line_count_counts_newlines(self, body, expected):
        assert line_count(Section(depth=1, title="x", body=body)) == expected


class TestGetSection:
    def test_retrieve_section(self, root_dir):
        result = get_section("notes.org", "1.1", root=str(root_dir))
        assert "error" not in result
        assert result["title"] == "Installation"
        assert result["depth"] == 2
        assert result["heading"] == "** Installation"
        assert result["body"] == "Install with pip:\n\n  pip install my-package\n\n"
        assert result["path"] == ["1", "1.1"]
        assert result["children"] == []

    def test_children_ids(self, root_dir):
        result = get_section("notes.org", "1.2", root=str(root_dir))
        assert result["children"] == ["1.2.1", "1.2.2"]

    def test_section_not_found(self, root_dir):
        result = get_section("notes.org", "7", root=str(root_dir))
        assert "error" in result

    def test_batch(self, root_dir):
        result = get_sections("notes.org", ["1", "2.1.1", "bad"], root=str(root_dir))
        assert [s["title"] for s in result["sections"]] == ["Getting Started", "GET /users"]
        assert result["errors"] == [{"id": "bad", "error": "Section not found: bad"}]

    def test_batch_no_errors(self, root_dir):
        result = get_sections("notes.org", ["3"], root=str(root_dir))
        assert result["errors"] is None

    def test_unusual_digit_id(self, root_dir):
        result = get_section("notes.org", "²", root=str(root_dir))
        assert result == {"error": "Section not found: ²"}

    def test_batch_reads_file_once(self, root_dir, monkeypatch):
        import importlib

        get_section_module = importlib.import_module("orgoutline.tools.get_section")

        calls = []
        original = get_section_module.load_document

        def counting_load(file_path, root=None):
            calls.append(file_path)
            return original(file_path, root)

        monkeypatch.setattr(get_section_module, "load_document", counting_load)
        result = get_sections("notes.org", ["1", "1.1", "2", "3"], root=str(root_dir))
        assert len(result["sections"]) == 4
        assert calls == ["notes.org"]

    def test_batch_file_error(self, root_dir):
        result = get_sections("missing.org", ["1"], root=str(root_dir))
        assert "error" in result


class TestSearchSections:
    def test_title_match_ranks_first(self, root_dir):
        result = search_sections("notes.org", "config", root=str(root_dir))
        assert result["result_count"] > 0
        titles = [r["title"] for r in result["results"]]
        assert titles[0] in {"Configuration", "Basic Config", "Advanced Config"}
        assert "Installation" not in titles

    def test_body_match(self, root_dir):
        result = search_sections("notes.org", "bearer", root=str(root_dir))
        assert [r["id"] for r in result["results"]] == ["2.1"]

    def test_max_results(self, root_dir):
        result = search_sections("notes.org", "config", max_results=1, root=str(root_dir))
        assert result["result_count"] == 1

    def test_max_depth(self, root_dir):
        result = search_sections("notes.org", "users", max_depth=2, root=str(root_dir))
        assert result["results"] == []

    def test_empty_query(self, root_dir):
        result = search_sections("notes.org", "   ", root=str(root_dir))
        assert "error" in result

    def test_score_section(self):
        section = Section(depth=1, title="Install guide", body="run the installer\n")
        assert score_section(section, "install") == 10 + 3 + 5 + 1
        assert score_section(section, "nothing") == 0
