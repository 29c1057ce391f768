"""Tests for canonical document and pointer rendering."""

from __future__ import annotations

from rulesync.core.models import StatsRecord
from rulesync.render import (
    POINTER_MARKER,
    render_pointer_content,
    render_rules_content,
)

STAT_LABELS = ["Files", "Symbols", "Relationships", "Communities", "Processes"]


class TestRenderRulesContent:
    def test_empty_stats_render_as_zero(self):
        """Every count renders as 0 when the stats mapping is empty."""
        content = render_rules_content("Foo", {})
        for label in STAT_LABELS:
            assert f"- {label}: 0\n" in content

    def test_missing_stats_argument(self):
        """Stats can be omitted entirely."""
        content = render_rules_content("Foo")
        assert "- Files: 0\n" in content
        assert "- Processes: 0\n" in content

    def test_none_counts_render_as_zero(self):
        content = render_rules_content("Foo", {"files": None, "nodes": 7})
        assert "- Files: 0\n" in content
        assert "- Symbols: 7\n" in content

    def test_record_with_none_field(self):
        content = render_rules_content("Foo", StatsRecord(files=None))  # type: ignore[arg-type]
        assert "- Files: 0\n" in content

    def test_counts_substituted(self):
        stats = StatsRecord(files=10, nodes=50, edges=120, communities=4, processes=9)
        content = render_rules_content("Demo", stats)

        assert "- Files: 10\n" in content
        assert "- Symbols: 50\n" in content
        assert "- Relationships: 120\n" in content
        assert "- Communities: 4\n" in content
        assert "- Processes: 9\n" in content

    def test_mapping_and_record_render_identically(self):
        mapping = {"files": 3, "edges": 2}
        assert render_rules_content("X", mapping) == render_rules_content("X", StatsRecord(files=3, edges=2))

    def test_negative_counts_pass_through(self):
        content = render_rules_content("Foo", {"files": -3})
        assert "- Files: -3\n" in content

    def test_project_name_in_header(self):
        content = render_rules_content("My Project", {})
        assert content.startswith("# GitNexus MCP Integration\n")
        assert "## Project: My Project\n" in content

    def test_project_name_with_braces_is_verbatim(self):
        content = render_rules_content("{weird}", {})
        assert "## Project: {weird}\n" in content

    def test_cypher_example_keeps_braces(self):
        content = render_rules_content("Foo", {})
        assert "{type: 'CALLS'}" in content
        assert '{name: "myFunction"}' in content

    def test_lists_every_tool(self):
        content = render_rules_content("Foo", {})
        for tool in ("context", "search", "cypher", "overview", "explore", "impact"):
            assert f"### `{tool}`" in content

    def test_deterministic(self):
        stats = {"files": 1, "nodes": 2}
        assert render_rules_content("Foo", stats) == render_rules_content("Foo", stats)

    def test_ends_with_newline(self):
        assert render_rules_content("Foo", {}).endswith("\n")


class TestRenderPointerContent:
    def test_mentions_marker(self):
        assert POINTER_MARKER in render_pointer_content()

    def test_constant(self):
        assert render_pointer_content() == render_pointer_content()

    def test_heading(self):
        content = render_pointer_content()
        assert content.startswith("# AI Agent Rules\n")
        assert content.endswith("\n")

    def test_marker_is_canonical_relative_path(self):
        assert POINTER_MARKER == ".gitnexus/RULES.md"
