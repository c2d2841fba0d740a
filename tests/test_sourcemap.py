"""Tests for source map decoding (parsing/sourcemap.py)."""

from __future__ import annotations

import pytest

from jswaste.parsing.sourcemap import SourceMap, SourceMapError, parse_vlq
from tests.builders import THREE_FILE_CONTENT, THREE_FILE_MAP

# ── parse_vlq ────────────────────────────────────────────────────


class TestParseVlq:
    def test_single_values(self) -> None:
        assert parse_vlq("A") == [0]
        assert parse_vlq("C") == [1]
        assert parse_vlq("D") == [-1]

    def test_multi_digit_values(self) -> None:
        assert parse_vlq("gqjG") == [100000]
        assert parse_vlq("hqjG") == [-100000]
        assert parse_vlq("/+Z") == [-13295]

    def test_sequence(self) -> None:
        assert parse_vlq("DFLx+BhqjG") == [-1, -2, -5, -1000, -100000]
        assert parse_vlq("CEKw+BgqjG") == [1, 2, 5, 1000, 100000]

    def test_invalid_character_raises(self) -> None:
        with pytest.raises(SourceMapError, match="Invalid base64"):
            parse_vlq("A*")

    def test_truncated_segment_raises(self) -> None:
        with pytest.raises(SourceMapError, match="Truncated"):
            parse_vlq("g")


# ── SourceMap.find_entry ─────────────────────────────────────────


class TestFindEntry:
    def test_resolves_each_line_to_its_source(self) -> None:
        source_map = SourceMap(THREE_FILE_MAP)

        assert source_map.find_entry(0, 0).source_url == "a.js"
        assert source_map.find_entry(0, 1499).source_url == "a.js"
        assert source_map.find_entry(1, 10).source_url == "b.js"
        assert source_map.find_entry(2, 0).source_url == "c.js"

    def test_position_after_last_mapping_uses_last_entry(self) -> None:
        source_map = SourceMap(THREE_FILE_MAP)
        assert source_map.find_entry(40, 0).source_url == "c.js"

    def test_position_before_first_mapping_is_none(self) -> None:
        # first mapping at line 1 column 4 ("EAAA" after an empty line)
        source_map = SourceMap({"version": 3, "sources": ["x.js"], "mappings": ";IAAA"})

        assert source_map.find_entry(0, 0) is None
        assert source_map.find_entry(1, 3) is None
        assert source_map.find_entry(1, 4).source_url == "x.js"

    def test_columns_accumulate_within_a_line(self) -> None:
        # col 0 -> a.js, col 10 -> b.js
        raw = {"version": 3, "sources": ["a.js", "b.js"], "mappings": "AAAA,UCAA"}
        source_map = SourceMap(raw)

        assert source_map.find_entry(0, 9).source_url == "a.js"
        assert source_map.find_entry(0, 10).source_url == "b.js"

    def test_unmapped_segment_has_no_source(self) -> None:
        raw = {"version": 3, "sources": ["a.js"], "mappings": "AAAA,K"}
        source_map = SourceMap(raw)

        entry = source_map.find_entry(0, 7)
        assert entry is not None
        assert entry.column == 5
        assert entry.source_url is None

    def test_names_are_decoded(self) -> None:
        raw = {"version": 3, "sources": ["a.js"], "names": ["init"], "mappings": "AAAAA"}
        entry = SourceMap(raw).find_entry(0, 0)

        assert entry.name == "init"
        assert (entry.source_line, entry.source_column) == (0, 0)

    def test_source_root_and_map_url_resolve_sources(self) -> None:
        raw = {"version": 3, "sourceRoot": "src", "sources": ["app.js"], "mappings": "AAAA"}
        source_map = SourceMap(raw, "https://cdn.example.com/js/bundle.js.map")

        assert source_map.find_entry(0, 0).source_url == "https://cdn.example.com/js/src/app.js"

    def test_index_map_sections_are_offset(self) -> None:
        raw = {
            "version": 3,
            "sections": [
                {
                    "offset": {"line": 0, "column": 0},
                    "map": {"version": 3, "sources": ["first.js"], "mappings": "AAAA"},
                },
                {
                    "offset": {"line": 2, "column": 8},
                    "map": {"version": 3, "sources": ["second.js"], "mappings": "AAAA"},
                },
            ],
        }
        source_map = SourceMap(raw)

        assert source_map.find_entry(2, 7).source_url == "first.js"
        assert source_map.find_entry(2, 8).source_url == "second.js"

    def test_non_string_mappings_raise(self) -> None:
        with pytest.raises(SourceMapError):
            SourceMap({"version": 3, "sources": [], "mappings": 42})

    @pytest.mark.parametrize(
        "sections",
        [
            None,
            [None],
            [{"offset": None, "map": {"mappings": "AAAA"}}],
            [{"offset": {"line": 0, "column": 0}, "map": None}],
        ],
    )
    def test_malformed_sections_raise(self, sections: object) -> None:
        with pytest.raises(SourceMapError):
            SourceMap({"version": 3, "sections": sections})


# ── compute_generated_file_sizes ─────────────────────────────────


class TestGeneratedFileSizes:
    def test_one_file_per_line(self) -> None:
        sizes = SourceMap(THREE_FILE_MAP).compute_generated_file_sizes(THREE_FILE_CONTENT)

        assert sizes.files == {"a.js": 1500, "b.js": 1200, "c.js": 500}
        assert sizes.total_bytes == len(THREE_FILE_CONTENT)
        # the two newline characters belong to no mapping
        assert sizes.unmapped_bytes == 2

    def test_mapping_owns_bytes_until_next_mapping(self) -> None:
        raw = {"version": 3, "sources": ["a.js", "b.js"], "mappings": "AAAA,UCAA"}
        sizes = SourceMap(raw).compute_generated_file_sizes("x" * 25)

        assert sizes.files == {"a.js": 10, "b.js": 15}
        assert sizes.unmapped_bytes == 0

    def test_unmapped_segment_leaves_bytes_unmapped(self) -> None:
        raw = {"version": 3, "sources": ["a.js"], "mappings": "AAAA,U"}
        sizes = SourceMap(raw).compute_generated_file_sizes("x" * 25)

        assert sizes.files == {"a.js": 10}
        assert sizes.unmapped_bytes == 15

    def test_mapping_past_end_of_content_invalidates_sizes(self) -> None:
        sizes = SourceMap(THREE_FILE_MAP).compute_generated_file_sizes("short")

        assert sizes.files == {}
        assert sizes.unmapped_bytes == 5
        assert sizes.total_bytes == 5

    def test_column_past_end_of_line_invalidates_sizes(self) -> None:
        raw = {"version": 3, "sources": ["a.js"], "mappings": "UAAA"}
        sizes = SourceMap(raw).compute_generated_file_sizes("abc")

        assert sizes.files == {}
        assert sizes.unmapped_bytes == 3
