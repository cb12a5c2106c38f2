"""Tests for tab-separated edge input and recommendation output."""

from __future__ import annotations

import pytest

from neighborgraph.exceptions import MalformedRecordError
from neighborgraph.graph import Edge
from neighborgraph.io import parse_edge_line, read_edges, write_recommendations
from neighborgraph.recommend import Recommendation


class TestParseEdgeLine:
    def test_three_fields_keeps_weight(self):
        assert parse_edge_line("a\tb\t0.5\n") == Edge("a", "b", "0.5")

    def test_two_fields_without_weight(self):
        assert parse_edge_line("a\tb") == Edge("a", "b", None)

    def test_crlf_stripped(self):
        assert parse_edge_line("a\tb\t1\r\n") == Edge("a", "b", "1")

    @pytest.mark.parametrize("line", ["a", "a b c", "a\tb\tc\td"])
    def test_wrong_field_count(self, line):
        with pytest.raises(MalformedRecordError):
            parse_edge_line(line)

    @pytest.mark.parametrize("line", ["\tb\t1", "a\t\t1", " \tb"])
    def test_empty_id(self, line):
        with pytest.raises(MalformedRecordError, match="empty vertex ID"):
            parse_edge_line(line)

    def test_error_carries_line_number(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            parse_edge_line("oops", line_number=7)
        assert exc_info.value.line_number == 7
        assert exc_info.value.line == "oops"
        assert "line 7" in str(exc_info.value)


class TestReadEdges:
    def test_reads_all_edges(self, edge_file):
        edges = read_edges(edge_file)
        assert len(edges) == 6
        assert edges[0] == Edge("A", "B", "1.0")

    def test_skips_blank_lines(self, tmp_path):
        path = tmp_path / "edges.tsv"
        path.write_text("a\tb\t1\n\n  \nb\tc\t1\n", encoding="utf-8")
        assert [(e.source_id, e.target_id) for e in read_edges(path)] == [("a", "b"), ("b", "c")]

    def test_malformed_line_aborts(self, tmp_path):
        path = tmp_path / "edges.tsv"
        path.write_text("a\tb\t1\nbroken\nb\tc\t1\n", encoding="utf-8")
        with pytest.raises(MalformedRecordError) as exc_info:
            read_edges(path)
        assert exc_info.value.line_number == 2

    def test_invalid_utf8_names_line(self, tmp_path):
        path = tmp_path / "edges.tsv"
        path.write_bytes(b"A\tB\t1\n\xff\xfe\tC\t1\n")
        with pytest.raises(MalformedRecordError, match="invalid UTF-8") as exc_info:
            read_edges(path)
        assert exc_info.value.line_number == 2
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_utf8_ids_preserved(self, tmp_path):
        path = tmp_path / "edges.tsv"
        path.write_text("Zoë\tJosé\t1\n", encoding="utf-8")
        assert read_edges(path) == [Edge("Zoë", "José", "1")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_edges(tmp_path / "missing.tsv")


class TestWriteRecommendations:
    def test_writes_tab_separated_rows(self, tmp_path):
        path = tmp_path / "out.tsv"
        count = write_recommendations(
            path, [Recommendation("A", "D", 2), Recommendation("A", "E", 2)]
        )
        assert count == 2
        assert path.read_text(encoding="utf-8") == "A\tD\nA\tE\n"

    def test_empty_output_file(self, tmp_path):
        path = tmp_path / "out.tsv"
        assert write_recommendations(path, []) == 0
        assert path.read_text(encoding="utf-8") == ""

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "out.tsv"
        write_recommendations(path, [Recommendation("a", "b")])
        assert path.exists()

    def test_replaces_existing_file(self, tmp_path):
        path = tmp_path / "out.tsv"
        path.write_text("stale\n", encoding="utf-8")
        write_recommendations(path, [Recommendation("a", "b")])
        assert path.read_text(encoding="utf-8") == "a\tb\n"

    def test_failure_leaves_no_partial_output(self, tmp_path):
        path = tmp_path / "out.tsv"

        def records():
            yield Recommendation("a", "b")
            raise RuntimeError("stage failed")

        with pytest.raises(RuntimeError):
            write_recommendations(path, records())
        assert not path.exists()
        assert list(tmp_path.iterdir()) == []
