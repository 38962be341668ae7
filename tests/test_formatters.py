"""Tests for detail/summary encoders, output targets and the compare report."""

import csv
import io
import json
import logging

import pytest

from git_critic.diff import FileComparison
from git_critic.exceptions import FatalInputError
from git_critic.formatters import (
    CompareReportFormatter,
    StructuredFormatter,
    TabularFormatter,
    get_formatter,
    open_output,
)
from git_critic.models import DETAIL_HEADER, SUMMARY_HEADER, FileStatistics, ViolationSet

ROWS = [
    ("lib/Foo.pm", 3, 'Quotes "inside", and commas', "See page 1", 4, "abc123"),
    ("lib/Bar.pm", 9, "Plain", "", 1, "abc123"),
]


class TestTabularFormatter:
    def test_header_then_rows(self):
        text = TabularFormatter().format(ROWS, DETAIL_HEADER)
        parsed = list(csv.reader(io.StringIO(text)))
        assert parsed[0] == list(DETAIL_HEADER)
        assert parsed[1] == ["lib/Foo.pm", "3", 'Quotes "inside", and commas', "See page 1", "4", "abc123"]
        assert len(parsed) == 3

    def test_summary_rows_round_trip(self):
        stats = [
            FileStatistics(
                filename='lib/Say "hi", again.pm',
                severity_counts={1: 4, 3: 1, 5: 2},
                lines=1205,
                avg_mccabe=2.3333,
                subs=7,
                violations=7,
                commit="abc123",
            ),
            FileStatistics(filename="bin/plain.pl", lines=12, commit="abc123"),
        ]
        rows = [s.as_row() for s in stats]

        parsed = list(csv.reader(io.StringIO(TabularFormatter().format(rows, SUMMARY_HEADER))))

        assert parsed[0] == list(SUMMARY_HEADER)
        assert parsed[1] == [
            'lib/Say "hi", again.pm', "4", "0", "1", "0", "2", "1205", "2.33", "7", "7", "abc123",
        ]
        assert parsed[2] == ["bin/plain.pl", "0", "0", "0", "0", "0", "12", "0", "0", "0", "abc123"]
        assert [tuple(str(v) for v in row) for row in rows] == [tuple(r) for r in parsed[1:]]

    def test_no_rows_is_header_only(self):
        assert TabularFormatter().format([], SUMMARY_HEADER) == ",".join(SUMMARY_HEADER) + "\n"


class TestStructuredFormatter:
    def test_objects_keyed_by_header(self):
        records = json.loads(StructuredFormatter().format(ROWS, DETAIL_HEADER))
        assert len(records) == 2
        assert records[0]["file"] == "lib/Foo.pm"
        assert records[0]["line_number"] == 3
        assert records[1]["severity"] == 1
        assert list(records[0]) == list(DETAIL_HEADER)

    def test_empty(self):
        assert json.loads(StructuredFormatter().format([], DETAIL_HEADER)) == []


class TestGetFormatter:
    @pytest.mark.parametrize("name,cls", [("csv", TabularFormatter), ("JSON", StructuredFormatter), ("", StructuredFormatter)])
    def test_known_names(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_unknown_name_falls_back_to_json(self, caplog):
        with caplog.at_level(logging.WARNING, logger="git_critic"):
            formatter = get_formatter("yaml")
        assert isinstance(formatter, StructuredFormatter)
        assert 'invalid format yaml using "json"' in caplog.text


class TestOpenOutput:
    def test_writes_file(self, tmp_path):
        path = tmp_path / "out.csv"
        with open_output(str(path)) as fh:
            TabularFormatter().render(ROWS, DETAIL_HEADER, fh)
        assert path.read_text().startswith("file,line_number")

    def test_file_closed_on_error(self, tmp_path):
        path = tmp_path / "out.json"
        with pytest.raises(RuntimeError):
            with open_output(str(path)) as fh:
                fh.write("partial")
                raise RuntimeError("boom")
        assert fh.closed
        assert path.read_text() == "partial"

    def test_stdout_stays_open(self, capsys):
        with open_output(None) as fh:
            fh.write("hello\n")
        assert not fh.closed
        assert capsys.readouterr().out == "hello\n"

    def test_unwritable_path(self, tmp_path):
        with pytest.raises(FatalInputError):
            with open_output(str(tmp_path / "missing-dir" / "out.csv")):
                pass


class TestCompareReportFormatter:
    def test_report_sections(self, make_violation):
        old = make_violation(policy="A::Gone", line=2, description="old thing", filename="f.pl")
        kept = make_violation(policy="B::Kept", line=3, description="kept", filename="f.pl")
        new = make_violation(policy="C::New", line=5, description="new thing", filename="f.pl")
        comparison = FileComparison.build("f.pl", ViolationSet([old, kept]), ViolationSet([kept, new]))

        out = io.StringIO()
        CompareReportFormatter(verbose=8, width=10).render([comparison], out)
        lines = out.getvalue().splitlines()

        assert lines[0] == "-" * 10
        assert lines[1] == "f.pl - removed: [1] added: [1]"
        assert lines[2] == "-" * 10
        assert lines[3] == "\t[*] [B::Kept] kept at line 3, column 1.  (Severity: 5)"
        assert lines[4] == "\t[*] [C::New] new thing at line 5, column 1.  (Severity: 5)"
        assert lines[5] == "-" * 10
        assert lines[6] == "\t[+] [C::New] new thing at line 5, column 1.  (Severity: 5)"
        assert lines[7] == "-" * 10
        assert lines[8] == "\t[-] [A::Gone] old thing at line 2, column 1.  (Severity: 5)"
        assert len(lines) == 9

    def test_unchanged_file_has_no_diff_sections(self, make_violation):
        v = make_violation(filename="f.pl")
        comparison = FileComparison.build("f.pl", ViolationSet([v]), ViolationSet([v]))
        out = io.StringIO()
        CompareReportFormatter(verbose=1).render_file(comparison, out)
        assert out.getvalue().count("-" * 80) == 2
        assert "[+]" not in out.getvalue()
        assert "[-]" not in out.getvalue()
