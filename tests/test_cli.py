"""End-to-end tests for the command line entry point."""

import json
import os

import pytest

from stormrank.cli import explain, main

CSV_TEXT = (
    "EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n"
    "Tstm Wind,0,0,10,K,0,\n"
    "TORNADO F3,1,5,2,M,0,\n"
    "HURRICANE WIND,0,0,1,B,0,\n"
    "SPACE DEBRIS,0,1,9,H,0,\n"
)


@pytest.fixture
def csv_path(tmp_path):
    p = tmp_path / "storm.csv"
    p.write_text(CSV_TEXT, encoding="utf-8")
    return str(p)


class TestMain:
    def test_full_run(self, tmp_path, csv_path, capsys):
        out_dir = tmp_path / "out"
        json_path = tmp_path / "summary.json"
        code = main(["--csv", csv_path, "--out-dir", str(out_dir), "--export-json", str(json_path)])
        assert code == 0
        out = capsys.readouterr().out
        assert "Loaded 4 events in 4 categories." in out
        assert "HURRICANE" in out
        assert os.path.exists(out_dir / "harm_by_category.png")
        assert os.path.exists(out_dir / "top_categories.html")
        payload = json.loads(json_path.read_text(encoding="utf-8"))
        assert [p["category"] for p in payload] == ["HURRICANE", "TORNADO", "WIND", "SPACE DEBRIS"]

    def test_top_limits_printed_rows(self, tmp_path, csv_path, capsys):
        assert main(["--csv", csv_path, "--out-dir", str(tmp_path), "--top", "2"]) == 0
        out = capsys.readouterr().out
        assert "Top 2 categories" in out
        assert "  3. " not in out

    def test_explain_lists_unmatched(self, tmp_path, csv_path, capsys):
        assert main(["--csv", csv_path, "--out-dir", str(tmp_path), "--explain"]) == 0
        out = capsys.readouterr().out
        assert "Category rules (first match wins):" in out
        assert "Unmatched event types: 1" in out
        assert "SPACE DEBRIS" in out

    def test_missing_file_is_error(self, tmp_path, capsys):
        code = main(["--csv", str(tmp_path / "missing.csv"), "--out-dir", str(tmp_path)])
        assert code == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_missing_column_is_error(self, tmp_path, capsys):
        p = tmp_path / "bad.csv"
        p.write_text("EVTYPE,FATALITIES\nHAIL,0\n", encoding="utf-8")
        assert main(["--csv", str(p), "--out-dir", str(tmp_path)]) == 1
        assert "Missing required column" in capsys.readouterr().err

    def test_bad_top(self, csv_path):
        assert main(["--csv", csv_path, "--top", "0"]) == 2

    def test_csv_required_without_classify(self):
        with pytest.raises(SystemExit):
            main([])


    def test_header_only_file_runs_clean(self, tmp_path, capsys):
        p = tmp_path / "empty.csv"
        p.write_text("EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n", encoding="utf-8")
        out_dir = tmp_path / "out"
        assert main(["--csv", str(p), "--out-dir", str(out_dir)]) == 0
        assert "Loaded 0 events in 0 categories." in capsys.readouterr().out
        assert os.path.exists(out_dir / "harm_by_category.png")
        assert os.path.exists(out_dir / "top_categories.html")

    def test_infinite_cells_do_not_abort(self, tmp_path, capsys):
        p = tmp_path / "inf.csv"
        p.write_text(
            "EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n"
            "HAIL,inf,0,1,K,0,\n",
            encoding="utf-8",
        )
        assert main(["--csv", str(p), "--out-dir", str(tmp_path / "out")]) == 0
        assert "damage=$1,000" in capsys.readouterr().out


class TestClassify:
    def test_classify_without_csv(self, capsys):
        assert main(["--classify", "Wind Chill", "--classify", "space debris"]) == 0
        out = capsys.readouterr().out
        assert "'Wind Chill' -> 'COLD' (rule 7)" in out
        assert "'space debris' -> 'SPACE DEBRIS' (no rule, passthrough)" in out

    def test_explain_rule_number(self):
        assert explain("HURRICANE WIND") == "'HURRICANE WIND' -> 'HURRICANE' (rule 2)"
        assert explain("STRONG WIND") == "'STRONG WIND' -> 'WIND' (rule 12)"
