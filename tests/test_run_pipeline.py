"""
Smoke tests for the command-line pipeline.
"""
import json

from conftest import make_raw_record
from nof1_engine.run_pipeline import main, run_pipeline


class TestRunPipeline:
    """Test the full pipeline on the bundled sample week."""

    def test_sample_bundle(self, tmp_path):
        out = tmp_path / "profile.json"
        bundle = run_pipeline(seed=42, query="deep sleep", output_path=out)

        assert set(bundle) == {"user", "causal_graph", "profile", "recommendation"}
        assert bundle["causal_graph"]["edges"] == 101
        assert bundle["profile"]["personal_summary"].startswith("Your 7-day N-of-1 data analysis:")
        assert json.loads(out.read_text(encoding="utf-8"))["user"] == bundle["user"]

    def test_seeded_runs_match(self, tmp_path):
        a = run_pipeline(seed=5, output_path=tmp_path / "a.json")
        b = run_pipeline(seed=5, output_path=tmp_path / "b.json")
        assert a == b


class TestMain:
    """Test exit codes."""

    def test_success(self, tmp_path, capsys):
        out = tmp_path / "out.json"
        assert main(["--output", str(out), "--mermaid"]) == 0
        assert out.exists()
        assert "graph LR" in capsys.readouterr().out

    def test_insufficient_data(self, tmp_path, capsys):
        path = tmp_path / "short.json"
        path.write_text(json.dumps({"daily_records": [make_raw_record(day=i) for i in range(2)]}))

        assert main(["--input", str(path), "--output", str(tmp_path / "out.json")]) == 1
        err = capsys.readouterr().err
        assert "Collect at least 1 more day(s)" in err
        assert not (tmp_path / "out.json").exists()

    def test_malformed_records(self, tmp_path, capsys):
        bad = make_raw_record(day=1)
        bad["nutrition"]["caffeine_mg"] = -20
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"daily_records": [make_raw_record(day=0), bad, make_raw_record(day=2)]}))

        assert main(["--input", str(path), "--output", str(tmp_path / "out.json")]) == 1
        err = capsys.readouterr().err
        assert "Invalid input file: record 1: caffeine_mg=-20.0 is negative" in err
        assert not (tmp_path / "out.json").exists()

    def test_unknown_csv_column(self, tmp_path, capsys):
        path = tmp_path / "bad.csv"
        path.write_text("date,mood\n2024-03-04,3\n")

        assert main(["--input", str(path), "--output", str(tmp_path / "out.json")]) == 1
        assert "Unknown column key(s): mood" in capsys.readouterr().err
