"""
Tests for the command-line report.

Usage:
    python -m pytest tests/test_cli.py -v
"""

import csv
import json

import pytest

from conftest import AI_TEXT, HUMAN_TEXT, StubTagger


class TestAnalyzeTextCli:

    def test_json_output(self, capsys):
        from analyze_text import main
        main(["--text", AI_TEXT, "--text", HUMAN_TEXT, "--labels", "AI", "H", "--no-pos", "--json"])
        output = json.loads(capsys.readouterr().out)

        assert [s["name"] for s in output["samples"]] == ["Pasted Text 1", "Pasted Text 2"]
        assert [s["external_label"] for s in output["samples"]] == ["Machine", "Human"]
        assert output["samples"][0]["partial"] is True
        assert output["corpus"]["confusion"]["labelled"] == 2

    def test_files_and_failures(self, tmp_path, capsys):
        from analyze_text import main
        essay = tmp_path / "essay.txt"
        essay.write_text(HUMAN_TEXT, encoding="utf-8")
        broken = tmp_path / "broken.png"
        broken.write_bytes(b"\x89PNG")

        main([str(essay), str(broken), "--no-pos", "--json"])
        captured = capsys.readouterr()
        output = json.loads(captured.out)

        assert [s["name"] for s in output["samples"]] == ["essay.txt"]
        assert output["failures"][0]["filename"] == "broken.png"
        assert "broken.png" in captured.err

    def test_csv_export(self, tmp_path, capsys):
        from analyze_text import main
        path = tmp_path / "records.csv"
        main(["--text", AI_TEXT, "--no-pos", "--tiers", "tier1", "--csv", str(path)])

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 1
        assert "tier1.burstiness" in rows[0]
        assert "risk.overall_risk" in rows[0]
        assert "ANALYSIS COMPLETE" in capsys.readouterr().out

    def test_label_count_mismatch(self):
        from analyze_text import main
        with pytest.raises(SystemExit):
            main(["--text", AI_TEXT, "--labels", "H", "AI", "--no-pos"])

    def test_invalid_threshold(self):
        from analyze_text import main
        with pytest.raises(SystemExit):
            main(["--text", AI_TEXT, "--cv-threshold", "-1", "--no-pos"])

    def test_unknown_tier(self):
        from analyze_text import main
        with pytest.raises(SystemExit):
            main(["--text", AI_TEXT, "--tiers", "tier9", "--no-pos"])


class TestEvaluateCorpus:

    def test_labelled_folders(self, tmp_path, capsys):
        from evaluate_corpus import evaluate
        (tmp_path / "human").mkdir()
        (tmp_path / "machine").mkdir()
        (tmp_path / "human" / "a.txt").write_text(HUMAN_TEXT, encoding="utf-8")
        (tmp_path / "machine" / "b.txt").write_text(AI_TEXT, encoding="utf-8")
        (tmp_path / "machine" / "notes.csv").write_text("ignored", encoding="utf-8")
        output = tmp_path / "results.json"

        corpus = evaluate(str(tmp_path), seed=1, output=str(output))

        assert len(corpus) == 2
        assert corpus.confusion()["labelled"] == 2
        saved = json.loads(output.read_text(encoding="utf-8"))
        assert set(saved["sweeps"]) == {"cv_threshold", "sttr_threshold", "metadiscourse_threshold"}
        assert "Youden's J" in capsys.readouterr().out

    def test_missing_directory(self, tmp_path):
        from evaluate_corpus import evaluate
        assert evaluate(str(tmp_path / "nope")) is None

    def test_tier1_only_without_tagging(self):
        from evaluate_corpus import build_engine
        assert build_engine(use_tagger=False).tiers == ["tier1"]

    def test_pos_flag_computes_tagged_metrics(self):
        from evaluate_corpus import build_engine
        tagger = StubTagger()
        engine = build_engine(use_tagger=True, seed=1, tagger=tagger)
        sample = engine.analyze(HUMAN_TEXT)

        assert engine.tiers == ["tier1", "tier2", "tier3", "tier4", "tier5", "tier6"]
        assert tagger.calls > 0
        assert "lexical_density" in sample.features["tier2"]
        assert sample.partial is False
