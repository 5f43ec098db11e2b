import json

import polars as pl
import pytest

from humanizer.cli import main


class TestCli:
    def test_version(self, capsys):
        main(["version"])
        assert "humanizer version" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 0
        assert "usage" in capsys.readouterr().out

    def test_analyze_json(self, capsys):
        main(["analyze", "--json", "--seed", "1", "We must leverage this opportunity."])
        data = json.loads(capsys.readouterr().out)
        assert data["aiScore"] == 99
        assert [p["phrase"] for p in data["flaggedPhrases"]] == ["leverage"]

    def test_analyze_text_report(self, capsys):
        main(["analyze", "The cat sat on the mat."])
        out = capsys.readouterr().out
        assert "AI Score: 0" in out
        assert "Readability: 88" in out

    def test_humanize_contracts(self, capsys):
        main(["humanize", "--level", "Light", "--seed", "3", "We are done."])
        assert capsys.readouterr().out == "we're done."

    def test_humanize_to_file(self, tmp_path):
        output = tmp_path / "out.txt"
        main(["humanize", "--mode", "Professional", "--seed", "3", "-o", str(output), "Fine."])
        assert output.read_text() == "Fine."

    def test_missing_file_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["analyze", "-f", str(tmp_path / "nope.txt")])
        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_directory_input_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["analyze", "-f", str(tmp_path)])
        assert exc.value.code == 1
        assert "Error: Could not read" in capsys.readouterr().err

    def test_undecodable_file_exits(self, tmp_path, capsys):
        binary = tmp_path / "blob.txt"
        binary.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(SystemExit) as exc:
            main(["analyze", "-f", str(binary)])
        assert exc.value.code == 1
        assert "Error: Could not read" in capsys.readouterr().err

    def test_diff_directory_exits(self, tmp_path, capsys):
        rewritten = tmp_path / "b.txt"
        rewritten.write_text("We use tools.")
        with pytest.raises(SystemExit) as exc:
            main(["diff", str(tmp_path), str(rewritten)])
        assert exc.value.code == 1
        assert "Error" in capsys.readouterr().err

    def test_diff_prints_rewrite(self, tmp_path, capsys):
        original = tmp_path / "a.txt"
        rewritten = tmp_path / "b.txt"
        original.write_text("We utilize tools.")
        rewritten.write_text("We use tools.")
        main(["diff", str(original), str(rewritten)])
        assert capsys.readouterr().out == "We use tools."

    def test_score_corpus(self, tmp_path, capsys):
        corpus = tmp_path / "corpus.csv"
        output = tmp_path / "scored.parquet"
        pl.DataFrame({"text": ["We must leverage this.", "Plain words."]}).write_csv(corpus)
        main(["score-corpus", str(corpus), "-o", str(output)])
        assert "Scored 2 rows" in capsys.readouterr().out
        assert pl.read_parquet(output)["ai_score"].to_list() == [99, 0]

    def test_score_corpus_bad_format(self, tmp_path, capsys):
        corpus = tmp_path / "corpus.txt"
        corpus.write_text("hello")
        with pytest.raises(SystemExit) as exc:
            main(["score-corpus", str(corpus)])
        assert exc.value.code == 1
        assert "Invalid corpus file" in capsys.readouterr().err

    def test_score_corpus_malformed_csv(self, tmp_path, capsys):
        corpus = tmp_path / "corpus.csv"
        corpus.write_text('text\n"unterminated\n')
        with pytest.raises(SystemExit) as exc:
            main(["score-corpus", str(corpus)])
        assert exc.value.code == 1
        assert "Invalid corpus file" in capsys.readouterr().err

    def test_score_corpus_unwritable_output(self, tmp_path, capsys):
        corpus = tmp_path / "corpus.csv"
        pl.DataFrame({"text": ["Plain words."]}).write_csv(corpus)
        blocker = tmp_path / "taken"
        blocker.write_text("")
        with pytest.raises(SystemExit) as exc:
            main(["score-corpus", str(corpus), "-o", str(blocker / "scored.csv")])
        assert exc.value.code == 1
        assert "Error writing to file" in capsys.readouterr().err
