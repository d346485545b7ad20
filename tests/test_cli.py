import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from corpus_fixtures import write_csv_corpus, write_json_corpus
from ui.cli import main


class CliTestMixin:
    data_dir: str

    def run_cli(self, *argv: str, env: dict[str, str] | None = None) -> tuple[int, str, str]:
        stdout, stderr = io.StringIO(), io.StringIO()
        with mock.patch.dict(os.environ, {}, clear=False):
            for variable in [name for name in os.environ if name.startswith("DESIGNKB_")]:
                os.environ.pop(variable)
            os.environ.update(env or {})
            with redirect_stdout(stdout), redirect_stderr(stderr):
                code = main(list(argv))
        return code, stdout.getvalue(), stderr.getvalue()


class TestCliWithFixtureCorpus(CliTestMixin, unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = str(write_csv_corpus(Path(self._tmp.name)))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_domain_search_prints_ranked_results(self):
        code, out, err = self.run_cli("glassmorphism dark mode", "--domain", "style", "--data-dir", self.data_dir)
        self.assertEqual(code, 0)
        self.assertIn("[1] Glassmorphism (glassmorphism)", out)
        self.assertIn("Frosted panels", out)
        self.assertNotIn("minimalism)", out)
        self.assertEqual(err, "")

    def test_result_count_flag(self):
        code, out, _ = self.run_cli(
            "beauty spa wellness", "--domain", "product", "-n", "3", "--data-dir", self.data_dir, "--json"
        )
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["count"], 1)
        self.assertEqual(payload["results"][0]["id"], "beauty-spa")
        self.assertEqual(payload["family"], "domain")
        self.assertEqual(payload["partition"], "product")

    def test_query_words_are_joined(self):
        code, out, _ = self.run_cli("responsive", "layout", "--stack", "react", "--data-dir", self.data_dir, "--json")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["query"], "responsive layout")

    def test_unknown_domain_lists_valid_values(self):
        code, out, err = self.run_cli("anything", "--domain", "nonexistent", "--data-dir", self.data_dir)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("nonexistent", err)
        for name in ("style", "typography", "color", "product", "landing", "chart", "ux", "prompt"):
            self.assertIn(name, err)

    def test_empty_query(self):
        code, out, err = self.run_cli("", "--domain", "ux", "--data-dir", self.data_dir)
        self.assertEqual(code, 1)
        self.assertIn("empty", err)
        self.assertEqual(out, "")

    def test_both_selectors(self):
        code, _, err = self.run_cli(
            "responsive layout", "--stack", "react", "--domain", "style", "--data-dir", self.data_dir
        )
        self.assertEqual(code, 1)
        self.assertIn("mutually exclusive", err)

    def test_no_selector(self):
        code, _, err = self.run_cli("responsive layout", "--data-dir", self.data_dir)
        self.assertEqual(code, 1)
        self.assertIn("--domain", err)

    def test_zero_matches_exit_zero(self):
        code, out, err = self.run_cli("quantum teleportation", "--domain", "color", "--data-dir", self.data_dir)
        self.assertEqual(code, 0)
        self.assertIn("No matches", out)
        self.assertEqual(err, "")

    def test_stopword_only_query_is_searched(self):
        code, out, err = self.run_cli("it", "--domain", "color", "--data-dir", self.data_dir)
        self.assertEqual(code, 0)
        self.assertIn("No matches", out)
        self.assertEqual(err, "")

    def test_non_finite_weight_in_environment(self):
        for value in ("nan", "inf", "-inf"):
            code, out, err = self.run_cli(
                "grid", "--domain", "style", "--data-dir", self.data_dir, env={"DESIGNKB_KEYWORD_WEIGHT": value}
            )
            self.assertEqual(code, 1, value)
            self.assertEqual(out, "")
            self.assertIn("DESIGNKB_KEYWORD_WEIGHT", err)

    def test_all_zero_weights_in_environment(self):
        code, _, err = self.run_cli(
            "grid",
            "--domain",
            "style",
            "--data-dir",
            self.data_dir,
            env={"DESIGNKB_KEYWORD_WEIGHT": "0", "DESIGNKB_BODY_WEIGHT": "0"},
        )
        self.assertEqual(code, 1)
        self.assertIn("weight", err)

    def test_invalid_count(self):
        for count in ("0", "-2", "many"):
            code, _, err = self.run_cli("grid", "--domain", "style", "-n", count, "--data-dir", self.data_dir)
            self.assertEqual(code, 1, count)
            self.assertIn("positive integer", err)

    def test_missing_query(self):
        code, _, err = self.run_cli("--domain", "style", "--data-dir", self.data_dir)
        self.assertEqual(code, 1)
        self.assertTrue(err.startswith("error:"))

    def test_output_is_deterministic(self):
        argv = ("saas dashboard fintech", "--domain", "product", "--data-dir", self.data_dir)
        self.assertEqual(self.run_cli(*argv), self.run_cli(*argv))

    def test_bm25_scorer_flag(self):
        code, out, _ = self.run_cli(
            "glassmorphism", "--domain", "style", "--scorer", "bm25", "--data-dir", self.data_dir, "--json"
        )
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual([item["id"] for item in payload["results"]], ["glassmorphism"])
        self.assertIn("bm25_score", payload["results"][0]["breakdown"])


class TestCliCorpusFailures(CliTestMixin, unittest.TestCase):
    def test_missing_corpus_exits_two(self):
        with tempfile.TemporaryDirectory() as tmp:
            code, out, err = self.run_cli("grid", "--domain", "style", "--data-dir", tmp)
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("corpus", err)

    def test_corrupt_corpus_exits_two(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = write_csv_corpus(Path(tmp))
            (root / "domains" / "chart.csv").write_text("nonsense\n", encoding="utf-8")
            code, _, err = self.run_cli("grid", "--domain", "style", "--data-dir", tmp)
        self.assertEqual(code, 2)
        self.assertIn("chart.csv", err)

    def test_json_corpus_format(self):
        with tempfile.TemporaryDirectory() as tmp:
            write_json_corpus(Path(tmp))
            code, out, _ = self.run_cli("forms", "--stack", "react", "--format", "json", "--data-dir", tmp)
        self.assertEqual(code, 0)
        self.assertIn("react-forms", out)

    def test_wrongly_typed_json_entry_exits_two(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = write_json_corpus(Path(tmp))
            (root / "stacks" / "vue.json").write_text(
                json.dumps([{"id": "x", "title": "X", "keywords": 5, "body": "b"}]), encoding="utf-8"
            )
            code, out, err = self.run_cli(
                "forms", "--stack", "react", "--format", "json", "--data-dir", tmp
            )
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("vue.json", err)

    def test_oversized_csv_header_exits_two(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = write_csv_corpus(Path(tmp))
            (root / "domains" / "ux.csv").write_text("x" * 200_000 + ",id\n", encoding="utf-8")
            code, out, err = self.run_cli("grid", "--domain", "style", "--data-dir", tmp)
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("ux.csv", err)


class TestCliBundledCorpus(CliTestMixin, unittest.TestCase):
    def test_bundled_style_query(self):
        code, out, _ = self.run_cli("glassmorphism dark mode", "--domain", "style", "--json")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["results"][0]["id"], "glassmorphism")

    def test_bundled_stack_query(self):
        code, out, _ = self.run_cli("flatlist performance", "--stack", "react-native", "-n", "1")
        self.assertEqual(code, 0)
        self.assertIn("(rn-flatlist)", out)


if __name__ == "__main__":
    unittest.main()
