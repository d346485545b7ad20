import unittest
from pathlib import Path

from infrastructure.config import ContainerConfig, build_default_container
from infrastructure.corpus.base import DEFAULT_DATA_ROOT
from infrastructure.corpus.csv_corpus_loader import CsvCorpusLoader
from infrastructure.corpus.json_corpus_loader import JsonCorpusLoader
from infrastructure.scoring.weighted_overlap_scorer import WeightedOverlapScorer


class TestContainerConfig(unittest.TestCase):
    def test_defaults_without_environment(self):
        cfg = ContainerConfig.from_env({})
        self.assertEqual(cfg.data_root, DEFAULT_DATA_ROOT)
        self.assertEqual(cfg.corpus_format, "csv")
        self.assertEqual(cfg.scorer, "weighted")
        self.assertTrue(cfg.use_stopwords)
        self.assertEqual(cfg.default_top_n, 5)

    def test_reads_environment(self):
        cfg = ContainerConfig.from_env(
            {
                "DESIGNKB_DATA_DIR": "/tmp/designkb",
                "DESIGNKB_CORPUS_FORMAT": "JSON",
                "DESIGNKB_SCORER": "bm25",
                "DESIGNKB_KEYWORD_WEIGHT": "4.5",
                "DESIGNKB_BODY_WEIGHT": "0.5",
                "DESIGNKB_STOPWORDS": "off",
                "DESIGNKB_TOP_N": "8",
            }
        )
        self.assertEqual(cfg.data_root, Path("/tmp/designkb"))
        self.assertEqual(cfg.corpus_format, "json")
        self.assertEqual(cfg.scorer, "bm25")
        self.assertEqual(cfg.keyword_weight, 4.5)
        self.assertEqual(cfg.body_weight, 0.5)
        self.assertFalse(cfg.use_stopwords)
        self.assertEqual(cfg.default_top_n, 8)

    def test_invalid_environment_values(self):
        for environ in (
            {"DESIGNKB_SCORER": "semantic"},
            {"DESIGNKB_KEYWORD_WEIGHT": "heavy"},
            {"DESIGNKB_KEYWORD_WEIGHT": "nan"},
            {"DESIGNKB_BODY_WEIGHT": "inf"},
            {"DESIGNKB_BODY_WEIGHT": "-1"},
            {"DESIGNKB_STOPWORDS": "maybe"},
            {"DESIGNKB_TOP_N": "0"},
        ):
            with self.assertRaises(ValueError, msg=str(environ)):
                ContainerConfig.from_env(environ)

    def test_overrides_skip_none(self):
        cfg = ContainerConfig(scorer="bm25").with_overrides(scorer=None, data_root="/data")
        self.assertEqual(cfg.scorer, "bm25")
        self.assertEqual(cfg.data_root, "/data")


class TestBuildDefaultContainer(unittest.TestCase):
    def test_default_wiring(self):
        container = build_default_container()
        self.assertIsInstance(container.corpus_loader, CsvCorpusLoader)
        self.assertIsInstance(container.scorer, WeightedOverlapScorer)
        self.assertEqual(container.default_top_n, 5)

    def test_json_format(self):
        container = build_default_container(ContainerConfig(corpus_format="json", data_root="/tmp/kb"))
        self.assertIsInstance(container.corpus_loader, JsonCorpusLoader)
        self.assertEqual(container.corpus_loader.data_root, Path("/tmp/kb"))

    def test_unknown_scorer(self):
        with self.assertRaises(ValueError):
            build_default_container(ContainerConfig(scorer="semantic"))  # type: ignore[arg-type]

    def test_stopwords_toggle(self):
        container = build_default_container(ContainerConfig(use_stopwords=False))
        self.assertEqual(container.tokenizer.tokenize("the grid").tokens, ("the", "grid"))

    def test_all_zero_weights_rejected_for_weighted_scorer(self):
        with self.assertRaises(ValueError):
            build_default_container(ContainerConfig(keyword_weight=0.0, body_weight=0.0))

    def test_zero_keyword_weight_allowed_for_bm25(self):
        container = build_default_container(ContainerConfig(scorer="bm25", keyword_weight=0.0, body_weight=0.0))
        self.assertEqual(container.scorer.name, "bm25")


if __name__ == "__main__":
    unittest.main()
