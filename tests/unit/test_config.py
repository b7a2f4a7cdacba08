"""Tests for TOML configuration loading."""

from pathlib import Path

import pytest

from svscore.config import (
    SCORE_FILE_ENV_VAR,
    AnnotateConfig,
    ConfigValidationError,
    load_config,
    validate_config,
)
from svscore.scorer import DEFAULT_MAX_SPAN


def write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "svscore.toml"
    path.write_text(body)
    return path


class TestAnnotateConfigDefaults:
    """Tests for default values."""

    def test_defaults(self):
        config = AnnotateConfig()
        assert config.score_file is None
        assert config.gene_file == Path("refGene.genes.b37.bed")
        assert config.score_column == 4
        assert config.max_span == DEFAULT_MAX_SPAN
        assert config.cache_queries is False
        assert config.emit_symbolic_span is False

    def test_paths_coerced(self):
        config = AnnotateConfig(score_file="scores.tsv.gz", gene_file="genes.bed")
        assert config.score_file == Path("scores.tsv.gz")
        assert config.gene_file == Path("genes.bed")


class TestResolveScoreFile:
    """Tests for the score file fallback chain."""

    def test_explicit_path_wins(self, monkeypatch):
        monkeypatch.setenv(SCORE_FILE_ENV_VAR, "/env/scores.tsv.gz")
        config = AnnotateConfig(score_file="/cli/scores.tsv.gz")
        assert config.resolve_score_file() == Path("/cli/scores.tsv.gz")

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv(SCORE_FILE_ENV_VAR, "/env/scores.tsv.gz")
        assert AnnotateConfig().resolve_score_file() == Path("/env/scores.tsv.gz")

    def test_missing_everywhere(self, monkeypatch):
        monkeypatch.delenv(SCORE_FILE_ENV_VAR, raising=False)
        with pytest.raises(ConfigValidationError, match=SCORE_FILE_ENV_VAR):
            AnnotateConfig().resolve_score_file()


class TestValidateConfig:
    """Tests for value validation."""

    def test_valid_config(self):
        validate_config({"score_column": 5, "max_span": 10, "cache_queries": True})

    def test_negative_score_column(self):
        with pytest.raises(ConfigValidationError, match="score_column"):
            validate_config({"score_column": -1})

    def test_max_span_must_be_integer(self):
        with pytest.raises(ConfigValidationError, match="max_span must be an integer"):
            validate_config({"max_span": "big"})

    def test_boolean_is_not_an_integer(self):
        with pytest.raises(ConfigValidationError):
            validate_config({"score_column": True})

    def test_flags_must_be_boolean(self):
        with pytest.raises(ConfigValidationError, match="cache_queries"):
            validate_config({"cache_queries": "yes"})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigValidationError, match="log_level"):
            validate_config({"log_level": "LOUD"})

    def test_paths_must_be_strings(self):
        with pytest.raises(ConfigValidationError, match="gene_file"):
            validate_config({"gene_file": 12})


class TestLoadConfig:
    """Tests for reading the [svscore] table."""

    def test_load_values(self, tmp_path):
        path = write_config(
            tmp_path,
            '[svscore]\nscore_file = "cadd.tsv.gz"\ngene_file = "genes.bed"\n'
            "score_column = 5\nmax_span = 2000000\ncache_queries = true\nlog_level = \"debug\"\n",
        )
        config = load_config(path)

        assert config.score_file == Path("cadd.tsv.gz")
        assert config.gene_file == Path("genes.bed")
        assert config.score_column == 5
        assert config.max_span == 2_000_000
        assert config.cache_queries is True
        assert config.log_level == "DEBUG"

    def test_missing_table_uses_defaults(self, tmp_path):
        path = write_config(tmp_path, "[other]\nkey = 1\n")
        assert load_config(path) == AnnotateConfig()

    def test_overrides_replace_file_values(self, tmp_path):
        path = write_config(tmp_path, "[svscore]\nscore_column = 5\nmax_span = 10\n")
        config = load_config(path, {"score_column": 7, "max_span": None})

        assert config.score_column == 7
        assert config.max_span == 10

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        path = write_config(tmp_path, "[svscore]\nbogus = 1\n")
        config = load_config(path)

        assert config == AnnotateConfig()
        assert "bogus" in caplog.text

    def test_invalid_value_raises(self, tmp_path):
        path = write_config(tmp_path, "[svscore]\nmax_span = -5\n")
        with pytest.raises(ConfigValidationError, match="max_span"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")
