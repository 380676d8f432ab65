"""Tests for configuration settings."""

from rnaseq_meta.config.settings import Settings, get_settings, reset_settings


def test_defaults(tmp_path):
    settings = Settings(input_dir=tmp_path / "in", output_dir=tmp_path / "out")

    assert settings.GENE_COLUMN == "Geneid"
    assert settings.LOG2FC_COLUMN == "log2FoldChange"
    assert settings.PVALUE_COLUMN == "padj"
    assert settings.PVALUE_THRESHOLD == 0.05
    assert settings.LOG2FC_CUTOFF == 2.0
    assert settings.SIGNIFICANCE_DIRECTION == "down"
    assert settings.DUPLICATE_KEEP == "first"
    # Constructing settings must not touch the filesystem
    assert not (tmp_path / "out").exists()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("PVALUE_THRESHOLD", "0.01")
    monkeypatch.setenv("GENE_COLUMN", "symbol")
    monkeypatch.setenv("PLOT_FORMAT", "png,pdf")
    monkeypatch.setenv("META_OUTPUT_PREFIX", "run_")

    settings = Settings(input_dir=tmp_path, output_dir=tmp_path / "out")

    assert settings.PVALUE_THRESHOLD == 0.01
    assert settings.column_spec().gene == "symbol"
    assert settings.PLOT_FORMAT == ["png", "pdf"]
    assert settings.get_output_path("x.xlsx") == tmp_path / "out" / "run_x.xlsx"


def test_policy_objects(tmp_path):
    settings = Settings(input_dir=tmp_path, output_dir=tmp_path)
    settings.SIGNIFICANCE_DIRECTION = "both"
    rule = settings.significance_rule()
    assert rule.direction == "both"
    assert rule.pvalue_threshold == 0.05


def test_create_directories(tmp_path):
    settings = Settings(input_dir=tmp_path, output_dir=tmp_path / "a" / "b")
    settings.create_directories()
    assert (tmp_path / "a" / "b").is_dir()


def test_global_settings_singleton():
    reset_settings()
    try:
        assert get_settings() is get_settings()
    finally:
        reset_settings()


def test_plot_label_max_all(monkeypatch, tmp_path):
    monkeypatch.setenv("PLOT_LABEL_MAX", "all")
    assert Settings(input_dir=tmp_path, output_dir=tmp_path).PLOT_LABEL_MAX is None
