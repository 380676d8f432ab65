"""Tests for study table validation and normalization."""

import numpy as np
import pandas as pd
import pytest

from rnaseq_meta.data.validation import (
    ColumnSpec,
    StudyRecord,
    normalize_studies,
    validate_study,
)
from rnaseq_meta.exceptions import StudySchemaError


def test_trims_gene_and_coerces_numbers():
    raw = pd.DataFrame({
        "Geneid": ["  TP53 ", "EGFR\t", "MYC"],
        "log2FoldChange": ["-2.5", 1.0, "n/a"],
        "padj": [0.01, "0.2", 0.3],
    })
    table = validate_study(raw, "a.xlsx")

    assert list(table.genes) == ["TP53", "EGFR"]
    assert table.n_records == 2
    assert list(table.records()) == [
        StudyRecord("TP53", 0.01, -2.5),
        StudyRecord("EGFR", 0.2, 1.0),
    ]


def test_drops_rows_with_missing_statistics_or_gene():
    raw = pd.DataFrame({
        "Geneid": ["A", "B", None, "  ", "E"],
        "log2FoldChange": [1.0, np.nan, 1.0, 1.0, 2.0],
        "padj": [0.1, 0.1, 0.1, 0.1, np.nan],
    })
    table = validate_study(raw, "b.xlsx")
    assert list(table.genes) == ["A"]


def test_numeric_gene_identifiers_become_strings():
    raw = pd.DataFrame({"Geneid": [7157, 1956], "log2FoldChange": [1.0, 2.0], "padj": [0.1, 0.2]})
    table = validate_study(raw, "c.xlsx")
    assert list(table.genes) == ["7157", "1956"]


def test_numeric_gene_identifiers_with_blank_cell():
    # A blank cell makes pandas read the identifier column as float64
    raw = pd.DataFrame({
        "Geneid": [7157, np.nan, 1956],
        "log2FoldChange": [1.0, 2.0, 3.0],
        "padj": [0.1, 0.2, 0.3],
    })
    assert raw["Geneid"].dtype == float

    table = validate_study(raw, "c2.xlsx")
    assert list(table.genes) == ["7157", "1956"]


def test_fractional_float_identifiers_kept_verbatim():
    raw = pd.DataFrame({"Geneid": [1.5, np.nan], "log2FoldChange": [1.0, 1.0], "padj": [0.1, 0.1]})
    table = validate_study(raw, "c3.xlsx")
    assert list(table.genes) == ["1.5"]


def test_missing_column_raises_schema_error():
    raw = pd.DataFrame({"Geneid": ["A"], "log2FoldChange": [1.0]})
    with pytest.raises(StudySchemaError) as excinfo:
        validate_study(raw, "d.xlsx")
    assert excinfo.value.missing == ["padj"]
    assert excinfo.value.source == "d.xlsx"


def test_custom_column_names():
    raw = pd.DataFrame({"symbol": ["A"], "lfc": [1.0], "pvalue": [0.5]})
    columns = ColumnSpec(gene="symbol", log2fc="lfc", pvalue="pvalue")
    table = validate_study(raw, "e.csv", columns)
    assert list(table.records()) == [StudyRecord("A", 0.5, 1.0)]


def test_empty_study_is_valid():
    raw = pd.DataFrame({"Geneid": ["A"], "log2FoldChange": [np.nan], "padj": [0.1]})
    table = validate_study(raw, "f.xlsx")
    assert table.n_records == 0


def test_normalize_skips_invalid_studies_and_keeps_order(caplog):
    good = pd.DataFrame({"Geneid": ["A"], "log2FoldChange": [1.0], "padj": [0.1]})
    bad = pd.DataFrame({"gene": ["A"], "log2FoldChange": [1.0], "padj": [0.1]})
    raw = {"z.xlsx": good, "bad.xlsx": bad, "a.xlsx": good}

    with caplog.at_level("WARNING"):
        tables, skipped = normalize_studies(raw)

    assert list(tables) == ["z.xlsx", "a.xlsx"]
    assert skipped == ["bad.xlsx"]
    assert "bad.xlsx does not contain the required columns" in caplog.text
