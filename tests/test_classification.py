"""Tests for significance classification."""

import numpy as np
import pandas as pd
import pytest

from rnaseq_meta.analysis.classification import (
    MetaAnalysisResult,
    Significance,
    SignificanceRule,
    classify,
)


def _results(rows):
    return pd.DataFrame(rows, columns=["Gene", "Combined_Pvalue", "Mean_Log2FC"])


def test_default_rule_requires_both_conditions():
    results = classify(_results([
        ("A", 0.01, -3.0),
        ("B", 0.01, 3.0),
        ("C", 0.2, -3.0),
        ("D", 0.049, -2.01),
    ]))
    assert list(results["Significance"]) == [
        "Significant", "Not Significant", "Not Significant", "Significant",
    ]


def test_thresholds_are_strict():
    results = classify(_results([
        ("A", 0.05, -3.0),
        ("B", 0.01, -2.0),
    ]))
    assert (results["Significance"] == Significance.NOT_SIGNIFICANT.value).all()


def test_undefined_values_are_never_significant():
    results = classify(_results([
        ("A", np.nan, -10.0),
        ("B", 0.001, np.nan),
    ]))
    assert (results["Significance"] == "Not Significant").all()


def test_direction_up_and_both():
    rows = _results([("A", 0.01, -3.0), ("B", 0.01, 3.0), ("C", 0.01, 1.0)])

    up = classify(rows, SignificanceRule(direction="up"))
    assert list(up["Significance"]) == ["Not Significant", "Significant", "Not Significant"]

    both = classify(rows, SignificanceRule(direction="both"))
    assert list(both["Significance"]) == ["Significant", "Significant", "Not Significant"]


def test_custom_thresholds():
    rule = SignificanceRule(pvalue_threshold=0.01, log2fc_cutoff=1.0)
    results = classify(_results([("A", 0.005, -1.5), ("B", 0.02, -1.5)]), rule)
    assert list(results["Significance"]) == ["Significant", "Not Significant"]


def test_unknown_direction_rejected():
    with pytest.raises(ValueError):
        SignificanceRule(direction="sideways")


def test_classify_does_not_mutate_input():
    rows = _results([("A", 0.01, -3.0)])
    classify(rows)
    assert "Significance" not in rows.columns


def test_result_set_views():
    results = classify(_results([("A", 0.01, -3.0), ("B", np.nan, 0.5)]))
    result = MetaAnalysisResult(results=results, study_ids=["s1", "s2"], skipped=["bad.xlsx"])

    assert list(result.significant["Gene"]) == ["A"]
    gene_results = list(result.gene_results())
    assert gene_results[0].is_significant
    assert gene_results[1].combined_pvalue is None
    assert gene_results[1].significance is Significance.NOT_SIGNIFICANT

    summary = result.summary()
    assert summary["n_genes"] == 2
    assert summary["n_significant"] == 1
    assert summary["n_skipped"] == 1
    assert summary["n_undefined_pvalue"] == 1
