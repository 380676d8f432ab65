#!/usr/bin/env python3
"""
Meta-Analysis of differential expression results across RNA-seq studies
Fisher's combined probability test and mean effect size per gene
"""

import logging

import numpy as np
import pandas as pd
from scipy import stats

from rnaseq_meta.analysis.alignment import AlignedMatrix

logger = logging.getLogger(__name__)

COMBINED_PVALUE = 'Combined_Pvalue'
MEAN_LOG2FC = 'Mean_Log2FC'
N_VALID = 'n_valid_studies'


def valid_pvalues(values):
    """Drop missing values and keep p-values in (0, 1]."""
    p = np.asarray(values, dtype=float)
    p = p[~np.isnan(p)]
    return p[(p > 0) & (p <= 1)]


def fisher_statistic(pvalues):
    """
    Fisher's chi-squared statistic for a set of p-values.

    Returns
    -------
    tuple
        (-2 * sum(ln p), degrees of freedom = 2 * len(p))
    """
    p = np.asarray(pvalues, dtype=float)
    return -2 * np.sum(np.log(p)), 2 * len(p)


def fisher_combine(values):
    """
    Combine one gene's p-values.

    No valid p-value gives NaN, a single one is returned unchanged,
    otherwise the chi-squared upper tail of Fisher's statistic.
    """
    p = valid_pvalues(values)

    if len(p) > 1:
        chi2_stat, dof = fisher_statistic(p)
        return float(stats.chi2.sf(chi2_stat, dof))
    elif len(p) == 1:
        return float(p[0])
    return np.nan


def combine_pvalues_by_gene(pvalues: pd.DataFrame) -> pd.Series:
    """Fisher-combined p-value of every row of a gene x study matrix."""
    combined = [fisher_combine(row) for row in pvalues.to_numpy(dtype=float)]
    return pd.Series(combined, index=pvalues.index, name=COMBINED_PVALUE, dtype=float)


def count_valid_pvalues(pvalues: pd.DataFrame) -> pd.Series:
    """Number of studies contributing a usable p-value to each gene."""
    p = pvalues.to_numpy(dtype=float)
    with np.errstate(invalid='ignore'):
        counts = ((p > 0) & (p <= 1)).sum(axis=1)
    return pd.Series(counts, index=pvalues.index, name=N_VALID)


def mean_log2fc_by_gene(log2fc: pd.DataFrame) -> pd.Series:
    """Row mean of log2 fold-changes, ignoring missing entries."""
    return log2fc.astype(float).mean(axis=1, skipna=True).rename(MEAN_LOG2FC)


def run_meta_analysis(matrix: AlignedMatrix) -> pd.DataFrame:
    """
    Perform the per-gene meta-analysis.

    Parameters
    ----------
    matrix : AlignedMatrix
        Aligned p-value and log2FC matrices.

    Returns
    -------
    pd.DataFrame
        Columns Gene, Combined_Pvalue, Mean_Log2FC in the matrix row order.
    """
    n_genes, n_studies = matrix.shape
    logger.info(f"Performing meta-analysis using Fisher's method: {n_genes} genes, {n_studies} studies")

    combined = combine_pvalues_by_gene(matrix.pvalues)
    mean_fc = mean_log2fc_by_gene(matrix.log2fc)

    n_valid = count_valid_pvalues(matrix.pvalues)
    n_partial = int((n_valid < n_studies).sum())
    if n_partial:
        logger.info(f"{n_partial} genes combined from fewer than {n_studies} valid p-values")
    n_undefined = int(combined.isna().sum())
    if n_undefined:
        logger.info(f"{n_undefined} genes have no valid p-value")

    return pd.DataFrame({
        'Gene': list(matrix.genes),
        COMBINED_PVALUE: combined.to_numpy(),
        MEAN_LOG2FC: mean_fc.to_numpy(),
    })
