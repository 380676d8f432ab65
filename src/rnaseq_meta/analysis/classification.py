"""
Significance classification of meta-analysis results.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

import numpy as np
import pandas as pd

from rnaseq_meta.analysis.meta_analysis import COMBINED_PVALUE, MEAN_LOG2FC

logger = logging.getLogger(__name__)

SIGNIFICANCE = 'Significance'
RESULT_COLUMNS = ['Gene', COMBINED_PVALUE, MEAN_LOG2FC, SIGNIFICANCE]
DIRECTIONS = ('down', 'up', 'both')


class Significance(str, Enum):
    SIGNIFICANT = 'Significant'
    NOT_SIGNIFICANT = 'Not Significant'


@dataclass(frozen=True)
class SignificanceRule:
    """
    Dual threshold on combined p-value and mean log2 fold-change.

    Both comparisons are strict. With ``direction='down'`` (default) a gene
    needs mean log2FC < -log2fc_cutoff, ``'up'`` needs > log2fc_cutoff and
    ``'both'`` needs |log2FC| > log2fc_cutoff.
    """

    pvalue_threshold: float = 0.05
    log2fc_cutoff: float = 2.0
    direction: str = 'down'

    def __post_init__(self):
        if self.direction not in DIRECTIONS:
            raise ValueError(f"direction must be one of {DIRECTIONS}, got {self.direction!r}")

    def fold_change_passes(self, log2fc):
        log2fc = np.asarray(log2fc, dtype=float)
        with np.errstate(invalid='ignore'):
            if self.direction == 'down':
                return log2fc < -self.log2fc_cutoff
            if self.direction == 'up':
                return log2fc > self.log2fc_cutoff
            return np.abs(log2fc) > self.log2fc_cutoff

    def is_significant(self, pvalue, log2fc):
        """Vectorised test; NaN in either input is never significant."""
        pvalue = np.asarray(pvalue, dtype=float)
        with np.errstate(invalid='ignore'):
            return (pvalue < self.pvalue_threshold) & self.fold_change_passes(log2fc)


def classify(results: pd.DataFrame, rule: SignificanceRule = SignificanceRule()) -> pd.DataFrame:
    """Return a copy of ``results`` with a Significance column appended."""
    mask = rule.is_significant(results[COMBINED_PVALUE], results[MEAN_LOG2FC])
    classified = results.copy()
    classified[SIGNIFICANCE] = np.where(
        mask, Significance.SIGNIFICANT.value, Significance.NOT_SIGNIFICANT.value
    )
    logger.info(f"{int(mask.sum())} of {len(results)} genes classified as significant")
    return classified


@dataclass(frozen=True)
class GeneResult:
    """One row of the final meta-analysis output."""

    gene: str
    combined_pvalue: Optional[float]
    mean_log2fc: Optional[float]
    significance: Significance

    @property
    def is_significant(self) -> bool:
        return self.significance is Significance.SIGNIFICANT


@dataclass
class MetaAnalysisResult:
    """Classified results for the common gene set plus run provenance."""

    results: pd.DataFrame
    study_ids: List[str]
    skipped: List[str] = field(default_factory=list)
    rule: SignificanceRule = field(default_factory=SignificanceRule)

    @property
    def genes(self) -> List[str]:
        return list(self.results['Gene'])

    @property
    def significant(self) -> pd.DataFrame:
        mask = self.results[SIGNIFICANCE] == Significance.SIGNIFICANT.value
        return self.results[mask].reset_index(drop=True)

    def gene_results(self) -> Iterator[GeneResult]:
        for gene, pvalue, log2fc, label in self.results[RESULT_COLUMNS].itertuples(index=False):
            yield GeneResult(
                gene=gene,
                combined_pvalue=None if pd.isna(pvalue) else float(pvalue),
                mean_log2fc=None if pd.isna(log2fc) else float(log2fc),
                significance=Significance(label),
            )

    def summary(self) -> dict:
        return {
            'n_studies': len(self.study_ids),
            'n_skipped': len(self.skipped),
            'n_genes': len(self.results),
            'n_significant': len(self.significant),
            'n_undefined_pvalue': int(self.results[COMBINED_PVALUE].isna().sum()),
            'pvalue_threshold': self.rule.pvalue_threshold,
            'log2fc_cutoff': self.rule.log2fc_cutoff,
            'direction': self.rule.direction,
        }
