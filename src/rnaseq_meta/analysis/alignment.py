"""
Cross-study alignment: common gene set, per-study reordering and the
gene x study matrices consumed by the meta-analysis.
"""

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Dict, List, Mapping, Tuple

import pandas as pd

from rnaseq_meta.data.validation import GENE, LOG2FC, PVALUE, StudyTable
from rnaseq_meta.exceptions import EmptyGeneSetError, MatrixDimensionError, NoValidStudiesError

logger = logging.getLogger(__name__)

DUPLICATE_KEEP_RULES = ('first', 'last')


@dataclass(frozen=True)
class AlignedMatrix:
    """Parallel gene x study matrices of p-values and log2 fold-changes."""

    pvalues: pd.DataFrame
    log2fc: pd.DataFrame

    @property
    def genes(self) -> List[str]:
        return list(self.pvalues.index)

    @property
    def study_ids(self) -> List[str]:
        return list(self.pvalues.columns)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.pvalues.shape


def compute_gene_set(tables: Mapping[str, StudyTable]) -> List[str]:
    """
    Intersect the gene identifiers of every study.

    Returns the common genes sorted into the canonical (lexicographic) order.
    """
    if not tables:
        raise NoValidStudiesError(
            "No valid files found with the required columns. Please check your input files."
        )

    common = reduce(set.intersection, (set(t.genes) for t in tables.values()))
    logger.info(f"Number of common genes: {len(common)}")

    if not common:
        raise EmptyGeneSetError("No common genes found across datasets. Please check input files.")

    return sorted(common)


def align_study(table: StudyTable, genes: List[str], keep: str = 'first') -> StudyTable:
    """Restrict one study to ``genes``, drop duplicate genes and sort by gene."""
    if keep not in DUPLICATE_KEEP_RULES:
        raise ValueError(f"keep must be one of {DUPLICATE_KEEP_RULES}, got {keep!r}")

    data = table.data[table.data[GENE].isin(genes)]
    n_dups = int(data[GENE].duplicated().sum())
    if n_dups:
        logger.warning(f"{table.source}: removed {n_dups} duplicate gene records (keep={keep})")

    data = (data.drop_duplicates(subset=GENE, keep=keep)
                .sort_values(GENE, kind='mergesort')
                .reset_index(drop=True))
    return StudyTable(source=table.source, data=data)


def align_studies(tables: Mapping[str, StudyTable],
                  keep: str = 'first') -> Tuple[List[str], Dict[str, StudyTable]]:
    """
    Align every study on the common gene set.

    Returns
    -------
    tuple
        (canonical gene list, source -> aligned StudyTable)
    """
    genes = compute_gene_set(tables)
    aligned = {source: align_study(table, genes, keep) for source, table in tables.items()}
    return genes, aligned


def build_matrices(aligned: Mapping[str, StudyTable], genes: List[str]) -> AlignedMatrix:
    """
    Stack aligned studies into p-value and log2FC matrices.

    Columns follow the iteration order of ``aligned``; rows follow ``genes``.
    """
    n_genes = len(genes)
    pvalue_columns = {}
    log2fc_columns = {}

    for source, table in aligned.items():
        if table.n_records != n_genes:
            raise MatrixDimensionError(
                f"Mismatch detected for {source}: "
                f"{table.n_records} records, expected {n_genes}"
            )
        if list(table.genes) != list(genes):
            raise MatrixDimensionError(f"Gene order of {source} does not match the common gene set")
        pvalue_columns[source] = table.data[PVALUE].to_numpy()
        log2fc_columns[source] = table.data[LOG2FC].to_numpy()

    index = pd.Index(genes, name=GENE)
    pvalues = pd.DataFrame(pvalue_columns, index=index)
    log2fc = pd.DataFrame(log2fc_columns, index=index)

    logger.info(f"Final dimensions of pvalues matrix: {pvalues.shape}")
    logger.info(f"Final dimensions of log2fc matrix: {log2fc.shape}")

    return AlignedMatrix(pvalues=pvalues, log2fc=log2fc)
