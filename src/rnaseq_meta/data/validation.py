"""
Record validation and normalization for per-study differential expression tables.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Tuple

import pandas as pd

from rnaseq_meta.exceptions import StudySchemaError

logger = logging.getLogger(__name__)

# Fixed column layout of a normalized study table
GENE = 'Gene'
PVALUE = 'pvalue'
LOG2FC = 'log2fc'
STUDY_COLUMNS = [GENE, PVALUE, LOG2FC]


@dataclass(frozen=True)
class ColumnSpec:
    """Names of the required columns in a raw study table."""

    gene: str = 'Geneid'
    log2fc: str = 'log2FoldChange'
    pvalue: str = 'padj'

    @property
    def required(self) -> List[str]:
        return [self.gene, self.log2fc, self.pvalue]


@dataclass(frozen=True)
class StudyRecord:
    """One gene's observation within one study."""

    gene: str
    pvalue: float
    log2fc: float


@dataclass(frozen=True)
class StudyTable:
    """Validated records of one study, keyed by their source."""

    source: str
    data: pd.DataFrame

    @property
    def genes(self) -> pd.Series:
        return self.data[GENE]

    @property
    def n_records(self) -> int:
        return len(self.data)

    def records(self) -> Iterator[StudyRecord]:
        for gene, pvalue, log2fc in self.data[STUDY_COLUMNS].itertuples(index=False):
            yield StudyRecord(gene, float(pvalue), float(log2fc))


def validate_study(raw: pd.DataFrame, source: str, columns: ColumnSpec = ColumnSpec()) -> StudyTable:
    """
    Validate and normalize one raw study table.

    Parameters
    ----------
    raw : pd.DataFrame
        Table as read from disk.
    source : str
        Identity of the study, usually the originating file path.
    columns : ColumnSpec
        Names of the gene, fold-change and p-value columns.

    Returns
    -------
    StudyTable
        Records with a trimmed gene identifier and numeric statistics.
        Rows missing either statistic, or the identifier, are dropped.

    Raises
    ------
    StudySchemaError
        If a required column is absent.
    """
    missing = [col for col in columns.required if col not in raw.columns]
    if missing:
        raise StudySchemaError(source, missing)

    genes = raw[columns.gene]
    # A blank cell turns numeric identifiers into floats; restore "7157" over "7157.0"
    if pd.api.types.is_float_dtype(genes) and (genes.dropna() % 1 == 0).all():
        genes = genes.astype('Int64')
    genes = genes.astype(object)
    present = genes.notna()
    genes.loc[present] = genes[present].astype(str).str.strip()

    data = pd.DataFrame({
        GENE: genes,
        PVALUE: pd.to_numeric(raw[columns.pvalue], errors='coerce'),
        LOG2FC: pd.to_numeric(raw[columns.log2fc], errors='coerce'),
    })

    keep = data[PVALUE].notna() & data[LOG2FC].notna() & (data[GENE].fillna('') != '')
    dropped = int((~keep).sum())
    data = data[keep].reset_index(drop=True)
    data[PVALUE] = data[PVALUE].astype(float)
    data[LOG2FC] = data[LOG2FC].astype(float)

    if dropped:
        logger.info(f"{source}: dropped {dropped} rows with missing values")
    logger.info(f"{source}: {len(data)} usable records")

    return StudyTable(source=source, data=data)


def normalize_studies(raw_tables: Mapping[str, pd.DataFrame],
                      columns: ColumnSpec = ColumnSpec()) -> Tuple[Dict[str, StudyTable], List[str]]:
    """
    Validate every raw study, skipping those with an invalid schema.

    Returns
    -------
    tuple
        (source -> StudyTable in input order, list of skipped sources)
    """
    tables = {}
    skipped = []

    for source, raw in raw_tables.items():
        try:
            tables[source] = validate_study(raw, source, columns)
        except StudySchemaError as e:
            logger.warning(str(e))
            skipped.append(source)

    return tables, skipped
