"""
Study table loading for RNA-seq meta-analysis.
Reads one differential expression table per study from an input directory.
"""

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {'.xlsx', '.xlsm'}
TAB_SUFFIXES = {'.tsv', '.txt'}


def discover_study_files(input_dir, patterns=('*.xlsx',)):
    """Find study tables in ``input_dir`` matching any of ``patterns``."""
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        logger.warning(f"Input directory not found: {input_dir}")
        return []

    files = set()
    for pattern in patterns:
        pattern = pattern.strip()
        if not pattern:
            continue
        # Skip Excel lock files such as "~$study.xlsx"
        files.update(p for p in input_dir.glob(pattern)
                     if p.is_file() and not p.name.startswith('~$'))

    return sorted(files)


def read_study_table(file_path):
    """Load one study table into a DataFrame based on its suffix."""
    file_path = Path(file_path)
    suffix = file_path.suffix.lower()

    if suffix in EXCEL_SUFFIXES:
        return pd.read_excel(file_path, sheet_name=0, engine='openpyxl')
    if suffix == '.csv':
        return pd.read_csv(file_path)
    if suffix in TAB_SUFFIXES:
        return pd.read_csv(file_path, sep='\t')

    raise ValueError(f"Unsupported study table format: {file_path}")


def load_study_tables(input_dir, patterns=('*.xlsx',)):
    """
    Load every study table found in ``input_dir``.

    Returns
    -------
    dict
        Source path (str) -> raw DataFrame, in sorted path order.
    """
    tables = {}
    for file_path in discover_study_files(input_dir, patterns):
        logger.info(f"Processing file: {file_path}")
        tables[str(file_path)] = read_study_table(file_path)

    logger.info(f"Loaded {len(tables)} study tables from {input_dir}")
    return tables
