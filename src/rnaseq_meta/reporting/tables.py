"""
Excel export of meta-analysis results.
"""

import logging

import pandas as pd

from rnaseq_meta.analysis.classification import RESULT_COLUMNS, MetaAnalysisResult

logger = logging.getLogger(__name__)


def write_table(df: pd.DataFrame, path):
    """Write one table to an .xlsx file without the index."""
    df.to_excel(path, index=False, engine='openpyxl')
    logger.info(f"Saved table: {path} ({len(df)} rows)")
    return path


def write_result_tables(result: MetaAnalysisResult, settings):
    """
    Write the full, significant-only and common-gene tables.

    Returns
    -------
    dict
        Table name -> written path.
    """
    settings.create_directories()

    paths = {
        'results': write_table(
            result.results[RESULT_COLUMNS],
            settings.get_output_path(settings.RESULTS_FILENAME),
        ),
        'significant': write_table(
            result.significant[RESULT_COLUMNS],
            settings.get_output_path(settings.SIGNIFICANT_FILENAME),
        ),
        'common_genes': write_table(
            pd.DataFrame({'Gene': result.genes}),
            settings.get_output_path(settings.COMMON_GENES_FILENAME),
        ),
    }
    return paths
