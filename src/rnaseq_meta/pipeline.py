"""
Meta-analysis pipeline: load, validate, align, combine, classify, report.
"""

import logging
from typing import Dict, Mapping, Optional

import pandas as pd

from rnaseq_meta.analysis.alignment import align_studies, build_matrices
from rnaseq_meta.analysis.classification import MetaAnalysisResult, classify
from rnaseq_meta.analysis.meta_analysis import run_meta_analysis
from rnaseq_meta.config.settings import Settings, get_settings
from rnaseq_meta.data.ingest import load_study_tables
from rnaseq_meta.data.validation import normalize_studies
from rnaseq_meta.exceptions import NoValidStudiesError
from rnaseq_meta.reporting import plot_volcano, write_result_tables
from rnaseq_meta.utils.plot_manager import PlotManager

logger = logging.getLogger(__name__)


class MetaAnalysisPipeline:
    """Fisher meta-analysis of differential expression tables from several studies."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else get_settings()
        self.columns = self.settings.column_spec()
        self.rule = self.settings.significance_rule()

    def load_studies(self) -> Dict[str, pd.DataFrame]:
        """Read every raw study table from the configured input directory."""
        return load_study_tables(self.settings.INPUT_DIR, self.settings.INPUT_PATTERNS)

    def prepare_studies(self, raw_tables: Mapping[str, pd.DataFrame]):
        """Validate studies and build the aligned matrices."""
        tables, skipped = normalize_studies(raw_tables, self.columns)
        if not tables:
            raise NoValidStudiesError(
                "No valid files found with the required columns. Please check your input files."
            )

        genes, aligned = align_studies(tables, keep=self.settings.DUPLICATE_KEEP)
        matrix = build_matrices(aligned, genes)
        return matrix, skipped

    def analyze(self, raw_tables: Mapping[str, pd.DataFrame]) -> MetaAnalysisResult:
        """Run the in-memory core on already loaded tables."""
        matrix, skipped = self.prepare_studies(raw_tables)
        results = classify(run_meta_analysis(matrix), self.rule)

        result = MetaAnalysisResult(
            results=results,
            study_ids=matrix.study_ids,
            skipped=skipped,
            rule=self.rule,
        )
        logger.info(f"Meta-analysis summary: {result.summary()}")
        return result

    def write_outputs(self, result: MetaAnalysisResult, plot: bool = True):
        """Write result tables and, optionally, the volcano plot."""
        paths = write_result_tables(result, self.settings)

        if plot:
            plot_manager = PlotManager(
                output_dir=self.settings.OUTPUT_DIR,
                dpi=self.settings.PLOT_DPI,
                file_formats=self.settings.PLOT_FORMAT,
                prefix=self.settings.OUTPUT_PREFIX,
            )
            paths['volcano'] = plot_volcano(
                result,
                plot_manager,
                filename=self.settings.VOLCANO_FILENAME,
                max_labels=self.settings.PLOT_LABEL_MAX,
            )
        return paths

    def run(self, plot: bool = True) -> MetaAnalysisResult:
        """Execute the full pipeline; nothing is written if the core fails."""
        raw_tables = self.load_studies()
        result = self.analyze(raw_tables)
        self.write_outputs(result, plot=plot)
        logger.info("Analysis completed successfully!")
        return result


def run_meta_analysis_pipeline(input_dir, output_dir, plot=True, **overrides) -> MetaAnalysisResult:
    """
    Convenience entry point.

    ``overrides`` are assigned onto the Settings instance, e.g.
    ``OUTPUT_PREFIX='run1_'`` or ``PVALUE_THRESHOLD=0.01``.
    """
    settings = Settings(input_dir=input_dir, output_dir=output_dir)
    for key, value in overrides.items():
        if not hasattr(settings, key):
            raise AttributeError(f"Unknown setting: {key}")
        setattr(settings, key, value)
    return MetaAnalysisPipeline(settings).run(plot=plot)
