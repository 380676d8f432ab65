#!/usr/bin/env python3
"""
Command line entry point for the RNA-seq meta-analysis pipeline
"""

import argparse
import logging
import sys

from rnaseq_meta.config.settings import Settings
from rnaseq_meta.exceptions import MetaAnalysisError
from rnaseq_meta.pipeline import MetaAnalysisPipeline

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        description='Meta-analysis of differential expression tables using Fisher\'s method'
    )
    parser.add_argument('input_dir', help='Directory containing one table per study')
    parser.add_argument('output_dir', help='Directory for result tables and plots')
    parser.add_argument('--prefix', default=None,
                        help='Prefix prepended to every output file name')
    parser.add_argument('--pattern', action='append', default=None,
                        help='Glob pattern for study tables (repeatable, default *.xlsx)')
    parser.add_argument('--gene-column', default=None, help='Gene identifier column')
    parser.add_argument('--log2fc-column', default=None, help='log2 fold-change column')
    parser.add_argument('--pvalue-column', default=None, help='Adjusted p-value column')
    parser.add_argument('--pvalue-threshold', type=float, default=None,
                        help='Combined p-value must be strictly below this value')
    parser.add_argument('--log2fc-cutoff', type=float, default=None,
                        help='Mean log2 fold-change magnitude cutoff')
    parser.add_argument('--direction', default=None, choices=['down', 'up', 'both'],
                        help='Direction of change counted as significant')
    parser.add_argument('--keep', default=None, choices=['first', 'last'],
                        help='Which duplicate gene record to keep within a study')
    parser.add_argument('--no-plot', action='store_true', help='Skip the volcano plot')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity')
    return parser


def settings_from_args(args):
    """Build Settings, letting explicit arguments override environment defaults."""
    settings = Settings(input_dir=args.input_dir, output_dir=args.output_dir)

    overrides = {
        'OUTPUT_PREFIX': args.prefix,
        'INPUT_PATTERNS': args.pattern,
        'GENE_COLUMN': args.gene_column,
        'LOG2FC_COLUMN': args.log2fc_column,
        'PVALUE_COLUMN': args.pvalue_column,
        'PVALUE_THRESHOLD': args.pvalue_threshold,
        'LOG2FC_CUTOFF': args.log2fc_cutoff,
        'SIGNIFICANCE_DIRECTION': args.direction,
        'DUPLICATE_KEEP': args.keep,
        'LOG_LEVEL': args.log_level,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(settings, key, value)
    return settings


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        result = MetaAnalysisPipeline(settings).run(plot=not args.no_plot)
    except MetaAnalysisError as e:
        logger.error(f"Meta-analysis failed: {e}")
        return 1

    summary = result.summary()
    print(f"Common genes: {summary['n_genes']} | "
          f"Significant: {summary['n_significant']} | "
          f"Studies: {summary['n_studies']} (skipped {summary['n_skipped']})")
    print(f"Results saved in: {settings.OUTPUT_DIR}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
