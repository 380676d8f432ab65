"""
RNA-seq Differential Expression Meta-Analysis Package

Combines per-gene differential expression statistics from independent
RNA-seq studies with Fisher's method and reports significant genes.
"""

__version__ = "0.1.0"
__author__ = "RNA-seq Meta-Analysis Team"

# Import key components for easy access
from rnaseq_meta.analysis.classification import MetaAnalysisResult, SignificanceRule
from rnaseq_meta.pipeline import MetaAnalysisPipeline, run_meta_analysis_pipeline

__all__ = [
    "MetaAnalysisPipeline",
    "MetaAnalysisResult",
    "SignificanceRule",
    "run_meta_analysis_pipeline",
]
