"""
Centralized configuration settings for RNA-seq differential expression meta-analysis.
"""

from pathlib import Path
from typing import Optional
import os


class Settings:
    """Global settings for the meta-analysis pipeline."""

    def __init__(self, base_dir: Optional[Path] = None,
                 input_dir: Optional[Path] = None,
                 output_dir: Optional[Path] = None):
        """
        Initialize settings.

        Parameters
        ----------
        base_dir : Path, optional
            Base directory for the project. Defaults to project root.
        input_dir : Path, optional
            Directory holding one differential expression table per study.
        output_dir : Path, optional
            Directory receiving result tables and plots.
        """
        if base_dir is None:
            # Auto-detect project root (where pyproject.toml or setup.py exists)
            current = Path(__file__).resolve()
            for parent in current.parents:
                if (parent / "pyproject.toml").exists() or (parent / "setup.py").exists():
                    base_dir = parent
                    break
            else:
                # Fallback to 3 levels up from this file
                base_dir = Path(__file__).resolve().parents[3]

        self.BASE_DIR = Path(base_dir)

        # Data directories
        self.DATA_DIR = self.BASE_DIR / "data"
        self.RESULTS_DIR = self.BASE_DIR / "results"

        if input_dir is None:
            input_dir = os.getenv("META_INPUT_DIR", str(self.DATA_DIR / "studies"))
        if output_dir is None:
            output_dir = os.getenv("META_OUTPUT_DIR", str(self.RESULTS_DIR / "meta_analysis"))

        self.INPUT_DIR = Path(input_dir)
        self.OUTPUT_DIR = Path(output_dir)
        self.OUTPUT_PREFIX = os.getenv("META_OUTPUT_PREFIX", "")

        # Input tables
        self.INPUT_PATTERNS = os.getenv("INPUT_PATTERNS", "*.xlsx").split(",")
        self.GENE_COLUMN = os.getenv("GENE_COLUMN", "Geneid")
        self.LOG2FC_COLUMN = os.getenv("LOG2FC_COLUMN", "log2FoldChange")
        self.PVALUE_COLUMN = os.getenv("PVALUE_COLUMN", "padj")

        # Meta-analysis policy
        self.PVALUE_THRESHOLD = float(os.getenv("PVALUE_THRESHOLD", "0.05"))
        self.LOG2FC_CUTOFF = float(os.getenv("LOG2FC_CUTOFF", "2.0"))
        self.SIGNIFICANCE_DIRECTION = os.getenv("SIGNIFICANCE_DIRECTION", "down")
        self.DUPLICATE_KEEP = os.getenv("DUPLICATE_KEEP", "first")

        # Output file names
        self.RESULTS_FILENAME = os.getenv("RESULTS_FILENAME", "metaRNASeq_result_all.xlsx")
        self.SIGNIFICANT_FILENAME = os.getenv("SIGNIFICANT_FILENAME", "significant_genes.xlsx")
        self.COMMON_GENES_FILENAME = os.getenv("COMMON_GENES_FILENAME", "common_genes.xlsx")
        self.VOLCANO_FILENAME = os.getenv("VOLCANO_FILENAME", "volcano_plot")

        # Plotting parameters
        self.PLOT_DPI = int(os.getenv("PLOT_DPI", "300"))
        self.PLOT_FORMAT = os.getenv("PLOT_FORMAT", "png").split(",")
        # "all" labels every significant gene
        label_max = os.getenv("PLOT_LABEL_MAX", "20")
        self.PLOT_LABEL_MAX = None if label_max.lower() == "all" else int(label_max)

        # Logging
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    def create_directories(self):
        """Create output directories if they don't exist."""
        self.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    def get_output_path(self, filename: str) -> Path:
        """Get path of an output artifact, honouring the configured prefix."""
        return self.OUTPUT_DIR / f"{self.OUTPUT_PREFIX}{filename}"

    def column_spec(self):
        """Required input columns as a ColumnSpec."""
        from rnaseq_meta.data.validation import ColumnSpec
        return ColumnSpec(
            gene=self.GENE_COLUMN,
            log2fc=self.LOG2FC_COLUMN,
            pvalue=self.PVALUE_COLUMN,
        )

    def significance_rule(self):
        """Classification thresholds as a SignificanceRule."""
        from rnaseq_meta.analysis.classification import SignificanceRule
        return SignificanceRule(
            pvalue_threshold=self.PVALUE_THRESHOLD,
            log2fc_cutoff=self.LOG2FC_CUTOFF,
            direction=self.SIGNIFICANCE_DIRECTION,
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings(base_dir: Optional[Path] = None) -> Settings:
    """
    Get global settings instance (singleton pattern).

    Parameters
    ----------
    base_dir : Path, optional
        Base directory for the project. Only used on first call.

    Returns
    -------
    Settings
        Global settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings(base_dir)
    return _settings


def reset_settings():
    """Drop the cached global settings instance."""
    global _settings
    _settings = None
