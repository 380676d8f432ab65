"""
Pytest configuration and fixtures for RNA-seq meta-analysis tests.
"""

import pytest
from pathlib import Path
import sys

import matplotlib
matplotlib.use("Agg")
import numpy as np
import pandas as pd

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

N_COMMON = 90
N_PER_STUDY = 100


def make_study(study_idx, seed, n_common=N_COMMON, n_total=N_PER_STUDY):
    """Synthetic DESeq2-style table: shared genes plus study-specific ones."""
    rng = np.random.default_rng(seed)
    genes = [f"GENE{i:03d}" for i in range(n_common)]
    genes += [f"S{study_idx}_ONLY{j:02d}" for j in range(n_total - n_common)]
    return pd.DataFrame({
        "Geneid": genes,
        "baseMean": rng.uniform(10, 1000, n_total),
        "log2FoldChange": rng.normal(-1.0, 2.0, n_total),
        "padj": rng.uniform(1e-6, 1.0, n_total),
    })


@pytest.fixture
def project_root():
    """Return project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def raw_studies():
    """Three studies of 100 genes each, 90 of them shared."""
    return {f"study_{i}.xlsx": make_study(i, seed=42 + i) for i in range(3)}


@pytest.fixture
def study_dir(tmp_path, raw_studies):
    """Input directory holding the synthetic studies as Excel files."""
    input_dir = tmp_path / "studies"
    input_dir.mkdir()
    for name, df in raw_studies.items():
        df.to_excel(input_dir / name, index=False)
    return input_dir


@pytest.fixture
def sample_settings(tmp_path, study_dir):
    """Return settings pointing at temporary input/output directories."""
    from rnaseq_meta.config.settings import Settings
    return Settings(input_dir=study_dir, output_dir=tmp_path / "out")
