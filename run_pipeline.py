#!/usr/bin/env python3
"""
Main Pipeline for RNA-seq Differential Expression Meta-Analysis

Usage:
    python run_pipeline.py data/studies results/meta_analysis --prefix GSE_8_
"""

import sys
from pathlib import Path

# Ensure package is importable without installation
sys.path.insert(0, str(Path(__file__).parent / "src"))

from rnaseq_meta.cli import main

if __name__ == "__main__":
    sys.exit(main())
