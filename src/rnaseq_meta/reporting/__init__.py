"""Result tables and figures."""

from rnaseq_meta.reporting.tables import write_result_tables
from rnaseq_meta.reporting.volcano import plot_volcano

__all__ = ["write_result_tables", "plot_volcano"]
