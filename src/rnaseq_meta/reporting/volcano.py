"""
Volcano plot of meta-analysis results.
"""

import logging

import numpy as np
import seaborn as sns
from adjustText import adjust_text

from rnaseq_meta.analysis.classification import SIGNIFICANCE, MetaAnalysisResult, Significance
from rnaseq_meta.analysis.meta_analysis import COMBINED_PVALUE, MEAN_LOG2FC
from rnaseq_meta.utils.plot_manager import PlotContext

logger = logging.getLogger(__name__)

PALETTE = {
    Significance.SIGNIFICANT.value: 'red',
    Significance.NOT_SIGNIFICANT.value: 'grey',
}
MIN_PVALUE = 1e-300


def volcano_frame(result: MetaAnalysisResult):
    """Plottable rows with -log10 of the combined p-value; undefined p-values are omitted."""
    df = result.results.dropna(subset=[COMBINED_PVALUE, MEAN_LOG2FC]).copy()
    df['neg_log10_pvalue'] = -np.log10(df[COMBINED_PVALUE].clip(lower=MIN_PVALUE))
    return df


def plot_volcano(result: MetaAnalysisResult, plot_manager, filename='volcano_plot', max_labels=20):
    """
    Draw and save the volcano plot.

    Points are coloured by significance and only significant genes are
    labelled. ``max_labels`` caps the label count (smallest p-values first)
    to keep dense plots legible; pass None to label every significant gene.

    Returns
    -------
    list
        Paths of the saved image files.
    """
    df = volcano_frame(result)
    n_omitted = len(result.results) - len(df)
    if n_omitted:
        logger.info(f"Omitting {n_omitted} genes without a combined p-value from the volcano plot")

    context = PlotContext(plot_manager, filename, 'Volcano plot of meta-analysis results')
    with context as (fig, ax):
        sns.scatterplot(
            data=df,
            x=MEAN_LOG2FC,
            y='neg_log10_pvalue',
            hue=SIGNIFICANCE,
            hue_order=list(PALETTE),
            palette=PALETTE,
            alpha=0.7,
            s=20,
            edgecolor='none',
            ax=ax,
        )

        labelled = df[df[SIGNIFICANCE] == Significance.SIGNIFICANT.value]
        if max_labels is not None:
            labelled = labelled.nsmallest(max_labels, COMBINED_PVALUE)
        texts = [
            ax.text(row[MEAN_LOG2FC], row['neg_log10_pvalue'], row['Gene'], fontsize=8)
            for _, row in labelled.iterrows()
        ]
        if texts:
            adjust_text(texts, ax=ax, arrowprops=dict(arrowstyle='-', color='#9e9e9e', lw=0.5))

        ax.set_title('Volcano Plot of Meta-Analysis Results')
        ax.set_xlabel('Mean Log2 Fold Change')
        ax.set_ylabel('-log10(Combined P-value)')
        ax.legend(title='Gene Significance', loc='center left', bbox_to_anchor=(1.02, 0.5))

    return context.saved_files
