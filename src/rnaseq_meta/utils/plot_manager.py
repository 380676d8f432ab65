#!/usr/bin/env python3
"""
Plot Management System for RNA-seq Meta-Analysis
Centralized figure creation and saving into the run's output directory
"""

import logging
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns

logger = logging.getLogger(__name__)


class PlotManager:
    """Centralized plot management system"""

    def __init__(self, output_dir='plots', dpi=300, figsize=(8, 6),
                 file_formats=('png',), prefix=''):
        self.output_dir = Path(output_dir)
        self.dpi = dpi
        self.figsize = figsize
        self.file_formats = list(file_formats)
        self.prefix = prefix

        # Configure matplotlib to not show plots
        plt.ioff()
        sns.set_theme(style='whitegrid')

    def save_plot(self, fig, filename, description='', file_formats=None, close_fig=True):
        """
        Save plot in every requested format

        Parameters:
        -----------
        fig : matplotlib.figure.Figure
            The figure to save
        filename : str
            Filename without extension
        description : str
            Plot description, logged with each saved file
        file_formats : list
            File formats to save, defaults to the manager's formats
        close_fig : bool
            Whether to close figure after saving
        """
        if file_formats is None:
            file_formats = self.file_formats

        self.output_dir.mkdir(parents=True, exist_ok=True)
        saved_files = []

        try:
            for fmt in file_formats:
                fmt = fmt.strip().lstrip('.')
                filepath = self.get_plot_path(filename, fmt)
                fig.savefig(
                    filepath,
                    dpi=self.dpi,
                    bbox_inches='tight',
                    format=fmt,
                    facecolor='white',
                    edgecolor='none'
                )
                saved_files.append(filepath)
                logger.info(f"Saved plot: {filepath} {description}".rstrip())
        finally:
            if close_fig:
                plt.close(fig)

        return saved_files

    def create_figure(self, figsize=None, **kwargs):
        """Create a new figure with default settings"""
        if figsize is None:
            figsize = self.figsize

        fig, ax = plt.subplots(figsize=figsize, **kwargs)
        return fig, ax

    def get_plot_path(self, filename, extension='png'):
        """Get the full path for a plot file"""
        return self.output_dir / f"{self.prefix}{filename}.{extension}"


class PlotContext:
    """Context manager for automatic plot saving"""

    def __init__(self, manager, filename, description='', file_formats=None, figsize=None):
        self.manager = manager
        self.filename = filename
        self.description = description
        self.file_formats = file_formats
        self.figsize = figsize
        self.fig = None
        self.ax = None
        self.saved_files = []

    def __enter__(self):
        self.fig, self.ax = self.manager.create_figure(figsize=self.figsize)
        return self.fig, self.ax

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:  # No exception occurred
            self.saved_files = self.manager.save_plot(
                self.fig, self.filename, self.description,
                self.file_formats, close_fig=True
            )
        else:
            plt.close(self.fig)

# Example usage:
# with PlotContext(manager, 'volcano_plot', 'Meta-analysis volcano plot') as (fig, ax):
#     ax.scatter(x, y)
