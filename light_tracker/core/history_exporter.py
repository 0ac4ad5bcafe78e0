"""Export of recorded detection results to CSV and plots."""

import os
import logging
from datetime import datetime
from typing import Dict, Optional

import matplotlib.pyplot as plt
import numpy as np

from ..models.result_history import ResultHistory
from .exceptions import ExportError
from .result import Result, error, safe_call, success

# Constants
PLOT_DPI = 150


def _base_filename(base_name: Optional[str]) -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{base_name or 'light_tracker'}_{timestamp}"


def save_history_plot(history: ResultHistory, plot_path: str, dpi: int = PLOT_DPI):
    """Plot light direction and peak brightness over time."""
    df = history.to_dataframe()
    elapsed = (df['timestamp'] - df['timestamp'].iloc[0]).to_numpy() if len(df) else np.array([])

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 8), sharex=True)
    try:
        fig.suptitle('Light Direction Recording', fontsize=14, fontweight='bold')

        ax1.plot(elapsed, df['angle_degrees'], color='tab:green', linewidth=1.5, marker='.', linestyle='')
        ax1.set_ylabel('Direction (degrees)')
        ax1.set_ylim(0, 360)
        ax1.set_yticks([0, 90, 180, 270, 360])
        ax1.grid(True, alpha=0.3)

        ax2.plot(elapsed, df['max_brightness'], color='tab:orange', linewidth=1.5)
        ax2.set_xlabel('Time (seconds)')
        ax2.set_ylabel('Peak cell brightness')
        ax2.set_ylim(0, 260)
        ax2.grid(True, alpha=0.3)

        summary = history.summary()
        if summary['count']:
            fig.text(0.02, 0.01,
                     f"Frames: {summary['count']}  |  "
                     f"Mean direction: {summary['mean_angle_degrees']:.1f}°  |  "
                     f"Mean brightness: {summary['mean_brightness']:.1f}",
                     fontsize=9)

        plt.tight_layout()
        plt.savefig(plot_path, dpi=dpi, bbox_inches='tight')
    finally:
        plt.close(fig)


def export_history(history: ResultHistory, output_directory: str,
                   base_name: Optional[str] = None,
                   include_plot: bool = True) -> Result[Dict[str, str], ExportError]:
    """
    Write the recorded results to ``output_directory``.

    Returns:
        Success with a mapping of export type ('csv', 'plot') to file path,
        or Error with an ExportError naming the file that failed
    """
    base_filename = _base_filename(base_name)
    paths = {}

    csv_path = os.path.join(output_directory, f"{base_filename}.csv")
    saved = safe_call(history.save_csv, csv_path)
    if saved.is_error():
        logging.error(f"Error saving results CSV: {saved.error}")
        return error(ExportError(csv_path, 'CSV', saved.error))
    paths['csv'] = csv_path

    if include_plot and len(history):
        plot_path = os.path.join(output_directory, f"{base_filename}.png")
        try:
            save_history_plot(history, plot_path)
            paths['plot'] = plot_path
            logging.info(f"Saved plot: {plot_path}")
        except (OSError, ValueError) as e:
            logging.error(f"Error generating plot: {e}")
            return error(ExportError(
                plot_path, 'plot', e,
                details=f"Results CSV was written and kept: {csv_path}"
            ))

    return success(paths)
