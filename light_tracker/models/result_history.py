"""Rolling record of per-frame analysis results."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Any
import logging
import time

import numpy as np
import pandas as pd

from .analysis_result import AnalysisResult
from ..utils.math_utils import circular_mean_degrees

# Constants
DEFAULT_HISTORY_SIZE = 1000
HISTORY_COLUMNS = [
    'frame_number', 'timestamp', 'brightest_x', 'brightest_y',
    'center_x', 'center_y', 'angle_degrees', 'max_brightness'
]


@dataclass(frozen=True)
class HistoryEntry:
    """One analysed frame."""
    frame_number: int
    timestamp: float
    result: AnalysisResult


class ResultHistory:
    """Bounded history of analysis results, oldest entries dropped first."""

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE):
        self.max_size = max_size
        self._entries: Deque[HistoryEntry] = deque(maxlen=max_size)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, result: AnalysisResult, frame_number: int,
               timestamp: float = None) -> HistoryEntry:
        """Record a result; timestamp defaults to the current wall clock."""
        entry = HistoryEntry(
            frame_number=frame_number,
            timestamp=time.time() if timestamp is None else timestamp,
            result=result
        )
        self._entries.append(entry)
        return entry

    def clear(self):
        self._entries.clear()

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def latest(self):
        """Most recent entry, or None when empty."""
        return self._entries[-1] if self._entries else None

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the recorded results to a pandas DataFrame."""
        rows = []
        for entry in self._entries:
            row = {'frame_number': entry.frame_number, 'timestamp': entry.timestamp}
            row.update(entry.result.to_dict())
            rows.append(row)

        return pd.DataFrame(rows, columns=HISTORY_COLUMNS)

    def save_csv(self, file_path: str):
        """Write the history to a CSV file."""
        self.to_dataframe().to_csv(file_path, index=False)
        logging.info(f"Saved {len(self)} results to {file_path}")

    def summary(self) -> Dict[str, Any]:
        """Aggregate statistics over the recorded results."""
        if not self._entries:
            return {'count': 0}

        angles = [e.result.angle_degrees for e in self._entries]
        brightness = np.array([e.result.max_brightness for e in self._entries], dtype=np.float64)
        first = self._entries[0].timestamp
        last = self._entries[-1].timestamp

        return {
            'count': len(self._entries),
            'duration_seconds': last - first,
            'mean_angle_degrees': circular_mean_degrees(angles),
            'mean_brightness': float(brightness.mean()),
            'max_brightness': float(brightness.max()),
            'min_brightness': float(brightness.min())
        }
