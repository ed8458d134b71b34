"""
Logging utilities for game sessions.
"""
from typing import Dict, Any, Optional, List
from pathlib import Path
import json
import time
from datetime import datetime
from collections import defaultdict
import numpy as np


def convert_to_serializable(obj):
    """Convert numpy types to Python types for JSON serialization."""
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {str(k): convert_to_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_to_serializable(i) for i in obj]
    elif hasattr(obj, 'to_dict'):
        return convert_to_serializable(obj.to_dict())
    return obj


class Logger:
    """
    JSONL logger for game actions and per-game summaries.

    Each call to log() appends one record to ``<name>_<timestamp>.jsonl``.
    """

    def __init__(self, log_dir: str, name: str = "session"):
        """
        Initialize logger.

        Args:
            log_dir: Directory to save logs
            name: Name used as the log file prefix
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.name = name
        self.start_time = time.time()

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file = self.log_dir / f"{name}_{timestamp}.jsonl"

        self.metrics_history: Dict[str, List[float]] = defaultdict(list)
        self.step = 0

    def log(self, record: Dict[str, Any], step: Optional[int] = None) -> None:
        """
        Append a record.

        Args:
            record: Dictionary of values; objects with to_dict() are expanded
            step: Optional step number
        """
        if step is not None:
            self.step = step
        else:
            self.step += 1

        entry = {
            'step': self.step,
            'time': time.time() - self.start_time,
            'timestamp': datetime.now().isoformat(),
            **record,
        }
        entry = convert_to_serializable(entry)

        for key, value in record.items():
            if isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool):
                self.metrics_history[key].append(float(value))

        with open(self.log_file, 'a') as f:
            f.write(json.dumps(entry) + '\n')

    def log_action(self, action: str, outcome, **details) -> None:
        """Record a session action together with its Outcome."""
        self.log({
            'action': action,
            **details,
            'ok': outcome.ok,
            'score': outcome.score,
            'score_delta': outcome.score_delta,
            'moves_left': outcome.moves_left,
            'outcome': outcome,
        })

    def get_recent(self, metric: str, n: int = 100) -> List[float]:
        """Get recent values of a metric."""
        return self.metrics_history[metric][-n:]

    def get_mean(self, metric: str, n: int = 100) -> float:
        """Get mean of recent values."""
        recent = self.get_recent(metric, n)
        return float(np.mean(recent)) if recent else 0.0

    def save_summary(self, extra: Optional[Dict[str, Any]] = None) -> Path:
        """Save a summary of all numeric values seen so far."""
        summary = {
            'name': self.name,
            'total_steps': self.step,
            'total_time': time.time() - self.start_time,
            'metrics': {},
        }
        if extra:
            summary.update(convert_to_serializable(extra))

        for key, values in self.metrics_history.items():
            summary['metrics'][key] = {
                'mean': float(np.mean(values)),
                'std': float(np.std(values)),
                'min': float(np.min(values)),
                'max': float(np.max(values)),
                'last': float(values[-1]),
            }

        summary_file = self.log_dir / f"{self.name}_summary.json"
        with open(summary_file, 'w') as f:
            json.dump(summary, f, indent=2)
        return summary_file


class MetricsTracker:
    """
    Track running statistics for metrics.
    """

    def __init__(self, window_size: int = 100):
        """
        Initialize metrics tracker.

        Args:
            window_size: Size of rolling window for statistics
        """
        self.window_size = window_size
        self.metrics: Dict[str, List[float]] = defaultdict(list)

    def add(self, name: str, value: float) -> None:
        """Add a value to a metric."""
        self.metrics[name].append(value)
        if len(self.metrics[name]) > self.window_size:
            self.metrics[name].pop(0)

    def add_all(self, values: Dict[str, Any]) -> None:
        """Add every numeric entry of a statistics dictionary."""
        for name, value in values.items():
            if isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool):
                self.add(name, float(value))

    def get_summary(self, name: str) -> Dict[str, float]:
        """Get summary statistics for a metric."""
        values = self.metrics.get(name, [])
        if not values:
            return {'mean': 0.0, 'std': 0.0, 'min': 0.0, 'max': 0.0, 'last': 0.0}
        return {
            'mean': float(np.mean(values)),
            'std': float(np.std(values)),
            'min': float(np.min(values)),
            'max': float(np.max(values)),
            'last': float(values[-1]),
        }

    def get_all_summaries(self) -> Dict[str, Dict[str, float]]:
        """Get summaries for all metrics."""
        return {name: self.get_summary(name) for name in self.metrics}

    def reset(self) -> None:
        """Reset all metrics."""
        self.metrics.clear()
