"""
Run Logger - Records the phases of one report build

Each run of the CLI produces a ``run_log.txt`` (human readable) and a
``run_log.json`` twin next to the generated report, listing the seed, the
report date, every phase with its status, its key figures and the files it
wrote.
"""

from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional
import json

import numpy as np
from loguru import logger

STATUS_LABELS = {
    'completed': 'OK',
    'failed': 'FAILED',
    'skipped': 'SKIPPED',
    'in_progress': 'RUNNING',
}


def convert_to_json_serializable(obj: Any) -> Any:
    """
    Recursively convert numpy scalars/arrays, dates and paths into plain JSON types.

    Args:
        obj: Object to convert

    Returns:
        JSON-serializable version of the object
    """
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, dict):
        return {key: convert_to_json_serializable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [convert_to_json_serializable(item) for item in obj]
    return obj


def _format_metric_value(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (float, np.floating)):
        return f"{value:,.0f}" if abs(value) >= 1000 else f"{value:.2f}"
    if isinstance(value, (int, np.integer)):
        return f"{value:,}"
    return str(value)


@dataclass
class PhaseRecord:
    """One step of the build: rendering, data export or receipt."""

    number: int
    name: str
    description: str = ""
    status: str = 'in_progress'
    message: str = ""
    started: datetime = field(default_factory=datetime.now)
    duration_seconds: float = 0.0
    metrics: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    outputs: List[Dict[str, str]] = field(default_factory=list)

    @property
    def succeeded(self) -> Optional[bool]:
        if self.status == 'completed':
            return True
        if self.status == 'failed':
            return False
        return None


class RunLogger:
    """Collects run metadata and phase records, then writes them to disk."""

    def __init__(self, output_dir: Path = None):
        if output_dir is None:
            from config.config import OUTPUTS_DIR
            output_dir = OUTPUTS_DIR

        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.start_time = datetime.now()
        self.phases: List[PhaseRecord] = []
        self.current_phase: Optional[PhaseRecord] = None
        self.metadata: Dict[str, Any] = {'run_start': self.start_time}

    def start_phase(self, phase_name: str, description: str = "") -> PhaseRecord:
        """Open a new phase; a phase still running is closed as completed first."""
        if self.current_phase is not None:
            self.complete_phase(success=True, message="Auto-completed")

        self.current_phase = PhaseRecord(len(self.phases) + 1, phase_name, description)
        logger.info(f"Phase {self.current_phase.number}: {phase_name}")
        return self.current_phase

    def add_metric(self, key: str, value: Any, description: str = ""):
        if self.current_phase is None:
            logger.warning(f"Metric '{key}' dropped: no active phase")
            return
        self.current_phase.metrics[key] = {'value': value, 'description': description}

    def add_output(self, output_path: Path, output_type: str = "file", description: str = ""):
        if self.current_phase is None:
            logger.warning(f"Output '{output_path}' dropped: no active phase")
            return
        self.current_phase.outputs.append({
            'path': str(output_path),
            'type': output_type,
            'description': description,
        })

    def complete_phase(self, success: bool = True, message: str = ""):
        """Close the active phase as completed or failed."""
        phase = self.current_phase
        if phase is None:
            logger.warning("No active phase to complete")
            return

        phase.duration_seconds = (datetime.now() - phase.started).total_seconds()
        phase.status = 'completed' if success else 'failed'
        phase.message = message
        self.phases.append(phase)
        self.current_phase = None

        if success:
            logger.success(f"Phase {phase.number} done: {phase.name} ({phase.duration_seconds:.2f}s)")
        else:
            logger.error(f"Phase {phase.number} failed: {phase.name}: {message}")

    @contextmanager
    def phase(self, phase_name: str, description: str = "") -> Iterator[PhaseRecord]:
        """
        Run a block as one phase.

        The phase is completed when the block exits normally. If the block
        raises, the phase is recorded as failed with the error text and the
        exception propagates.
        """
        record = self.start_phase(phase_name, description)
        try:
            yield record
        except Exception as e:
            self.complete_phase(success=False, message=str(e))
            raise
        self.complete_phase(success=True)

    def skip_phase(self, phase_name: str, reason: str = ""):
        self.phases.append(PhaseRecord(
            len(self.phases) + 1, phase_name, status='skipped', message=reason
        ))
        logger.info(f"Phase skipped: {phase_name} ({reason})")

    def set_metadata(self, key: str, value: Any):
        """Set a run-wide value (seed, report date, canvas size)."""
        self.metadata[key] = value

    def generate_text_summary(self) -> str:
        """Plain-text report of the run, one block per phase."""
        stats = self.get_summary_stats()
        rule = "-" * 60

        lines = ["DAILY ENERGY REPORT - RUN LOG", rule]
        for key, value in convert_to_json_serializable(self.metadata).items():
            lines.append(f"{key:<24}{value}")
        lines.append(
            f"{'phases':<24}{stats['successful_phases']} ok, "
            f"{stats['failed_phases']} failed, {stats['skipped_phases']} skipped"
        )

        for phase in self.phases:
            lines += ["", rule, f"Phase {phase.number}: {phase.name} [{STATUS_LABELS[phase.status]}]"]
            if phase.description:
                lines.append(f"  {phase.description}")
            if phase.message:
                lines.append(f"  Message: {phase.message}")
            if phase.status != 'skipped':
                lines.append(f"  Duration: {phase.duration_seconds:.2f} s")
            for key, metric in phase.metrics.items():
                line = f"  {key}: {_format_metric_value(metric['value'])}"
                if metric['description']:
                    line += f" - {metric['description']}"
                lines.append(line)
            for output in phase.outputs:
                lines.append(f"  -> [{output['type']}] {output['path']}")

        return "\n".join(lines) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        phases = []
        for phase in self.phases:
            record = asdict(phase)
            record['success'] = phase.succeeded
            phases.append(record)
        return convert_to_json_serializable({
            'metadata': self.metadata,
            'summary': self.get_summary_stats(),
            'phases': phases,
        })

    def save_log(self, filename: str = "run_log.txt") -> Path:
        """
        Write the text log and its JSON twin into the output directory.

        Args:
            filename: Name of the text log; the JSON file shares its stem

        Returns:
            Path to the text log
        """
        finished = datetime.now()
        self.metadata['run_end'] = finished
        self.metadata['total_duration_seconds'] = round((finished - self.start_time).total_seconds(), 3)

        log_path = self.output_dir / filename
        log_path.write_text(self.generate_text_summary(), encoding='utf-8')

        json_path = log_path.with_suffix('.json')
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        logger.info(f"Run log saved to: {log_path} (+ {json_path.name})")
        return log_path

    def get_summary_stats(self) -> Dict[str, Any]:
        successful = sum(1 for p in self.phases if p.succeeded is True)
        failed = sum(1 for p in self.phases if p.succeeded is False)

        return {
            'total_phases': len(self.phases),
            'successful_phases': successful,
            'failed_phases': failed,
            'skipped_phases': sum(1 for p in self.phases if p.status == 'skipped'),
            'total_duration_seconds': sum(p.duration_seconds for p in self.phases),
            'overall_success': failed == 0 and successful > 0,
        }
