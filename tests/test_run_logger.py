"""Tests for the run logger."""

import json
from datetime import date
from pathlib import Path
import sys

import numpy as np
import pytest

sys.path.append(str(Path(__file__).parent.parent))

from src.utils.run_logger import RunLogger, convert_to_json_serializable


def test_phases_and_metrics_saved(tmp_path):
    run_log = RunLogger(output_dir=tmp_path)
    run_log.set_metadata('report_date', date(2024, 3, 15))

    run_log.start_phase("Simulation & Rendering", "Draw the report")
    run_log.add_metric('total_kwh', np.float64(369.79), "Daily consumption")
    run_log.add_output(tmp_path / "report.png", "png", "Rendered report")
    run_log.complete_phase(success=True)
    run_log.skip_phase("Receipt", "not requested")

    log_path = run_log.save_log()

    assert log_path.exists()
    text = log_path.read_text(encoding='utf-8')
    assert "Phase 1: Simulation & Rendering [OK]" in text
    assert "total_kwh: 369.79 - Daily consumption" in text
    assert "Phase 2: Receipt [SKIPPED]" in text

    payload = json.loads(log_path.with_suffix('.json').read_text(encoding='utf-8'))
    assert payload['metadata']['report_date'] == "2024-03-15"
    assert [phase['status'] for phase in payload['phases']] == ['completed', 'skipped']
    assert payload['phases'][0]['success'] is True
    assert payload['phases'][1]['success'] is None
    assert payload['summary']['skipped_phases'] == 1


def test_failed_phase_counts_in_summary(tmp_path):
    run_log = RunLogger(output_dir=tmp_path)

    run_log.start_phase("Data Export")
    run_log.complete_phase(success=False, message="disk full")

    stats = run_log.get_summary_stats()
    assert stats['failed_phases'] == 1
    assert stats['overall_success'] is False


def test_phase_context_records_failure_and_reraises(tmp_path):
    run_log = RunLogger(output_dir=tmp_path)

    with run_log.phase("Rendering"):
        run_log.add_metric('total_kwh', 12.5)

    with pytest.raises(OSError, match="disk full"):
        with run_log.phase("Data Export"):
            raise OSError("disk full")

    assert [phase.status for phase in run_log.phases] == ['completed', 'failed']
    assert run_log.phases[1].message == "disk full"
    assert run_log.current_phase is None


def test_starting_new_phase_auto_completes_previous(tmp_path):
    run_log = RunLogger(output_dir=tmp_path)

    run_log.start_phase("First")
    run_log.start_phase("Second")
    run_log.complete_phase()

    assert [phase.name for phase in run_log.phases] == ["First", "Second"]
    assert run_log.phases[0].message == "Auto-completed"


def test_metric_without_phase_is_dropped(tmp_path):
    run_log = RunLogger(output_dir=tmp_path)

    run_log.add_metric('total_kwh', 1.0)

    assert run_log.phases == []


def test_convert_to_json_serializable_handles_numpy_and_dates():
    converted = convert_to_json_serializable({
        'count': np.int64(3),
        'values': np.array([1.5, 2.5]),
        'when': date(2024, 1, 2),
        'nested': (np.float32(0.5),),
    })

    assert converted == {'count': 3, 'values': [1.5, 2.5], 'when': "2024-01-02", 'nested': [0.5]}
