"""End-to-end test of the command-line pipeline."""

import argparse
import json
from datetime import date
from pathlib import Path
import sys

import pytest
from loguru import logger

sys.path.append(str(Path(__file__).parent.parent))

import main


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_full_pipeline_writes_all_outputs(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, 'argv', [
        'main.py',
        '--seed', '0xC0FFEE',
        '--date', '2024-03-15',
        '--output-dir', str(tmp_path),
        '--export',
        '--print',
        '--log-file', str(tmp_path / 'pipeline.log'),
    ])

    main.main()

    assert (tmp_path / 'energy_report_20240315.png').exists()
    assert (tmp_path / 'energy_report_20240315.escpos').exists()
    assert (tmp_path / 'energy_day.json').exists()
    assert (tmp_path / 'hourly_consumption.csv').exists()

    run_log = json.loads((tmp_path / 'run_log.json').read_text(encoding='utf-8'))
    assert run_log['metadata']['seed'] == '0xc0ffee'
    assert [phase['status'] for phase in run_log['phases']] == ['completed'] * 3


def test_optional_phases_skipped(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, 'argv', [
        'main.py', '--date', '2024-03-15', '--output-dir', str(tmp_path),
        '--log-file', str(tmp_path / 'pipeline.log'),
    ])

    main.main()

    run_log = json.loads((tmp_path / 'run_log.json').read_text(encoding='utf-8'))
    assert [phase['status'] for phase in run_log['phases']] == ['completed', 'skipped', 'skipped']


def test_argument_parsers():
    assert main.parse_seed('0x10') == 16
    assert main.parse_seed('42') == 42
    assert main.parse_date('2024-03-15') == date(2024, 3, 15)

    with pytest.raises(argparse.ArgumentTypeError):
        main.parse_seed('-1')
    with pytest.raises(argparse.ArgumentTypeError):
        main.parse_date('15.03.2024')
