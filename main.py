"""
Main Pipeline for the Daily Energy Report

Simulates one day of building consumption, renders the report to a PNG and
optionally exports the data and an ESC/POS receipt.
"""

import argparse
from datetime import date, datetime
from pathlib import Path
from loguru import logger
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from config.config import (
    REPORTS_DIR,
    EXPORTS_DIR,
    RECEIPTS_DIR,
    OUTPUTS_DIR,
    load_config,
    ensure_directories,
    get_report_settings,
    get_receipt_settings,
    get_logging_settings,
)
from src.analysis.day_statistics import evaluate_alerts, peak_hour, total_kwh
from src.export.data_export import export_energy_day
from src.export.escpos import write_receipt
from src.reporting.composer import ReportParameters, compose
from src.reporting.matplotlib_surface import MatplotlibSurface
from src.utils.run_logger import RunLogger


def setup_logging(log_file: Path = None, level: str = "INFO"):
    """
    Configure logging for the pipeline.

    Args:
        log_file: Optional path to log file
        level: Console log level
    """
    logger.remove()  # Remove default handler

    # Console logging
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )

    # File logging
    if log_file:
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
            level="DEBUG",
            rotation="10 MB",
            encoding="utf-8"
        )


def parse_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


def parse_seed(value: str) -> int:
    """argparse type accepting decimal or 0x-prefixed seeds."""
    try:
        seed = int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid seed '{value}'") from exc
    if seed < 0:
        raise argparse.ArgumentTypeError("Seed must be non-negative")
    return seed


def run_render_phase(params: ReportParameters, run_log: RunLogger, output_dir: Path):
    """Simulate the day and render the report image."""
    with run_log.phase("Simulation & Rendering", "Simulate the day and draw all report sections"):
        with MatplotlibSurface(params.canvas_width, params.canvas_height) as surface:
            day = compose(surface, params)
            image_path = surface.save(output_dir / f"energy_report_{params.reference_date:%Y%m%d}.png")

        hour, peak = peak_hour(day)
        run_log.add_metric('total_kwh', total_kwh(day), "Daily consumption")
        run_log.add_metric('peak_kwh', peak, f"Peak at {hour:02d}:00")
        run_log.add_metric(
            'failed_checks',
            sum(1 for alert in evaluate_alerts(day) if not alert.ok),
            "Checklist lines that did not pass"
        )
        run_log.add_output(image_path, "png", "Rendered daily energy report")

    return day


def run_export_phase(day, run_log: RunLogger, output_dir: Path):
    """Write JSON and CSV exports of the simulated day."""
    with run_log.phase("Data Export", "Write the simulated day as JSON and CSV"):
        for name, path in export_energy_day(day, output_dir).items():
            run_log.add_output(path, path.suffix.lstrip('.'), f"{name} export")


def run_print_phase(day, run_log: RunLogger, output_dir: Path, width: int):
    """Generate the ESC/POS receipt command stream."""
    with run_log.phase("Receipt", "Generate ESC/POS commands for a thermal printer"):
        receipt_path = write_receipt(day, output_dir / f"energy_report_{day.report_date:%Y%m%d}.escpos", width)
        run_log.add_output(receipt_path, "escpos", "Receipt printer command stream")


def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(
        description="Daily Energy Report"
    )

    parser.add_argument('--seed', type=parse_seed, default=None,
                        help='Simulation seed, decimal or hex (default: from config)')
    parser.add_argument('--date', type=parse_date, default=None,
                        help='Report date YYYY-MM-DD (default: today)')
    parser.add_argument('--width', type=int, default=None, help='Canvas width in pixels')
    parser.add_argument('--height', type=int, default=None, help='Canvas height in pixels')
    parser.add_argument('--margin', type=int, default=None, help='Margin between sections')
    parser.add_argument('--output-dir', type=Path, default=None,
                        help='Directory for all outputs (default: output/)')
    parser.add_argument('--export', action='store_true', help='Also export JSON/CSV data')
    parser.add_argument('--print', dest='print_receipt', action='store_true',
                        help='Also generate an ESC/POS receipt file')
    parser.add_argument('--log-file', type=Path, default=None,
                        help='Path to log file (default: from config)')

    args = parser.parse_args()

    config = load_config()
    logging_settings = get_logging_settings(config)
    setup_logging(args.log_file or Path(logging_settings['log_file']), logging_settings['level'])

    if args.output_dir:
        reports_dir = exports_dir = receipts_dir = outputs_dir = args.output_dir
    else:
        ensure_directories()
        reports_dir, exports_dir, receipts_dir, outputs_dir = REPORTS_DIR, EXPORTS_DIR, RECEIPTS_DIR, OUTPUTS_DIR

    params = ReportParameters.from_settings(
        get_report_settings(config),
        reference_date=args.date,
        seed=args.seed,
        canvas_width=args.width,
        canvas_height=args.height,
        margin=args.margin,
    )

    logger.info("=" * 70)
    logger.info("DAILY ENERGY REPORT")
    logger.info("=" * 70)

    run_log = RunLogger(outputs_dir)
    run_log.set_metadata('seed', f"{params.seed:#x}")
    run_log.set_metadata('report_date', params.reference_date)
    run_log.set_metadata('canvas', f"{params.canvas_width}x{params.canvas_height}")

    try:
        day = run_render_phase(params, run_log, reports_dir)

        if args.export:
            run_export_phase(day, run_log, exports_dir)
        else:
            run_log.skip_phase("Data Export", "not requested (--export)")

        if args.print_receipt:
            run_print_phase(day, run_log, receipts_dir, get_receipt_settings(config)['width'])
        else:
            run_log.skip_phase("Receipt", "not requested (--print)")
    finally:
        run_log.save_log()

    logger.info("=" * 70)
    logger.info("REPORT COMPLETE")
    logger.info("=" * 70)


if __name__ == "__main__":
    main()
