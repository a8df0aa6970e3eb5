"""
Configuration loader for the daily energy report project.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

# Get project root directory
PROJECT_ROOT = Path(__file__).parent.parent

# Define paths
CONFIG_DIR = PROJECT_ROOT / "config"
OUTPUTS_DIR = PROJECT_ROOT / "output"
REPORTS_DIR = OUTPUTS_DIR / "reports"
EXPORTS_DIR = OUTPUTS_DIR / "exports"
RECEIPTS_DIR = OUTPUTS_DIR / "receipts"


def load_config(config_file: str = "config.yaml", config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_file: Name of the configuration file
        config_dir: Directory holding the file (defaults to the project config dir)

    Returns:
        Dictionary containing configuration parameters
    """
    config_path = Path(config_dir or CONFIG_DIR) / config_file

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f)

    return config or {}


def _positive_number(section: Dict[str, Any], key: str, cast=float, allow_zero: bool = False):
    value = section.get(key)
    if value is None:
        raise ValueError(f"Missing report parameter '{key}' in config['report'].")

    try:
        number = cast(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Report parameter '{key}' must be numeric, got {value!r}.") from exc

    if number < 0 or (number == 0 and not allow_zero):
        bound = "zero or greater" if allow_zero else "greater than zero"
        raise ValueError(f"Report parameter '{key}' must be {bound}, got {number}.")

    return number


def get_report_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Get validated report parameters (seed, building, price, canvas) from config."""
    if config is None:
        config = load_config()
    report = dict(config.get('report', {}))

    seed = report.get('seed')
    if isinstance(seed, str):
        try:
            seed = int(seed, 0)
        except ValueError as exc:
            raise ValueError(f"Report seed must be an integer, got {seed!r}.") from exc
    if not isinstance(seed, int) or isinstance(seed, bool) or seed < 0:
        raise ValueError(f"Report seed must be a non-negative integer, got {seed!r}.")

    canvas = report.get('canvas', {})

    return {
        'seed': seed,
        'building_name': str(report.get('building_name') or '').strip() or None,
        'price_czk_per_kwh': _positive_number(report, 'price_czk_per_kwh'),
        'canvas_width': _positive_number(canvas, 'width', int),
        'canvas_height': _positive_number(canvas, 'height', int),
        'margin': _positive_number(canvas, 'margin', int),
        'top_offset': _positive_number(canvas, 'top_offset', int, allow_zero=True),
    }


def get_receipt_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Get receipt printer settings from config."""
    if config is None:
        config = load_config()
    receipt = config.get('receipt', {})

    width = int(receipt.get('width', 32))
    if width < 16:
        raise ValueError(f"Receipt width must be at least 16 characters, got {width}.")

    return {'width': width}


def get_logging_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Get logging level and log file name from config."""
    if config is None:
        config = load_config()
    logging_cfg = config.get('logging', {})

    return {
        'level': str(logging_cfg.get('level', 'INFO')).upper(),
        'log_file': logging_cfg.get('log_file', 'energy_report.log'),
    }


def ensure_directories():
    """Create necessary directories if they don't exist."""
    directories = [
        OUTPUTS_DIR,
        REPORTS_DIR,
        EXPORTS_DIR,
        RECEIPTS_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


if __name__ == "__main__":
    # Test configuration loading
    settings = get_report_settings()
    print("Configuration loaded successfully!")
    print(f"Seed: {settings['seed']:#x}")
    print(f"Canvas: {settings['canvas_width']}x{settings['canvas_height']}")

    ensure_directories()
    print("Directory structure verified!")
