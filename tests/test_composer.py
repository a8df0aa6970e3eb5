"""Tests for report composition and the matplotlib surface."""

from datetime import date
from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).parent.parent))

from src.reporting import composer
from src.reporting.composer import SECTION_RENDERERS, ReportParameters, compose
from src.reporting.layout import Region
from src.reporting.matplotlib_surface import MatplotlibSurface
from src.reporting.surface import TITLE_FONT_SIZE, WHITE, RecordingSurface
from src.simulation.energy_simulator import simulate

import matplotlib.pyplot as plt

REFERENCE_DATE = date(2024, 3, 15)


def test_sections_rendered_in_fixed_order():
    surface = RecordingSurface()
    compose(surface, ReportParameters(reference_date=REFERENCE_DATE))

    titles = [
        call.args['text'] for call in surface.of('draw_text')
        if call.args['size'] == TITLE_FONT_SIZE and call.args['bold']
    ]
    assert titles == [
        "Denní energetický report",
        "Časová osa (kWh/h)",
        "Top spotřebiče (kWh/den)",
        "Rozpad kategorií (podíl)",
        "Tabulka (výběr hodin)",
        "Checklist / Alerts",
    ]
    assert [name for name, _ in SECTION_RENDERERS] == ['header', 'line', 'bar', 'pie', 'table', 'checklist']


def test_background_painted_first():
    surface = RecordingSurface()
    params = ReportParameters(reference_date=REFERENCE_DATE, canvas_width=700, canvas_height=1800)
    compose(surface, params)

    first = surface.calls[0]
    assert first.op == 'fill_rect'
    assert first.args == {'rect': Region(0, 0, 700, 1800), 'color': WHITE}


def test_day_built_once_and_returned(monkeypatch):
    calls = []

    def counting_simulate(**kwargs):
        calls.append(kwargs)
        return simulate(**kwargs)

    monkeypatch.setattr(composer, 'simulate', counting_simulate)

    day = compose(RecordingSurface(), ReportParameters(seed=7, reference_date=REFERENCE_DATE))

    assert len(calls) == 1
    assert calls[0]['seed'] == 7
    assert day == simulate(7, REFERENCE_DATE)


def test_invalid_margin_rejected_before_simulation(monkeypatch):
    monkeypatch.setattr(composer, 'simulate', lambda **kwargs: pytest.fail("simulate called"))

    with pytest.raises(ValueError):
        compose(RecordingSurface(), ReportParameters(reference_date=REFERENCE_DATE, margin=0))


def test_parameters_from_settings_with_overrides():
    settings = {
        'seed': 0xC0FFEE,
        'building_name': None,
        'price_czk_per_kwh': 4.5,
        'canvas_width': 600,
        'canvas_height': 1700,
        'margin': 10,
        'top_offset': 40,
    }

    params = ReportParameters.from_settings(settings, reference_date=REFERENCE_DATE, seed=99, margin=None)

    assert params.seed == 99
    assert params.margin == 10
    assert params.top_offset == 40
    assert params.price_czk_per_kwh == 4.5
    assert params.building_name == "Kancelářská budova A (menší)"
    assert params.reference_date == REFERENCE_DATE


def test_matplotlib_surface_writes_png(tmp_path):
    params = ReportParameters(reference_date=REFERENCE_DATE, top_offset=40)

    with MatplotlibSurface(params.canvas_width, params.canvas_height) as surface:
        compose(surface, params)
        image_path = surface.save(tmp_path / "report.png")

    assert image_path.exists()
    assert image_path.read_bytes()[:8] == b'\x89PNG\r\n\x1a\n'
    assert not plt.fignum_exists(surface.figure.number)


def test_matplotlib_figure_closed_when_compose_fails():
    params = ReportParameters(reference_date=REFERENCE_DATE, margin=0)

    with pytest.raises(ValueError):
        with MatplotlibSurface(params.canvas_width, params.canvas_height) as surface:
            compose(surface, params)

    assert not plt.fignum_exists(surface.figure.number)


def test_matplotlib_text_measurement():
    with MatplotlibSurface(200, 100) as surface:
        short_width, short_height = surface.measure_text("12", 12)
        long_width, _ = surface.measure_text("1234567890", 12)
        bold_width, _ = surface.measure_text("1234567890", 12, bold=True)

        with pytest.raises(ValueError):
            surface.select_pattern("checkerboard")

    assert 0 < short_width < long_width <= bold_width
    assert short_height > 0
