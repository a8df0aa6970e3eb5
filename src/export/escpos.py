"""
ESC/POS Receipt Export

Turns an EnergyDay into a command stream for 58/80 mm thermal receipt
printers. The stream is plain bytes: write it to a file, a serial port or a
Bluetooth socket mapped to the printer.
"""

import textwrap
from pathlib import Path

from loguru import logger

from src.analysis.day_statistics import average_kwh, evaluate_alerts, peak_hour, total_kwh
from src.simulation.models import EnergyDay

ESC = b'\x1b'
GS = b'\x1d'
LF = b'\n'

# ESC t n code page number for PC852 (Latin 2), covers Czech diacritics
CODEPAGE_PC852 = 18
TEXT_ENCODING = 'cp852'

ALIGN_LEFT = 0
ALIGN_CENTER = 1
ALIGN_RIGHT = 2


class ReceiptBuilder:
    """Accumulates ESC/POS commands; every method returns the builder."""

    def __init__(self, width: int = 32):
        self.width = width
        self._buffer = bytearray()

    def initialize(self) -> 'ReceiptBuilder':
        self._buffer += ESC + b'@'
        return self

    def codepage(self, page: int = CODEPAGE_PC852) -> 'ReceiptBuilder':
        self._buffer += ESC + b't' + bytes([page])
        return self

    def align(self, mode: int) -> 'ReceiptBuilder':
        self._buffer += ESC + b'a' + bytes([mode])
        return self

    def bold(self, enabled: bool = True) -> 'ReceiptBuilder':
        self._buffer += ESC + b'E' + bytes([1 if enabled else 0])
        return self

    def double_height(self, enabled: bool = True) -> 'ReceiptBuilder':
        self._buffer += GS + b'!' + bytes([0x01 if enabled else 0x00])
        return self

    def text(self, line: str = "") -> 'ReceiptBuilder':
        """Print a line, wrapping words that overflow the paper width."""
        for part in textwrap.wrap(line, self.width) or [""]:
            self._buffer += part.encode(TEXT_ENCODING, errors='replace') + LF
        return self

    def columns(self, left: str, right: str) -> 'ReceiptBuilder':
        """Left text and right-aligned value on one line, truncating the left part."""
        room = self.width - len(right) - 1
        if len(left) > room:
            left = left[:max(room - 1, 0)] + '~'
        return self.text(left.ljust(room) + ' ' + right)

    def rule(self, char: str = '-') -> 'ReceiptBuilder':
        return self.text(char * self.width)

    def feed(self, lines: int = 1) -> 'ReceiptBuilder':
        self._buffer += ESC + b'd' + bytes([lines])
        return self

    def cut(self) -> 'ReceiptBuilder':
        # GS V 66 n: feed n lines then partial cut
        self._buffer += GS + b'V' + bytes([66, 0])
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)


def text_bar(value: float, maximum: float, width: int) -> str:
    """Bar of '#' characters proportional to value/maximum."""
    if maximum <= 0:
        return ''
    return '#' * int(width * min(value / maximum, 1.0))


def build_receipt(day: EnergyDay, width: int = 32) -> bytes:
    """
    Build the ESC/POS command stream for a day's report.

    Args:
        day: Simulated day
        width: Characters per printed line

    Returns:
        Bytes ready to be sent to the printer
    """
    total = total_kwh(day)
    average = average_kwh(day)
    hour, peak = peak_hour(day)

    receipt = ReceiptBuilder(width).initialize().codepage()

    receipt.align(ALIGN_CENTER).bold().double_height()
    receipt.text("Denní energetický report")
    receipt.double_height(False).bold(False)
    receipt.text(day.building_name)
    receipt.text(f"Datum: {day.report_date:%d.%m.%Y}")
    receipt.align(ALIGN_LEFT).rule()

    receipt.bold().columns("Celkem", f"{total:.1f} kWh").bold(False)
    receipt.columns("Odhad nákladů", f"{total * day.price_czk_per_kwh:.0f} Kč")
    receipt.columns("Cena", f"{day.price_czk_per_kwh:.2f} Kč/kWh")
    receipt.columns("Průměr", f"{average:.1f} kWh/h")
    receipt.columns("Špička", f"{peak:.1f} kWh @ {hour:02d}:00")
    receipt.rule()

    receipt.bold().text("Top spotřebiče").bold(False)
    max_kwh = max([1.0] + [consumer.kwh for consumer in day.top_consumers])
    for consumer in day.top_consumers:
        receipt.columns(consumer.name, f"{consumer.kwh:.1f}")
        receipt.text(text_bar(consumer.kwh, max_kwh, width))
    receipt.rule()

    receipt.bold().text("Kategorie").bold(False)
    category_total = sum(category.kwh for category in day.category_breakdown)
    for category in day.category_breakdown:
        share = 100.0 * category.kwh / category_total if category_total > 0 else 0.0
        receipt.columns(category.name, f"{share:.0f}%")
    receipt.rule()

    receipt.bold().text("Checklist").bold(False)
    for alert in evaluate_alerts(day):
        receipt.bold(not alert.ok)
        receipt.text(f"{'[OK]' if alert.ok else '[!!]'} {alert.text}")
    receipt.bold(False)

    receipt.feed(3).cut()

    return receipt.to_bytes()


def write_receipt(day: EnergyDay, output_path: Path, width: int = 32) -> Path:
    """Write the receipt command stream to a file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = build_receipt(day, width)
    output_path.write_bytes(payload)

    logger.info(f"Saved ESC/POS receipt ({len(payload):,} bytes) to: {output_path}")
    return output_path
