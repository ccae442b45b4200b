"""Command-line entry point: links the voice assistant to the chair controller."""

from __future__ import annotations

import argparse
import itertools
import logging
import time
from dataclasses import dataclass

import serial

from .controller import DentalUnit

log = logging.getLogger(__name__)

DEFAULT_INPUT_PORT = "/dev/ttyS1"
DEFAULT_OUTPUT_PORT = "/dev/ttyS2"
DEFAULT_BAUDRATE = 115200
DEFAULT_INTERVAL_MS = 100


@dataclass(frozen=True)
class SerialSettings:
    """Line settings of a serial port: 8 data bits, no parity, one stop bit."""

    port: str
    baudrate: int = DEFAULT_BAUDRATE
    bytesize: int = serial.EIGHTBITS
    parity: str = serial.PARITY_NONE
    stopbits: float = serial.STOPBITS_ONE


class SerialLink:
    """A serial port that logs open failures and ignores traffic while closed."""

    def __init__(self, settings: SerialSettings) -> None:
        self.settings = settings
        self._port = None

    @property
    def is_open(self) -> bool:
        return self._port is not None

    def open(self) -> bool:
        """Open the port; report whether it succeeded."""
        s = self.settings
        try:
            self._port = serial.serial_for_url(
                s.port,
                baudrate=s.baudrate,
                bytesize=s.bytesize,
                parity=s.parity,
                stopbits=s.stopbits,
                xonxoff=False,
                rtscts=False,
                timeout=0,
            )
        except (serial.SerialException, ValueError, OSError) as exc:
            log.warning("Failed to open serial port %s: %s", s.port, exc)
            self._port = None
            return False
        log.info("Serial port %s opened successfully.", s.port)
        return True

    def write(self, data: bytes) -> int:
        """Write ``data``; return the number of bytes written."""
        if self._port is None:
            log.debug("Port %s not open, dropped %s", self.settings.port, bytes(data).hex())
            return 0
        return self._port.write(bytes(data)) or 0

    def read_available(self) -> bytes:
        """Return whatever bytes are waiting, without blocking."""
        if self._port is None:
            return b""
        waiting = self._port.in_waiting
        return self._port.read(waiting) if waiting else b""

    def close(self) -> None:
        if self._port is not None:
            self._port.close()
            self._port = None

    def __enter__(self) -> SerialLink:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text}")
    return value


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {text}")
    return value


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dentalunit",
        description="Relay voice-assistant frames to the dental chair controller.",
    )
    parser.add_argument("--input-port", default=DEFAULT_INPUT_PORT,
                        help="serial device the voice assistant writes to")
    parser.add_argument("--output-port", default=DEFAULT_OUTPUT_PORT,
                        help="serial device wired to the chair controller")
    parser.add_argument("--baudrate", type=_positive_int, default=DEFAULT_BAUDRATE)
    parser.add_argument("--interval", type=_positive_int, default=DEFAULT_INTERVAL_MS,
                        help="period of the key-state check in milliseconds")
    parser.add_argument("--cycles", type=_non_negative_int, default=0,
                        help="stop after this many checks (0 runs until interrupted)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def _run(unit: DentalUnit, voice_in: SerialLink, interval: float, cycles: int) -> None:
    # Voice-assist frames are polled at twice the rate of the key-state check.
    half = interval / 2
    ticks = 0
    for step in itertools.count():
        data = voice_in.read_available()
        if data:
            unit.receive_voice_assist(data)
        if unit.voice_assist_pending:
            unit.flush_voice_assist()
        if step % 2 == 1:
            unit.tick()
            ticks += 1
            if cycles and ticks >= cycles:
                return
        time.sleep(half)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    voice_in = SerialLink(SerialSettings(args.input_port, args.baudrate))
    panel_out = SerialLink(SerialSettings(args.output_port, args.baudrate))
    voice_in.open()
    panel_out.open()
    unit = DentalUnit(panel_out.write)
    try:
        _run(unit, voice_in, args.interval / 1000, args.cycles)
    except KeyboardInterrupt:
        pass
    finally:
        voice_in.close()
        panel_out.close()
    return 0