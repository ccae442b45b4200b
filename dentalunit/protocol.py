"""Serial frame format shared by the touch panel and the chair controller.

Every frame is four bytes: a start byte (0x7F), an address byte, a command
byte and a checksum that is the low eight bits of the sum of the first three.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

START_BYTE = 0x7F
PANEL_ADDRESS = 0x01
FRAME_LENGTH = 4

PRESETS_PER_GROUP = 3
PRESET_GROUP_COUNT = 4


class SerialCommand(IntEnum):
    """Command codes understood by the chair controller."""

    NONE = 0x00
    CHAIRUP = 0x01
    CHAIRDOWN = 0x02
    BACKRESTFORWARD = 0x03
    BACKRESTBACKWARD = 0x04
    PREPOSITION_A1 = 0x05
    PREPOSITION_A2 = 0x06
    PREPOSITION_A3 = 0x07
    PREPOSITION_B1 = 0x08
    PREPOSITION_B2 = 0x09
    PREPOSITION_B3 = 0x0A
    PREPOSITION_C1 = 0x0B
    PREPOSITION_C2 = 0x0C
    PREPOSITION_C3 = 0x0D
    PREPOSITION_D1 = 0x0E
    PREPOSITION_D2 = 0x0F
    PREPOSITION_D3 = 0x10
    RESET1 = 0x11
    RESET2 = 0x12
    OPERATINGLIGHT = 0x13
    WATERHEATER = 0x14
    BOWLRINSING = 0x15
    CUPFILLER = 0x16
    CALLASSIST = 0x17
    SET = 0x18
    OK = 0x19
    ERROR = 0x1A
    FILMVIEW = 0x1B
    DR_1 = 0x1C
    DR_2 = 0x1D
    DR_3 = 0x1E
    DR_4 = 0x1F


class FrameError(ValueError):
    """Raised when received bytes do not form a valid frame."""


@dataclass(frozen=True)
class Frame:
    """A decoded frame."""

    address: int
    command: int
    crc: int

    @property
    def known_command(self) -> SerialCommand | None:
        """The command as a SerialCommand, or None if the code is unknown."""
        try:
            return SerialCommand(self.command)
        except ValueError:
            return None


def checksum(start: int, address: int, command: int) -> int:
    """Return the eight-bit sum of the first three bytes of a frame."""
    return (start + address + command) & 0xFF


def encode_command(command: int) -> bytes:
    """Build the four-byte frame the panel sends for ``command``."""
    code = int(command)
    if not 0 <= code <= 0xFF:
        raise ValueError(f"command code out of byte range: {code}")
    return bytes(
        (START_BYTE, PANEL_ADDRESS, code, checksum(START_BYTE, PANEL_ADDRESS, code))
    )


def decode_frame(data: bytes) -> Frame:
    """Decode received bytes into a Frame.

    The bytes are read as a big-endian number of which only the low 32 bits
    count, so a short read leaves the start byte zero and a long one keeps
    only its last four bytes.
    """
    value = int.from_bytes(bytes(data), "big") & 0xFFFFFFFF
    start, address, command, crc = value.to_bytes(FRAME_LENGTH, "big")
    if start != START_BYTE:
        raise FrameError(f"wrong first byte: {start:02X}")
    expected = checksum(start, address, command)
    if crc != expected:
        raise FrameError(
            f"wrong CRC - frame CRC: {crc:02X} calculated CRC: {expected:02X}"
        )
    return Frame(address=address, command=command, crc=crc)


def preset_command(group: int, slot: int) -> SerialCommand:
    """Return the preset-position command for ``group`` (0-3) and ``slot`` (1-3)."""
    group_index = int(group)
    if not 0 <= group_index < PRESET_GROUP_COUNT:
        raise ValueError(f"preset group out of range: {group_index}")
    if not 1 <= slot <= PRESETS_PER_GROUP:
        raise ValueError(f"preset slot out of range: {slot}")
    return SerialCommand(
        SerialCommand.PREPOSITION_A1 + (slot - 1) + PRESETS_PER_GROUP * group_index
    )