"""State machine behind the dental unit's touch panel.

The controller keeps track of which buttons are lit and which preset group
and position are selected. It turns button presses into command frames for
the chair controller and relays frames that arrive from the voice assistant.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum, IntEnum

from .protocol import FrameError, Frame, SerialCommand, decode_frame, encode_command, preset_command
from .styles import ButtonKind, active_style, chair_direction_style, normal_style

log = logging.getLogger(__name__)


class KeyState(Enum):
    """Which chair movement key is being held down."""

    WAITING = 0
    CHAIR_UP = 1
    CHAIR_DOWN = 2
    BACKREST_FORWARD = 3
    BACKREST_BACKWARD = 4


class PresetGroup(IntEnum):
    """Groups of stored chair positions, one per dentist."""

    A = 0
    B = 1
    C = 2
    D = 3


class Button(Enum):
    """Buttons on the panel."""

    GROUP_A = "PresetPositionGroupA"
    GROUP_B = "PresetPositionGroupB"
    GROUP_C = "PresetPositionGroupC"
    GROUP_D = "PresetPositionGroupD"
    PRESET_1 = "PresetPosition1"
    PRESET_2 = "PresetPosition2"
    PRESET_3 = "PresetPosition3"
    RINSING = "RinsingPosition"
    WATER_HEATER = "WaterHeater"
    CUP_FILLER = "CupFiller"
    OPERATING_LIGHT = "OperatingLight"
    BOWL_RINSING = "BowlRinsing"
    FILM_VIEWER = "FilmViewer"
    BACKREST_FORWARD = "BackrestForward"
    BACKREST_BACKWARD = "BackrestBackward"
    CHAIR_UP = "ChairUpward"
    CHAIR_DOWN = "ChairDownward"
    SETTING = "Setting"
    RESET = "Reset"
    CALL_ASSIST = "CallAssist"


_KIND = {button: ButtonKind.NONE for button in Button} | {
    Button.WATER_HEATER: ButtonKind.CIRCLE,
    Button.CUP_FILLER: ButtonKind.CIRCLE,
    Button.OPERATING_LIGHT: ButtonKind.CIRCLE,
    Button.BOWL_RINSING: ButtonKind.CIRCLE,
    Button.SETTING: ButtonKind.SETTING,
    Button.RESET: ButtonKind.RESET,
    Button.CALL_ASSIST: ButtonKind.CALL_ASSIST,
}

_GROUP_BUTTONS = {
    PresetGroup.A: Button.GROUP_A,
    PresetGroup.B: Button.GROUP_B,
    PresetGroup.C: Button.GROUP_C,
    PresetGroup.D: Button.GROUP_D,
}
_GROUP_OF_BUTTON = {button: group for group, button in _GROUP_BUTTONS.items()}

_GROUP_COMMANDS = {
    PresetGroup.A: SerialCommand.DR_1,
    PresetGroup.B: SerialCommand.DR_2,
    PresetGroup.C: SerialCommand.DR_3,
    PresetGroup.D: SerialCommand.DR_4,
}
_GROUP_OF_COMMAND = {command: group for group, command in _GROUP_COMMANDS.items()}

_SLOTS = {Button.PRESET_1: 1, Button.PRESET_2: 2, Button.PRESET_3: 3}
_POSITION_BUTTONS = (*_SLOTS, Button.RINSING)

_DIRECTIONS = {
    Button.CHAIR_UP: KeyState.CHAIR_UP,
    Button.CHAIR_DOWN: KeyState.CHAIR_DOWN,
    Button.BACKREST_FORWARD: KeyState.BACKREST_FORWARD,
    Button.BACKREST_BACKWARD: KeyState.BACKREST_BACKWARD,
}

_KEY_COMMANDS = {
    KeyState.CHAIR_UP: SerialCommand.CHAIRUP,
    KeyState.CHAIR_DOWN: SerialCommand.CHAIRDOWN,
    KeyState.BACKREST_FORWARD: SerialCommand.BACKRESTFORWARD,
    KeyState.BACKREST_BACKWARD: SerialCommand.BACKRESTBACKWARD,
}

# Lit while held, dark again on release.
_MOMENTARY = {
    Button.WATER_HEATER: SerialCommand.WATERHEATER,
    Button.CUP_FILLER: SerialCommand.CUPFILLER,
    Button.BOWL_RINSING: SerialCommand.BOWLRINSING,
    Button.RESET: SerialCommand.RESET1,
    Button.CALL_ASSIST: SerialCommand.CALLASSIST,
}

# Each press switches between on and off.
_TOGGLES = {
    Button.OPERATING_LIGHT: SerialCommand.OPERATINGLIGHT,
    Button.FILM_VIEWER: SerialCommand.FILMVIEW,
    Button.SETTING: SerialCommand.SET,
}


class DentalUnit:
    """Panel state and the commands it sends through ``send``."""

    def __init__(self, send: Callable[[bytes], object]) -> None:
        self._send = send
        self.key_state = KeyState.WAITING
        self.active_group = PresetGroup.A
        self.active_position: Button | None = None
        self.switched_on: set[Button] = set()
        self._port_free = True
        self._pending_voice: bytes | None = None
        self._styles = {button: normal_style(_KIND[button]) for button in Button}
        for button in _DIRECTIONS:
            self._styles[button] = chair_direction_style()
        self._styles[Button.GROUP_A] = active_style(_KIND[Button.GROUP_A])

    @property
    def voice_assist_pending(self) -> bool:
        """Whether a voice-assist frame is waiting for the port to be free."""
        return self._pending_voice is not None

    def style_of(self, button: Button) -> str:
        """Current style sheet of ``button``."""
        return self._styles[Button(button)]

    def press(self, button: Button) -> None:
        """Handle a button being pressed."""
        button = Button(button)
        if button in _GROUP_OF_BUTTON:
            self._select_group(_GROUP_OF_BUTTON[button])
        elif button in _SLOTS:
            if self.active_position is not button:
                self._select_position(button)
                self.send_command(preset_command(self.active_group, _SLOTS[button]))
        elif button is Button.RINSING:
            self.send_command(SerialCommand.RINSING_RESET if False else SerialCommand.RESET2)
            if self.active_position is not button:
                self._select_position(button)
        elif button in _DIRECTIONS:
            self.key_state = _DIRECTIONS[button]
            self._clear_position()
        elif button in _MOMENTARY:
            self.send_command(_MOMENTARY[button])
            self._light(button, True)
        elif button in _TOGGLES:
            self.send_command(_TOGGLES[button])
            on = button not in self.switched_on
            if on:
                self.switched_on.add(button)
            else:
                self.switched_on.discard(button)
            self._light(button, on)

    def release(self, button: Button) -> None:
        """Handle a button being released."""
        button = Button(button)
        if button in _DIRECTIONS:
            self.key_state = KeyState.WAITING
        elif button in _MOMENTARY:
            self._light(button, False)

    def send_command(self, command: int) -> bytes:
        """Send the frame for ``command`` and return it."""
        frame = encode_command(command)
        self._port_free = False
        try:
            self._send(frame)
        finally:
            self._port_free = True
        try:
            name = SerialCommand(int(command)).name
        except ValueError:
            name = f"0x{int(command):02X}"
        log.debug("Command sent: %s - %s", name, frame.hex())
        return frame

    def tick(self) -> None:
        """Repeat the movement command of the key being held, if any."""
        command = _KEY_COMMANDS.get(self.key_state)
        if command is not None:
            log.debug("%s", self.key_state.name)
            self.send_command(command)

    def receive_voice_assist(self, data: bytes) -> Frame | None:
        """Relay bytes from the voice assistant and act on group commands.

        The bytes are forwarded at once if the output is free, otherwise kept
        until :meth:`flush_voice_assist`. Returns the decoded frame, or None
        when the bytes are not a valid frame.
        """
        data = bytes(data)
        if self._port_free:
            self._send(data)
        else:
            self._pending_voice = data
        log.debug("Received data: %s", data.hex())
        try:
            frame = decode_frame(data)
        except FrameError as exc:
            log.warning("%s", exc)
            return None
        group = _GROUP_OF_COMMAND.get(frame.known_command)
        if group is not None:
            self._select_group(group)
        return frame

    def flush_voice_assist(self) -> bool:
        """Send a held voice-assist frame if the output is free; report whether one went."""
        if not self._port_free or self._pending_voice is None:
            return False
        data, self._pending_voice = self._pending_voice, None
        self._send(data)
        return True

    def _light(self, button: Button, on: bool) -> None:
        style = active_style if on else normal_style
        self._styles[button] = style(_KIND[button])

    def _clear_position(self) -> None:
        for button in _POSITION_BUTTONS:
            self._light(button, False)
        self.active_position = None

    def _select_position(self, button: Button) -> None:
        self._clear_position()
        self._light(button, True)
        self.active_position = button

    def _select_group(self, group: PresetGroup) -> None:
        self.send_command(_GROUP_COMMANDS[group])
        for other, button in _GROUP_BUTTONS.items():
            self._light(button, other is group)
        self._clear_position()
        self.active_group = group