import pytest

from dentalunit.controller import Button, DentalUnit, KeyState, PresetGroup
from dentalunit.protocol import SerialCommand, encode_command
from dentalunit.styles import ButtonKind, active_style, chair_direction_style, normal_style


@pytest.fixture
def panel():
    sent = []
    return DentalUnit(sent.append), sent


def test_initial_styles(panel):
    unit, sent = panel
    assert sent == []
    assert unit.active_group is PresetGroup.A
    assert unit.style_of(Button.GROUP_A) == active_style(ButtonKind.NONE)
    assert unit.style_of(Button.GROUP_B) == normal_style(ButtonKind.NONE)
    assert unit.style_of(Button.CHAIR_UP) == chair_direction_style()
    assert unit.style_of(Button.WATER_HEATER) == normal_style(ButtonKind.CIRCLE)
    assert unit.style_of(Button.RESET) == normal_style(ButtonKind.RESET)


def test_group_press_sends_and_switches(panel):
    unit, sent = panel
    unit.press(Button.GROUP_B)
    assert sent == [encode_command(SerialCommand.DR_2)]
    assert unit.active_group is PresetGroup.B
    assert unit.style_of(Button.GROUP_B) == active_style(ButtonKind.NONE)
    assert unit.style_of(Button.GROUP_A) == normal_style(ButtonKind.NONE)


def test_group_press_repeats_for_active_group(panel):
    unit, sent = panel
    unit.press(Button.GROUP_A)
    assert sent == [encode_command(SerialCommand.DR_1)]


def test_preset_uses_active_group(panel):
    unit, sent = panel
    unit.press(Button.GROUP_C)
    sent.clear()
    unit.press(Button.PRESET_2)
    assert sent == [encode_command(SerialCommand.PREPOSITION_C2)]
    assert unit.active_position is Button.PRESET_2
    assert unit.style_of(Button.PRESET_2) == active_style(ButtonKind.NONE)
    unit.press(Button.PRESET_2)
    assert len(sent) == 1


def test_group_press_clears_position(panel):
    unit, sent = panel
    unit.press(Button.PRESET_1)
    unit.press(Button.GROUP_D)
    assert unit.active_position is None
    assert unit.style_of(Button.PRESET_1) == normal_style(ButtonKind.NONE)
    unit.press(Button.PRESET_3)
    assert sent[-1] == encode_command(SerialCommand.PREPOSITION_D3)


def test_rinsing_always_sends(panel):
    unit, sent = panel
    unit.press(Button.PRESET_1)
    unit.press(Button.RINSING)
    unit.press(Button.RINSING)
    assert sent[1:] == [encode_command(SerialCommand.RESET2)] * 2
    assert unit.active_position is Button.RINSING
    assert unit.style_of(Button.PRESET_1) == normal_style(ButtonKind.NONE)


def test_operating_light_toggles(panel):
    unit, sent = panel
    unit.press(Button.OPERATING_LIGHT)
    assert Button.OPERATING_LIGHT in unit.switched_on
    assert unit.style_of(Button.OPERATING_LIGHT) == active_style(ButtonKind.CIRCLE)
    unit.release(Button.OPERATING_LIGHT)
    assert unit.style_of(Button.OPERATING_LIGHT) == active_style(ButtonKind.CIRCLE)
    unit.press(Button.OPERATING_LIGHT)
    assert Button.OPERATING_LIGHT not in unit.switched_on
    assert unit.style_of(Button.OPERATING_LIGHT) == normal_style(ButtonKind.CIRCLE)
    assert sent == [encode_command(SerialCommand.OPERATINGLIGHT)] * 2


def test_setting_toggles(panel):
    unit, sent = panel
    unit.press(Button.SETTING)
    unit.release(Button.SETTING)
    assert unit.style_of(Button.SETTING) == active_style(ButtonKind.SETTING)
    assert sent == [encode_command(SerialCommand.SET)]


@pytest.mark.parametrize(
    "button, command, kind",
    [
        (Button.WATER_HEATER, SerialCommand.WATERHEATER, ButtonKind.CIRCLE),
        (Button.CUP_FILLER, SerialCommand.CUPFILLER, ButtonKind.CIRCLE),
        (Button.BOWL_RINSING, SerialCommand.BOWLRINSING, ButtonKind.CIRCLE),
        (Button.RESET, SerialCommand.RESET1, ButtonKind.RESET),
        (Button.CALL_ASSIST, SerialCommand.CALLASSIST, ButtonKind.CALL_ASSIST),
    ],
)
def test_momentary_buttons(panel, button, command, kind):
    unit, sent = panel
    unit.press(button)
    assert sent == [encode_command(command)]
    assert unit.style_of(button) == active_style(kind)
    unit.release(button)
    assert unit.style_of(button) == normal_style(kind)


def test_chair_up_wire_bytes(panel):
    unit, sent = panel
    unit.press(Button.CHAIR_UP)
    unit.tick()
    assert sent == [b"\x7f\x01\x01\x81"]


@pytest.mark.parametrize(
    "button, state, command",
    [
        (Button.CHAIR_UP, KeyState.CHAIR_UP, SerialCommand.CHAIRUP),
        (Button.CHAIR_DOWN, KeyState.CHAIR_DOWN, SerialCommand.CHAIRDOWN),
        (Button.BACKREST_FORWARD, KeyState.BACKREST_FORWARD, SerialCommand.BACKRESTFORWARD),
        (Button.BACKREST_BACKWARD, KeyState.BACKREST_BACKWARD, SerialCommand.BACKRESTBACKWARD),
    ],
)
def test_direction_held_repeats(panel, button, state, command):
    unit, sent = panel
    unit.press(Button.PRESET_1)
    sent.clear()
    unit.press(button)
    assert unit.key_state is state
    assert unit.active_position is None
    unit.tick()
    unit.tick()
    assert sent == [encode_command(command)] * 2
    unit.release(button)
    assert unit.key_state is KeyState.WAITING
    unit.tick()
    assert len(sent) == 2


def test_tick_while_waiting_sends_nothing(panel):
    unit, sent = panel
    unit.tick()
    assert sent == []


def test_voice_group_command(panel):
    unit, sent = panel
    data = encode_command(SerialCommand.DR_3)
    frame = unit.receive_voice_assist(data)
    assert frame.known_command is SerialCommand.DR_3
    assert sent == [data, encode_command(SerialCommand.DR_3)]
    assert unit.active_group is PresetGroup.C


def test_voice_bad_first_byte_is_forwarded_only(panel):
    unit, sent = panel
    data = b"\x00\x01\x1c\x1d"
    assert unit.receive_voice_assist(data) is None
    assert sent == [data]
    assert unit.active_group is PresetGroup.A


def test_voice_bad_crc(panel):
    unit, sent = panel
    data = bytearray(encode_command(SerialCommand.DR_2))
    data[3] ^= 0xFF
    assert unit.receive_voice_assist(bytes(data)) is None
    assert sent == [bytes(data)]
    assert unit.active_group is PresetGroup.A


def test_voice_held_while_port_busy():
    sent = []
    voice = encode_command(SerialCommand.OK)

    def send(data):
        sent.append(data)
        if len(sent) == 1:
            unit.receive_voice_assist(voice)

    unit = DentalUnit(send)
    unit.send_command(SerialCommand.CUPFILLER)
    assert sent == [encode_command(SerialCommand.CUPFILLER)]
    assert unit.voice_assist_pending
    assert unit.flush_voice_assist() is True
    assert sent[-1] == voice
    assert not unit.voice_assist_pending
    assert unit.flush_voice_assist() is False


def test_send_command_returns_frame(panel):
    unit, sent = panel
    frame = unit.send_command(SerialCommand.FILMVIEW)
    assert sent == [frame]
    assert frame == encode_command(SerialCommand.FILMVIEW)


def test_send_command_rejects_out_of_range(panel):
    unit, sent = panel
    with pytest.raises(ValueError):
        unit.send_command(256)
    assert sent == []


def test_unknown_button(panel):
    unit, _ = panel
    with pytest.raises(ValueError):
        unit.press("NoSuchButton")