# dentalunit

Panel logic for a dental unit operator panel. It encodes panel actions as
four-byte serial frames, tracks which buttons are lit and which preset group
and position are selected, gives the style sheet each button should show, and
relays voice-assistant frames from one serial line to the chair controller.

## Frame format

Every frame is four bytes:

| byte | meaning                                     |
|------|---------------------------------------------|
| 0    | start byte, `0x7F`                          |
| 1    | address, `0x01` for frames from the panel   |
| 2    | command (see `SerialCommand`)               |
| 3    | checksum: sum of bytes 0–2, modulo 256      |

```python
from dentalunit.protocol import SerialCommand, encode_command, decode_frame

frame = encode_command(SerialCommand.CHAIRUP)   # b"\x7f\x01\x01\x81"
decoded = decode_frame(frame)                   # Frame(address=1, command=1, crc=0x81)
decoded.known_command                           # SerialCommand.CHAIRUP
```

- `checksum(start, address, command)` returns the low eight bits of the sum.
- `encode_command(command)` raises `ValueError` for a code outside 0–255.
- `decode_frame(data)` reads the bytes as a big-endian number and keeps its
  low 32 bits, so fewer than four bytes leave the start byte zero and more than
  four keep only the last four. It raises `FrameError` (a `ValueError`) when
  the start byte is not `0x7F` or the checksum does not match.
- `preset_command(group, slot)` gives the preset-position command for group
  0–3 (A–D) and slot 1–3, e.g. `preset_command(1, 2)` is
  `SerialCommand.PREPOSITION_B2`; out-of-range values raise `ValueError`.

## Panel logic

`dentalunit.controller.DentalUnit` holds the panel state. It is given a
callable that receives each outgoing frame:

```python
from dentalunit.controller import DentalUnit, Button

sent = []
unit = DentalUnit(sent.append)
unit.press(Button.GROUP_B)      # sends DR_2, lights group B
unit.press(Button.PRESET_1)     # sends PREPOSITION_B1, lights preset 1
unit.press(Button.CHAIR_UP)     # clears the selected position
unit.tick()                     # sends CHAIRUP while the key is held
unit.release(Button.CHAIR_UP)
print(unit.style_of(Button.GROUP_B))
```

What the buttons do:

- `GROUP_A` … `GROUP_D` send `DR_1` … `DR_4`, light their own group button,
  darken the others and clear the selected position. Group A is selected at
  start.
- `PRESET_1` … `PRESET_3` send the preset command for the selected group,
  unless that position is already selected.
- `RINSING` always sends `RESET2` and selects the rinsing position.
- `CHAIR_UP`, `CHAIR_DOWN`, `BACKREST_FORWARD`, `BACKREST_BACKWARD` set
  `key_state` while held; each `tick()` then repeats the movement command.
  Releasing returns to `KeyState.WAITING`.
- `WATER_HEATER`, `CUP_FILLER`, `BOWL_RINSING`, `RESET`, `CALL_ASSIST` send
  their command and are lit only while held.
- `OPERATING_LIGHT`, `FILM_VIEWER`, `SETTING` send their command and switch
  on or off with each press; the lit ones are in `switched_on`.

`send_command(command)` sends a frame and returns it. Bytes from the voice
assistant go to `receive_voice_assist(data)`: they are forwarded unchanged,
decoded, and a `DR_1` … `DR_4` frame selects the matching group. It returns the
decoded `Frame`, or `None` when the bytes are not a valid frame. Bytes that
arrive while a command is being sent are held; `flush_voice_assist()` sends
them and reports whether it did (`voice_assist_pending` tells whether any are
held).

## Button styles

`dentalunit.styles` returns style-sheet strings in Qt's syntax:
`normal_style(kind)` and `active_style(kind)` for a `ButtonKind` (`NONE`,
`CIRCLE`, `SETTING`, `RESET`, `CALL_ASSIST`), `chair_direction_style()`, and
`icon_style(flat, transparent)`, which returns whether an icon button is flat
and its style sheet (or `None`).

## Running

```
pip install dentalunit
dentalunit --help
```

The `dentalunit` command opens the voice-assistant input line and the
controller output line at 8 data bits, no parity, one stop bit, and relays
frames from the first to the second. Options:

- `--input-port` (default `/dev/ttyS1`)
- `--output-port` (default `/dev/ttyS2`)
- `--baudrate` (default 115200)
- `--interval` key-state check period in milliseconds (default 100); incoming
  frames are polled at twice that rate
- `--cycles` stop after this many checks (default 0: run until interrupted)
- `-v`, `--verbose` log every frame

A port that fails to open is logged and traffic to it is dropped.

## What it does not do

The package draws no panel window: button styles are returned as strings for
whatever interface shows them, and the `dentalunit` command has no buttons to
press. From the command line the chair can only be driven through
voice-assistant frames; button presses reach the controller only through
`DentalUnit.press` in your own code.