"""Style sheets for the panel's buttons in their normal and active states."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

WINDOW_STYLE = "background-color: #e2f8fa;"

_FOCUS_RULE = "QPushButton:focus {    outline: none;}"


class ButtonKind(Enum):
    """Kinds of button that are drawn differently."""

    NONE = "none"
    CIRCLE = "circle"
    SETTING = "setting"
    RESET = "reset"
    CALL_ASSIST = "call_assist"


_NORMAL_FILL = {
    ButtonKind.NONE: "transparent",
    ButtonKind.CIRCLE: "transparent",
    ButtonKind.SETTING: "#49f937",
    ButtonKind.RESET: "#f93737",
    ButtonKind.CALL_ASSIST: "#f9f937",
}

_ACTIVE_FILL = {
    ButtonKind.NONE: "#37c7f9",
    ButtonKind.CIRCLE: "#37c7f9",
    ButtonKind.SETTING: "#35b029",
    ButtonKind.RESET: "#b02929",
    ButtonKind.CALL_ASSIST: "#b5b529",
}


class _IconAppearance(NamedTuple):
    flat: bool
    style_sheet: str | None


def _button_style(kind: ButtonKind, fill: str, text_color: str) -> str:
    radius = "40px" if kind is ButtonKind.CIRCLE else "10px"
    sheet = (
        "QPushButton {"
        f"background-color: {fill};"
        "border: 5px solid black;"
        f"color: {text_color};"
        f"border-radius: {radius};"
        "}"
    )
    if kind is ButtonKind.CIRCLE:
        sheet += _FOCUS_RULE
    return sheet


def normal_style(kind: ButtonKind = ButtonKind.NONE) -> str:
    """Style sheet of a button in its normal (off) state."""
    kind = ButtonKind(kind)
    return _button_style(kind, _NORMAL_FILL[kind], "black")


def active_style(kind: ButtonKind = ButtonKind.NONE) -> str:
    """Style sheet of a button in its active (on) state."""
    kind = ButtonKind(kind)
    return _button_style(kind, _ACTIVE_FILL[kind], "white")


def chair_direction_style() -> str:
    """Style sheet of the chair and backrest direction buttons."""
    return (
        "QPushButton {"
        "    background-color: transparent;"
        "    border: none;"
        "}" + _FOCUS_RULE
    )


def icon_style(flat: bool = True, transparent: bool = True) -> _IconAppearance:
    """Appearance of an icon button: whether it is flat and its style sheet, if any."""
    sheet = "background-color: transparent; border: none;" if transparent else None
    return _IconAppearance(flat=bool(flat), style_sheet=sheet)