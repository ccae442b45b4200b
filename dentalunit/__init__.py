"""Serial frame protocol, button styles, panel state machine and serial relay command for a dental unit operator panel."""

__version__ = "0.1.0"