# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used by aaparser option actions.

These signals are raised from option action callbacks (for example `--help` or
`--version`) to stop a parse early without being treated as parse errors.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: Help output was rendered, stop parsing.
- VersionSignal: The version banner was printed, stop parsing.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in aaparser.

    These are not errors. They end a parse early after an option action
    already produced the output the user asked for.
    """


class HelpSignal(FlowSignal):
    """Raised after help information was displayed."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)


class VersionSignal(FlowSignal):
    """Raised after the version banner was displayed."""

    def __init__(self, message: str = "Version signal received."):
        super().__init__(message)
