# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color constants and the rich `Theme` used by aaparser console output.

`OneColors` holds hex values from the One Dark palette. Style names registered by
`get_one_theme()` are used by the help renderer and the error reporting sink so that
output can be restyled in one place.
"""
from rich.theme import Theme


class OneColors:
    """One Dark color palette."""

    BLACK = "#282C34"
    GUTTER_GREY = "#4B5263"
    COMMENT_GREY = "#5C6370"
    WHITE = "#ABB2BF"
    DARK_RED = "#BE5046"
    LIGHT_RED = "#E06C75"
    DARK_YELLOW = "#D19A66"
    LIGHT_YELLOW = "#E5C07B"
    GREEN = "#98C379"
    CYAN = "#56B6C2"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"

    BLUE_b = f"bold {BLUE}"
    CYAN_b = f"bold {CYAN}"
    LIGHT_RED_b = f"bold {LIGHT_RED}"


def get_one_theme() -> Theme:
    """Return the rich Theme with aaparser's named styles."""
    return Theme(
        {
            "usage": OneColors.BLUE_b,
            "section": "bold",
            "flag": OneColors.CYAN,
            "metavar": OneColors.LIGHT_YELLOW,
            "operand": OneColors.GREEN,
            "command": OneColors.MAGENTA,
            "description": OneColors.WHITE,
            "error": OneColors.LIGHT_RED_b,
            "hint": OneColors.COMMENT_GREY,
            "version": OneColors.BLUE_b,
        }
    )
