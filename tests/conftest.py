from io import StringIO

import pytest
from rich.console import Console

from aaparser.themes import get_one_theme


@pytest.fixture
def console():
    """A plain-text console writing to a buffer."""
    return Console(
        file=StringIO(),
        width=120,
        color_system=None,
        theme=get_one_theme(),
    )
