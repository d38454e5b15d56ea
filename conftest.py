"""
Root conftest.py — shared style fixtures for the styling tests.

Fixtures:
  red / bold / on_blue   — callables wrapping text in one SGR attribute
"""
from __future__ import annotations

from typing import Callable

import pytest

from pi_styling.ansi import BOLD, CSI, wrap


# ---------------------------------------------------------------------------
# Style callables
# ---------------------------------------------------------------------------

RED = f"{CSI}31m"
ON_BLUE = f"{CSI}44m"


@pytest.fixture
def red() -> Callable[[str], str]:
    return lambda text: wrap(text, RED)


@pytest.fixture
def bold() -> Callable[[str], str]:
    return lambda text: wrap(text, BOLD)


@pytest.fixture
def on_blue() -> Callable[[str], str]:
    return lambda text: wrap(text, ON_BLUE)
