import sys, os

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import pytest

from battlecore.events.bus import EventBus
from tests.helpers import make_core


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def core():
    """A battle in progress: Power Hitter against a single goblin."""
    return make_core(heroes=("power_hitter",), enemies=("goblin",))
