import sys, os

import pytest

# Ensure src (and this directory, for the shared helpers) is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
TESTS = os.path.dirname(__file__)
for path in (SRC, TESTS):
    if path not in sys.path:
        sys.path.insert(0, path)

from gemfall.events.bus import EventBus
from helpers import EventRecorder


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def recorder(bus):
    return EventRecorder(bus)
