import pytest


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingSink:
    def __init__(self):
        self.events = []
        self.stop_all_calls = 0

    def midi_event(self, event):
        self.events.append(event)

    def stop_all(self):
        self.stop_all_calls += 1


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def sink():
    return RecordingSink()
