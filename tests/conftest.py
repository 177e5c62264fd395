import os
import sys

import pytest

# project root on the path so `algorithms`, `engine`, … import like they do from main.py
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class FakeHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Stands in for an asyncio loop: records call_later() and fires on demand."""

    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire(self):
        pending = self.pending
        assert len(pending) == 1, f"expected exactly one pending timer, got {len(pending)}"
        handle = pending[0]
        handle.fired = True
        handle.callback()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def client():
    from main import app

    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c
