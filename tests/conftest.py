import pytest
from fastapi.testclient import TestClient

import main


class FakeTranscriber:
    def __init__(self, transcript=None, available=True):
        self.transcript = transcript
        self.available = available
        self.calls = []

    async def transcribe(self, file_path, mime_type):
        self.calls.append((file_path, mime_type))
        return self.transcript


class FakeSynthesizer:
    def __init__(self, audio=None, available=True):
        self.audio = audio
        self.available = available

    async def synthesize(self, text):
        return self.audio


class FakeHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeLoop:
    """Collects call_later requests; ``advance`` fires everything due."""

    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback):
        handle = FakeHandle(callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, seconds=1):
        for _ in range(seconds):
            for handle in self.pending:
                if handle.cancelled:
                    continue
                handle.fired = True
                handle.callback()


@pytest.fixture
def fake_loop():
    return FakeLoop()


@pytest.fixture
def client():
    with TestClient(main.app) as test_client:
        yield test_client
