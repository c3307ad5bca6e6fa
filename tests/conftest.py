import subprocess

import pytest


class FakePopen:
    calls = []

    def __init__(self, args, **kwargs):
        self.args = args
        self.pid = 4242
        FakePopen.calls.append(args)

    def wait(self, timeout=None):
        return 0


@pytest.fixture
def fake_popen(monkeypatch):
    FakePopen.calls = []
    monkeypatch.setattr(subprocess, "Popen", FakePopen)
    return FakePopen
