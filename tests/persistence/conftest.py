import pytest

from src.medattend.medattend.core.exceptions import PersistenceError


class MemoryRepo:
    def __init__(self, docs=None, fail_saves=0, fail_loads=False):
        self.docs = dict(docs or {})
        self.fail_saves = fail_saves
        self.fail_loads = fail_loads
        self.save_attempts = 0

    def load(self, user_key):
        if self.fail_loads:
            raise PersistenceError("store down")
        return self.docs.get(user_key)

    def save(self, user_key, document):
        self.save_attempts += 1
        if self.fail_saves:
            if self.fail_saves > 0:
                self.fail_saves -= 1
            raise PersistenceError("store down")
        self.docs[user_key] = document


class FakeTimer:
    def __init__(self, delay, fn):
        self.delay = delay
        self.fn = fn
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fn()


class TimerLog:
    def __init__(self):
        self.timers = []

    def __call__(self, delay, fn):
        timer = FakeTimer(delay, fn)
        self.timers.append(timer)
        return timer


@pytest.fixture
def memory_repo():
    return MemoryRepo


@pytest.fixture
def timers():
    return TimerLog()
