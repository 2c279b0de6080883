import matplotlib

matplotlib.use("Agg")

import pytest

from rainpi.config import clear_config


class ScriptedRandom:
    """Random source that replays fixed values, cycling when exhausted."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture(autouse=True)
def _reset_config():
    clear_config()
    yield
    clear_config()


@pytest.fixture
def scripted():
    return ScriptedRandom
