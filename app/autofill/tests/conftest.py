import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeTotpGenerator:
    def __init__(self, code: str = "123456", fail: bool = False) -> None:
        self.code = code
        self.fail = fail
        self.calls = 0

    async def get_code(self, seed: str):
        self.calls += 1
        if self.fail:
            raise RuntimeError("totp backend unavailable")
        return self.code


@pytest.fixture
def totp_generator() -> FakeTotpGenerator:
    return FakeTotpGenerator()


@pytest.fixture
def failing_totp_generator() -> FakeTotpGenerator:
    return FakeTotpGenerator(fail=True)
