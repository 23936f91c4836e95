import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv(ROOT / ".env")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def no_admin_api(monkeypatch):
    monkeypatch.delenv("ADMIN_API_URL", raising=False)
    monkeypatch.delenv("ADMIN_API_TOKEN", raising=False)
