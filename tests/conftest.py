import json
import os

import pytest
from fastapi.testclient import TestClient

SAMPLE_RULES = [
    {"prefix": "02080996910", "totalLength": 11, "status": "Allocated", "provider": "ExampleTelco"},
    {"prefix": "02079460000", "totalLength": 11, "status": "Allocated", "provider": "Drama Telecom"},
    {"prefix": "0151496", "totalLength": 11, "status": "Allocated", "provider": "Mersey Networks"},
    {"prefix": "0800", "totalLength": 11, "status": "Free for allocation"},
    {"prefix": "07700900", "totalLength": 11, "status": "Allocated(Closed Range)", "provider": "Drama Mobile"},
    {"prefix": "118", "totalLength": 6, "status": "Allocated", "provider": "Directory Co"},
]


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "prefixes.json"
    path.write_text(json.dumps(SAMPLE_RULES), encoding="utf-8")
    return path


@pytest.fixture
def client(rules_file, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setenv("RULES_PATH", str(rules_file))

    from ukvalidator.core.settings import get_settings

    get_settings.cache_clear()

    from ukvalidator.main import app

    with TestClient(app) as test_client:
        yield test_client

    get_settings.cache_clear()
    os.environ.pop("RULES_PATH", None)


@pytest.fixture
def unready_client(tmp_path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """Client whose rule file does not exist, so no snapshot is published."""
    monkeypatch.setenv("RULES_PATH", str(tmp_path / "missing.json"))

    from ukvalidator.core.settings import get_settings

    get_settings.cache_clear()

    from ukvalidator.main import app

    with TestClient(app) as test_client:
        yield test_client

    get_settings.cache_clear()
