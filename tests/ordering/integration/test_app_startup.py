"""The application module must start from a cold interpreter.

The test session has already imported and initialized the domain, so these
checks run in a fresh subprocess the way uvicorn and manage.py do.
"""

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[3]

HEALTH_CHECK = """
from fastapi.testclient import TestClient

import app

response = TestClient(app.app).get("/health")
print(response.status_code, response.json()["status"])
"""


def _run(code):
    env = {**os.environ, "PYTHONPATH": str(ROOT / "src"), "PROTEAN_ENV": "test"}
    return subprocess.run(
        [sys.executable, "-c", code],
        cwd=ROOT,
        env=env,
        capture_output=True,
        text=True,
        timeout=120,
    )


def test_app_imports_and_serves_health():
    result = _run(HEALTH_CHECK)
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().splitlines()[-1] == "200 ok"


def test_domain_initializes_before_collaborators_are_imported():
    result = _run("from ordering.domain import ordering; ordering.init(); print('ready')")
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().splitlines()[-1] == "ready"
