import os

os.environ.setdefault("SIGNOUT_SKIP_DOTENV", "1")

import pytest

from observability.metrics import reset_metrics_client


@pytest.fixture(autouse=True)
def _reset_metrics():
    yield
    reset_metrics_client()
