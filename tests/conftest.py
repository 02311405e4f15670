import os
import tempfile

import pytest
from hypothesis import HealthCheck, settings

# Keep log files out of the home directory; loggers are created at import time.
os.environ.setdefault("HILBERT_ANIM_LOG_DIR", tempfile.mkdtemp(prefix="hilbert_anim_logs_"))

settings.register_profile(
    "default",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("default")


@pytest.fixture(autouse=True)
def disable_progress_bars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HILBERT_ANIM_PROGRESS", "0")
    yield
