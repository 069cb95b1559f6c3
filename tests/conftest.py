"""Configure pytest for the project."""

import os
import sys
import tempfile

# Add the project root directory to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

# Settings are read from the environment on first use; pin them before any
# application module is imported.
_test_dir = tempfile.mkdtemp(prefix="earmark-tests-")
os.environ["APP_ENV"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_DIR"] = os.path.join(_test_dir, "logs")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_test_dir, "earmarks.db")
os.environ["GROQ_API_KEY"] = "test-groq-key"
os.environ["GOOGLE_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["OPENAI_VECTOR_STORE_ID"] = ""
os.environ["ENABLE_AUDIT_LOGGING"] = "false"
os.environ["RATE_LIMIT_PER_MINUTE"] = "1000"

from src.core.config import get_settings  # noqa: E402

get_settings.cache_clear()


def pytest_sessionfinish(session, exitstatus):
    from src.core.logging_config import reset_logging

    reset_logging()
