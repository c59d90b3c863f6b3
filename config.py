"""SchoolBoard — Centralized configuration module.

Firestore connection and collection settings, the signed-in school and
teacher defaults, and the logging format shared by every module.
"""

import logging
import sys
from pathlib import Path
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


ENV_FILE = Path(__file__).resolve().parent / ".env"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """SchoolBoard settings; every field can be overridden by an env var."""

    # Firestore (REST API)
    firestore_project_id: str = Field(
        default="",
        description="Google Cloud project hosting the Firestore database",
    )
    firestore_database: str = "(default)"
    firestore_base_url: str = "https://firestore.googleapis.com/v1"
    firestore_api_key: str = Field(
        default="",
        description="Web API key sent as the `key` query parameter",
    )
    firestore_id_token: str = Field(
        default="",
        description="Firebase ID token of the signed-in staff member",
    )
    request_timeout_seconds: float = 30.0

    # Collection names
    students_collection: str = "students"
    users_collection: str = "users"
    test_results_collection: str = "testResults"
    tests_collection: str = "test"
    remarks_collection: str = "remark"
    subjects_collection: str = "subjects"
    assessments_collection: str = "assessments"

    # Signed-in context (normally supplied by the auth provider)
    school_id: str = ""
    teacher_uid: str = ""

    # Aggregation and paging
    pass_threshold: float = 35.0
    meta_batch_size: int = 10
    results_batch_size: int = 30
    remarks_limit: int = 5

    log_level: str = "INFO"

    model_config = {
        "env_file": str(ENV_FILE),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
_LOG_FORMAT = "%(asctime)s | %(name)-32s | %(levelname)-7s | %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    """(Re)configure the root logger; *level* defaults to ``Settings.log_level``."""
    effective_level = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.INFO),
        format=_LOG_FORMAT,
        datefmt=_LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # Request-level chatter from the HTTP stack
    for noisy in ("httpx", "httpcore", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``schoolboard.`` namespace."""
    return logging.getLogger(f"schoolboard.{name}")


# ---------------------------------------------------------------------------
# Configured on import
# ---------------------------------------------------------------------------
setup_logging()
