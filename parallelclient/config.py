"""Configuration for the Parallel API."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class APIConfig:
    """API configuration constants."""
    BASE_URL: str = "https://api.parallel.ai/v1beta"
    BETA_TAG: str = "search-extract-2025-10-10"
    SEARCH_ENDPOINT: str = "/search"
    EXTRACT_ENDPOINT: str = "/extract"
    TASK_RUNS_ENDPOINT: str = "/tasks/runs"
    CHAT_ENDPOINT: str = "/chat/completions"
    API_KEY_ENV: str = "PARALLEL_API_KEY"
    BASE_URL_ENV: str = "PARALLEL_BASE_URL"
    BETA_HEADER: str = "parallel-beta"
    API_KEY_HEADER: str = "x-api-key"
    DEFAULT_TIMEOUT_SECONDS: float = 30.0
    DEFAULT_POLL_INTERVAL_SECONDS: float = 5.0


API_CONFIG = APIConfig()
