"""
Configuration management with environment variables.

Settings are read from the environment (and a `.env` file, if present)
and exposed through read-only properties.
"""

import os
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse
from dotenv import load_dotenv


STORE_BACKENDS = ("json", "memory", "supabase")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SecureString:
    """
    Wrapper for sensitive strings that prevents accidental exposure.

    Examples:
        >>> key = SecureString("service-role-key")
        >>> str(key)  # Returns "********"
        >>> key.get_value()  # Returns actual value
    """

    def __init__(self, value: str):
        self._value = value

    def get_value(self) -> str:
        """
        Get the actual value.

        Warning:
            Only pass the result to the HTTP client; never log it.
        """
        return self._value

    def __str__(self) -> str:
        return "********"

    def __repr__(self) -> str:
        return "SecureString(********)"

    def __eq__(self, other) -> bool:
        if isinstance(other, SecureString):
            return self._value == other._value
        return False

    def __hash__(self) -> int:
        return hash(self._value)


def _int_env(name: str, default: int, errors: List[str]) -> int:
    """Read an integer setting; a bad value is recorded and the default used."""
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        errors.append(f"{name} must be an integer, got: {raw!r}")
        return default


class Config:
    """
    Application configuration manager.

    Attributes:
        store_backend: "json", "memory" or "supabase"
        store_path: JSON snapshot file used by the json backend
        supabase_url: Project URL of the hosted database
        supabase_key: API key (SecureString)
        store_timeout: HTTP timeout in seconds
        store_failure_threshold: Failures before the circuit opens
        store_reset_timeout: Seconds before a trial call after opening
        log_level: Logging level name
        log_file: Optional log file path

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Using {config.store_backend} store")
    """

    @staticmethod
    def _validate_url(url: str, name: str) -> Optional[str]:
        """
        Validate URL format and scheme.

        Returns:
            Error message if invalid, None if valid
        """
        parsed = urlparse(url)

        if not parsed.scheme:
            return f"{name} must include URL scheme (http/https)"

        if parsed.scheme not in ['http', 'https']:
            return f"{name} must use http or https scheme, got: {parsed.scheme}"

        if not parsed.netloc:
            return f"{name} must have a valid domain"

        return None

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

        self._store_backend = os.getenv("LESSON_STORE_BACKEND", "json").lower()
        self._store_path = Path(os.getenv("LESSON_STORE_PATH", "data/lessons.json"))

        self._supabase_url = os.getenv("SUPABASE_URL")
        key = os.getenv("SUPABASE_KEY")
        self._supabase_key = SecureString(key) if key else None

        self._load_errors: List[str] = []
        self._store_timeout = _int_env("STORE_TIMEOUT", 10, self._load_errors)
        self._store_failure_threshold = _int_env("STORE_FAILURE_THRESHOLD", 3, self._load_errors)
        self._store_reset_timeout = _int_env("STORE_RESET_TIMEOUT", 60, self._load_errors)

        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("LOG_FILE") or None

    @property
    def store_backend(self) -> str:
        """Get store backend name."""
        return self._store_backend

    @property
    def store_path(self) -> Path:
        """Get JSON snapshot file path."""
        return self._store_path

    @property
    def supabase_url(self) -> str:
        """
        Get hosted database URL.

        Raises:
            ValueError: If SUPABASE_URL is not set
        """
        if not self._supabase_url:
            raise ValueError("SUPABASE_URL is not set in environment")
        return self._supabase_url.rstrip('/')

    @property
    def supabase_key(self) -> Optional[SecureString]:
        """Get hosted database API key (wrapped in SecureString)."""
        return self._supabase_key

    @property
    def store_timeout(self) -> int:
        """Get HTTP timeout in seconds."""
        return self._store_timeout

    @property
    def store_failure_threshold(self) -> int:
        """Get the number of failures before the circuit opens."""
        return self._store_failure_threshold

    @property
    def store_reset_timeout(self) -> int:
        """Get seconds to wait before retrying an open circuit."""
        return self._store_reset_timeout

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path, if file logging is enabled."""
        return self._log_file

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: Listing every problem found
        """
        errors = list(self._load_errors)

        if self._store_backend not in STORE_BACKENDS:
            errors.append(
                f"LESSON_STORE_BACKEND must be one of: {', '.join(STORE_BACKENDS)}"
            )

        if self._store_backend == "supabase":
            if not self._supabase_url:
                errors.append("SUPABASE_URL is required for the supabase backend")
            else:
                error = self._validate_url(self._supabase_url, "SUPABASE_URL")
                if error:
                    errors.append(error)

            if not self._supabase_key:
                errors.append("SUPABASE_KEY is required for the supabase backend")

        if self._store_timeout <= 0:
            errors.append("STORE_TIMEOUT must be positive")

        if self._store_failure_threshold <= 0:
            errors.append("STORE_FAILURE_THRESHOLD must be positive")

        if self._store_reset_timeout < 0:
            errors.append("STORE_RESET_TIMEOUT must not be negative")

        if self._log_level not in LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True
