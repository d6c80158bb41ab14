"""Environment configuration for the document task bridge.

Keys read by the project:
    PROCESSING_ENGINE              processing backend, selects the client class (default "gini")
    PROCESSING_TIMEOUT             HTTP timeout in seconds for the processing client
    PROCESSING_<ENGINE>_<KEY>      engine specific keys, e.g. PROCESSING_GINI_ACCESS_TOKEN
    DOCUMENT_POLLING_INTERVAL      seconds between two status requests while polling
    LOG_LEVEL, TIMEZONE, ROOT_DIR  logging setup
"""

import logging
import os


class HelperConfig:
    """Typed access to the environment plus the logger shared by clients and services."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def get_string_val(self, key: str, default: str | None = None) -> str:
        """Read a string setting such as PROCESSING_GINI_BASE_URL.

        Args:
            key (str): Environment variable name, upper-cased before lookup.
            default (str | None): Used when the variable is unset or empty. None makes the key required.

        Returns:
            str: The value without surrounding whitespace.

        Raises:
            ValueError: If a required key is missing.
        """
        key = key.upper()
        val = os.getenv(key) or None  # empty string counts as unset
        if val is None and default is None:
            raise ValueError(f"Environment variable '{key}' is not set.")
        return val.strip() if val is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Read a numeric setting such as DOCUMENT_POLLING_INTERVAL or PROCESSING_TIMEOUT.

        "2" yields the int 2, "0.5" the float 0.5.

        Raises:
            ValueError: If a required key is missing or the value is not a number.
        """
        key = key.upper()
        raw = os.getenv(key) or None
        if raw is None:
            if default is None:
                raise ValueError(f"Environment variable '{key}' is not set.")
            return default
        raw = raw.strip()
        try:
            return int(raw) if "." not in raw else float(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key}' is not a valid number: '{raw}'.")

    def get_logger(self) -> logging.Logger:
        return self._logger
