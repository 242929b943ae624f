# src/osmetrics/core/config.py

import logging
import os
from typing import List, Optional, Union

from dotenv import load_dotenv

from osmetrics.core.exceptions import ConfigError
from osmetrics.models.metrics import DEFAULT_TIMEOUT, ConnectionParams

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

SERVICE_ACCOUNT_DIR = "/var/run/secrets/kubernetes.io/serviceaccount"

_TRUTHY = ("true", "1", "t", "y", "yes")


def _read_file(path: str) -> Optional[str]:
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip()


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    def __init__(self):
        self.ACCESS_TOKEN = self._get_secret("ACCESS_TOKEN") or _read_file(
            os.path.join(SERVICE_ACCOUNT_DIR, "token")
        )

    @staticmethod
    def _get_secret(key: str, default: str = None) -> str:
        """
        Retrieves a secret from a file (Docker secret/volume) or falls back to environment variable.

        Raises:
            PermissionError: If the secret file exists but cannot be read due to permissions.
            IOError: If the secret file exists but cannot be read due to I/O errors.
        """
        secret_file = f"/etc/osmetrics/secrets/{key}"
        if os.path.exists(secret_file):
            try:
                with open(secret_file, "r") as f:
                    value = f.read().strip()
                    logging.getLogger(__name__).debug(f"Loaded secret '{key}' from {secret_file}")
                    return value
            except PermissionError as e:
                raise PermissionError(
                    f"Secret file '{secret_file}' exists but cannot be read due to permission denied. "
                    f"Please check file permissions or run with appropriate privileges."
                ) from e
            except (IOError, OSError) as e:
                raise IOError(
                    f"Secret file '{secret_file}' exists but cannot be read: {e}. "
                    f"Please check the file integrity and system resources."
                ) from e
        return os.getenv(key, default)

    # Resolved at access time so in-cluster defaults and env changes are picked up.
    @property
    def OS_API(self) -> str:
        api = os.getenv("OS_API", "")
        if api:
            return api
        host = os.getenv("KUBERNETES_SERVICE_HOST")
        port = os.getenv("KUBERNETES_SERVICE_PORT")
        if host and port:
            return f"https://{host}:{port}"
        return ""

    @property
    def DEFAULT_NAMESPACE(self) -> List[str]:
        raw = os.getenv("DEFAULT_NAMESPACE")
        if raw is None:
            raw = _read_file(os.path.join(SERVICE_ACCOUNT_DIR, "namespace")) or ""
        return [ns.strip() for ns in raw.split(",") if ns.strip()]

    @property
    def VERIFY(self) -> Union[bool, str]:
        """TLS verification for upstream calls: False, True, or a CA bundle path."""
        if os.getenv("VERIFY_TLS", "True").lower() not in _TRUTHY:
            return False
        ca_cert = os.getenv("CA_CERT")
        if ca_cert:
            return ca_cert
        service_account_ca = os.path.join(SERVICE_ACCOUNT_DIR, "ca.crt")
        if os.path.exists(service_account_ca):
            return service_account_ca
        return True

    @property
    def CONCURRENCY(self) -> int:
        try:
            return int(os.getenv("CONCURRENCY", "10"))
        except ValueError as e:
            raise ConfigError(f"CONCURRENCY must be an integer: {e}") from e

    @property
    def REQUEST_TIMEOUT(self) -> float:
        try:
            return float(os.getenv("REQUEST_TIMEOUT", DEFAULT_TIMEOUT))
        except ValueError as e:
            raise ConfigError(f"REQUEST_TIMEOUT must be a number of seconds: {e}") from e

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- API server variables ---
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "3000"))

    # --- Telemetry ---
    OTEL_ENABLED = os.getenv("OTEL_ENABLED", "False").lower() in _TRUTHY

    def validate_instance(self):
        """
        Validates that the necessary configuration variables are set.

        Raises:
            ConfigError: On a missing endpoint or token, or an invalid concurrency or timeout.
        """
        if not self.OS_API:
            raise ConfigError("OS_API must be set (or run in-cluster with KUBERNETES_SERVICE_HOST/PORT).")
        if not self.ACCESS_TOKEN:
            raise ConfigError("ACCESS_TOKEN must be set (or a service account token must be mounted).")
        if self.CONCURRENCY < 1:
            raise ConfigError("CONCURRENCY must be at least 1.")
        if self.REQUEST_TIMEOUT <= 0:
            raise ConfigError("REQUEST_TIMEOUT must be positive.")
        if not self.DEFAULT_NAMESPACE:
            logging.getLogger(__name__).warning("DEFAULT_NAMESPACE is not set; /metrics requires ?namespace=.")

    def connection_params(self) -> ConnectionParams:
        return ConnectionParams(
            os_api=self.OS_API,
            access_token=self.ACCESS_TOKEN or "",
            verify=self.VERIFY,
            timeout=self.REQUEST_TIMEOUT,
        )


# Instantiate the config to be imported by other modules. Validation is left to
# the entry points so importing the package never requires a cluster.
config = Config()
