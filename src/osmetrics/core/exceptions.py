class OsMetricsError(Exception):
    """Base exception for osmetrics."""

    pass


class ConfigError(OsMetricsError):
    """Raised when the runtime configuration is incomplete or invalid."""

    pass


class ParseError(OsMetricsError, ValueError):
    """Raised when a resource quantity string cannot be parsed."""

    def __init__(self, raw, kind: str):
        self.raw = raw
        self.kind = kind
        super().__init__(f"Cannot parse {kind} quantity {raw!r}")


class UpstreamError(OsMetricsError):
    """Raised when the cluster API answers with an unusable status or cannot be reached."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class UpstreamShapeError(OsMetricsError):
    """Raised when a decoded upstream body fails structural or kind validation."""

    pass


class PoolFailure(OsMetricsError):
    """Raised when one task of a bounded pool fails; the whole run is aborted."""

    def __init__(self, item, error: BaseException):
        self.item = item
        self.error = error
        super().__init__(f"Collection aborted, task for {item} failed: {error}")
