from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from osmetrics.models.metrics import MetricRecord


class BaseExporter(ABC):
    """Abstract base class for file exporters of a collected record set.

    Subclasses should provide a DEFAULT_FILENAME and implement `export`.
    """

    DEFAULT_FILENAME: str = "osmetrics-export"

    @abstractmethod
    async def export(self, data: List[MetricRecord], path: str | None = None) -> str:
        """Export the provided records to disk. Return the written path."""
        raise NotImplementedError()
