"""Exporters package: exposition-format rendering and file outputs."""

from .base_exporter import BaseExporter
from .prometheus_exporter import CONTENT_TYPE, PrometheusTextExporter, serialize_metrics

__all__ = ["BaseExporter", "CONTENT_TYPE", "PrometheusTextExporter", "serialize_metrics"]
