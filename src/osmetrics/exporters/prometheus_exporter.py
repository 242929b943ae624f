# src/osmetrics/exporters/prometheus_exporter.py
"""
Renders MetricRecords in the Prometheus text exposition format (0.0.4).
"""

import math
import os
from typing import Dict, Iterable, List, Optional

import aiofiles

from osmetrics.models.metrics import MetricRecord

from .base_exporter import BaseExporter

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def format_number(value: float) -> str:
    """Shortest round-trip decimal form; integral values drop the '.0'."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def format_sample(record: MetricRecord) -> str:
    line = record.name
    if record.labels:
        pairs = ",".join(f'{key}="{escape_label_value(str(val))}"' for key, val in record.labels.items())
        line += "{" + pairs + "}"
    line += " " + format_number(record.value)
    if record.timestamp is not None:
        line += " " + format_number(record.timestamp)
    return line


def serialize_metrics(records: Iterable[MetricRecord]) -> str:
    """
    Groups records by name in first-seen order and emits one HELP and one
    TYPE line per name, followed by its samples.
    """
    groups: Dict[str, List[MetricRecord]] = {}
    for record in records:
        groups.setdefault(record.name, []).append(record)

    lines: List[str] = []
    for name, group in groups.items():
        first = group[0]
        lines.append(f"# HELP {name} {escape_help(first.help)}")
        lines.append(f"# TYPE {name} {first.type}")
        lines.extend(format_sample(record) for record in group)

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


class PrometheusTextExporter(BaseExporter):
    DEFAULT_FILENAME = "osmetrics.prom"

    async def export(self, data: List[MetricRecord], path: Optional[str] = None) -> str:
        out_path = path or self.DEFAULT_FILENAME
        # Ensure parent directory exists
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)

        async with aiofiles.open(out_path, "w", encoding="utf-8") as fh:
            await fh.write(serialize_metrics(data or []))
        return out_path
