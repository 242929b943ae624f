"""osmetrics - per-container CPU/memory usage exporter for Kubernetes/OpenShift clusters."""

__version__ = "1.0.0"
