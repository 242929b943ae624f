from .pod_lister import PodLister
from .usage_fetcher import fetch_pod_usage

__all__ = [
    "PodLister",
    "fetch_pod_usage",
]
