import logging

import httpx

from .. import __version__
from ..models.metrics import ConnectionParams

logger = logging.getLogger(__name__)

USER_AGENT = f"osmetrics/{__version__}"


def get_async_http_client(params: ConnectionParams) -> httpx.AsyncClient:
    """
    Returns a configured httpx.AsyncClient for the cluster API with:
    - The per-call timeout from the connection params.
    - Bearer authentication and JSON Accept headers.
    - The TLS verification setting, or the transport override when one is given.
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Authorization": f"Bearer {params.access_token}",
        "Accept": "application/json",
    }

    # Note: httpx has no built-in retry logic and none is wanted here; a failed
    # call surfaces to the caller as-is.
    kwargs = {}
    if params.transport is not None:
        kwargs["transport"] = params.transport

    return httpx.AsyncClient(
        timeout=httpx.Timeout(params.timeout),
        headers=headers,
        verify=params.verify,
        **kwargs,
    )
