import logging

from kubernetes_asyncio import client

from osmetrics.models.metrics import ConnectionParams

logger = logging.getLogger(__name__)


def build_configuration(params: ConnectionParams) -> client.Configuration:
    """
    Builds a Kubernetes client Configuration pointing at the configured API
    endpoint and authenticating with the static bearer token.
    """
    configuration = client.Configuration()
    configuration.host = params.base_url
    configuration.api_key = {"authorization": f"Bearer {params.access_token}"}

    if params.verify is False:
        configuration.verify_ssl = False
    elif isinstance(params.verify, str):
        configuration.ssl_ca_cert = params.verify

    return configuration


def get_core_v1_api(params: ConnectionParams) -> client.CoreV1Api:
    """
    Returns a CoreV1Api bound to its own ApiClient.
    The caller owns the client and must close `api.api_client`.
    """
    api_client = client.ApiClient(configuration=build_configuration(params))
    logger.debug("Created Kubernetes API client for %s", params.base_url)
    return client.CoreV1Api(api_client)
