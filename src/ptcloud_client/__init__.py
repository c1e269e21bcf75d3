"""CloudPT / MEO Cloud API client library.

A typed, synchronous Python client for the Portuguese cloud storage services
MEO Cloud and CloudPT.

Example:
    from ptcloud_client import CloudClient, CloudConfig, Service

    config = CloudConfig(
        consumer_key="your_key",
        consumer_secret="your_secret",
        service=Service.MEOCLOUD,
    )

    with CloudClient(config) as client:
        # Authenticate (first time)
        if not client.load_token():
            request_token = client.login().unwrap()
            print(f"Visit: {request_token.authorization_url}")
            if client.authorize(input("Enter verifier PIN: ")):
                client.save_token()
            else:
                print(client.error())

        # Use the client
        result = client.sharing.share("/Photos/logo.png")
        download = client.files.get_file("/Photos/logo.png")
"""

from ptcloud_client.client import CloudClient
from ptcloud_client.config import CloudConfig, Service
from ptcloud_client.exceptions import (
    CloudAuthError,
    CloudError,
    CloudLocalIOError,
    CloudTransportError,
    CloudValidationError,
)
from ptcloud_client.models.responses import ApiResponse, Decoded, Raw, SignedRequest
from ptcloud_client.result import Result

__version__ = "0.1.0"

__all__ = [
    # Main client
    "CloudClient",
    "CloudConfig",
    "Service",
    # Results
    "ApiResponse",
    "Decoded",
    "Raw",
    "Result",
    "SignedRequest",
    # Exceptions
    "CloudAuthError",
    "CloudError",
    "CloudLocalIOError",
    "CloudTransportError",
    "CloudValidationError",
]
