"""Pydantic models for requests and responses."""

from ptcloud_client.models.auth import AccessToken, RequestToken
from ptcloud_client.models.params import (
    DeltaParams,
    GetFileParams,
    ListParams,
    MediaParams,
    MetadataParams,
    OperationParams,
    PutFileParams,
    RevisionsParams,
    SearchParams,
    ThumbnailParams,
)
from ptcloud_client.models.responses import ApiResponse, Decoded, Raw, SignedRequest

__all__ = [
    # Auth
    "AccessToken",
    "RequestToken",
    # Responses
    "ApiResponse",
    "Decoded",
    "Raw",
    "SignedRequest",
    # Operation parameters
    "DeltaParams",
    "GetFileParams",
    "ListParams",
    "MediaParams",
    "MetadataParams",
    "OperationParams",
    "PutFileParams",
    "RevisionsParams",
    "SearchParams",
    "ThumbnailParams",
]
