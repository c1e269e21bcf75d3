"""Descriptors for every remote command of the storage API.

A command is addressed as ``/1/<name>[/<root>][/<path>]`` on one of two hosts:
``publicapi`` for metadata and control calls, ``api-content`` for file
transfers.
"""

from dataclasses import dataclass
from enum import StrEnum

from ptcloud_client.models.types import HttpMethod


class Endpoint(StrEnum):
    """API host serving a command."""

    API = "publicapi"
    CONTENT = "api-content"


class Payload(StrEnum):
    """Where a command's options travel."""

    QUERY = "query"  # query string
    FORM = "form"  # form-encoded request body
    RAW = "raw"  # raw bytes body, options in the query string


@dataclass(frozen=True, slots=True)
class Command:
    """Immutable description of a remote command."""

    name: str
    method: HttpMethod = "GET"
    endpoint: Endpoint = Endpoint.API
    payload: Payload = Payload.QUERY


# Account
ACCOUNT_INFO = Command("Account/Info")

# Metadata and browsing
METADATA = Command("Metadata")
METADATA_SHARE = Command("MetadataShare")
LIST = Command("List")
SEARCH = Command("Search")
REVISIONS = Command("Revisions")
RESTORE = Command("Restore", "POST", payload=Payload.FORM)
THUMBNAILS = Command("Thumbnails", endpoint=Endpoint.CONTENT)
MEDIA = Command("Media", "POST", payload=Payload.FORM)
DELTA = Command("Delta", "POST", payload=Payload.FORM)

# File transfer
GET_FILE = Command("Files", endpoint=Endpoint.CONTENT)
PUT_FILE = Command("Files", "POST", Endpoint.CONTENT, Payload.RAW)

# Sharing
SHARES = Command("Shares", "POST", payload=Payload.FORM)
SHARE_FOLDER = Command("ShareFolder", "POST", payload=Payload.FORM)
LIST_LINKS = Command("ListLinks")
DELETE_LINK = Command("DeleteLink", "POST", payload=Payload.FORM)
LIST_SHARED_FOLDERS = Command("ListSharedFolders")

# File operations
COPY = Command("Fileops/Copy", "POST", payload=Payload.FORM)
COPY_REF = Command("CopyRef")
MOVE = Command("Fileops/Move", "POST", payload=Payload.FORM)
CREATE_FOLDER = Command("Fileops/CreateFolder", "POST", payload=Payload.FORM)
DELETE = Command("Fileops/Delete", "POST", payload=Payload.FORM)
UNDELETE = Command("UndeleteTree", "POST", payload=Payload.FORM)
