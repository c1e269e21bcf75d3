"""Storage API modules."""

from ptcloud_client.api.account import AccountAPI
from ptcloud_client.api.fileops import FileOpsAPI
from ptcloud_client.api.files import FilesAPI
from ptcloud_client.api.sharing import SharingAPI

__all__ = ["AccountAPI", "FileOpsAPI", "FilesAPI", "SharingAPI"]
