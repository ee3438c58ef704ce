"""Configuration: settings and upload contracts."""

from fixit_client.config.settings import ClientSettings
from fixit_client.config.upload_contracts import (
    UploadContract,
    default_upload_contracts,
    load_upload_contracts,
)

__all__ = [
    "ClientSettings",
    "UploadContract",
    "default_upload_contracts",
    "load_upload_contracts",
]
