"""Upload contract models and YAML loader.

Maps each file-bearing operation to the multipart field name the backend's
upload middleware expects, plus the file-count limits for that route.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

BUNDLED_CONTRACTS_PATH = Path(__file__).with_name("upload_contracts.yaml")


class UploadContract(BaseModel):
    """Multipart contract for a single operation."""

    field_name: str = Field(min_length=1)
    min_files: int = Field(default=0, ge=0)
    max_files: int | None = Field(default=None, ge=1)
    bracket_lists: bool = False  # Send list fields as ``key[]``


# Fallback table used when no YAML file can be read.
_DEFAULT_CONTRACTS: dict[str, UploadContract] = {
    "leases.upload_document": UploadContract(field_name="documentFile", min_files=1, max_files=1),
    "rents.record_payment": UploadContract(field_name="documentFile", max_files=1),
    "rents.upload_proof": UploadContract(field_name="documentFile", min_files=1, max_files=1),
    "requests.create": UploadContract(field_name="files"),
    "requests.upload_media": UploadContract(field_name="mediaFiles", min_files=1),
    "scheduled_maintenance.create": UploadContract(field_name="media"),
    "scheduled_maintenance.update": UploadContract(field_name="media"),
    "onboarding.create": UploadContract(
        field_name="documentFile", min_files=1, max_files=1, bracket_lists=True
    ),
    "onboarding.update": UploadContract(field_name="documentFile", max_files=1, bracket_lists=True),
    "public.request_update": UploadContract(field_name="mediaFiles"),
    "public.scheduled_maintenance_update": UploadContract(field_name="mediaFiles"),
}


def default_upload_contracts() -> dict[str, UploadContract]:
    """Return a copy of the built-in contract table."""
    return dict(_DEFAULT_CONTRACTS)


def load_upload_contracts(yaml_path: str | Path | None = None) -> dict[str, UploadContract]:
    """Parse an upload contracts YAML file into typed UploadContract objects.

    Args:
        yaml_path: Path to the YAML file. Defaults to the table bundled
            with the package.

    Returns:
        A dict mapping operation names to UploadContract instances. Entries
        missing from the file fall back to the built-in table; an unreadable
        file yields the built-in table unchanged.
    """
    path = Path(yaml_path) if yaml_path is not None else BUNDLED_CONTRACTS_PATH

    if not path.exists():
        logger.warning("Upload contracts file not found at %s, using built-in defaults", path)
        return default_upload_contracts()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse upload contracts YAML at %s: %s", path, exc)
        return default_upload_contracts()

    if not isinstance(raw, dict) or not isinstance(raw.get("operations"), dict):
        logger.warning("Upload contracts YAML missing 'operations' key, using built-in defaults")
        return default_upload_contracts()

    contracts = default_upload_contracts()
    for operation, config in raw["operations"].items():
        try:
            contracts[operation] = UploadContract.model_validate(config)
        except Exception as exc:
            logger.error("Invalid upload contract for '%s': %s, skipping", operation, exc)

    return contracts
