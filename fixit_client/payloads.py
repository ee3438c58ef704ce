"""Request envelope construction.

Turns caller-supplied fields (and optional file attachments) into either a
JSON body or a multipart form body:

- enum-valued fields are lowercased before transmission
- any attached file switches the whole payload to multipart
- in multipart mode nested objects are JSON-stringified, lists become
  repeated fields, booleans become "true"/"false" and None values are dropped
- the file field name comes from the operation's upload contract
"""

from __future__ import annotations

import json
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Mapping, Sequence

from fixit_client.config.upload_contracts import UploadContract
from fixit_client.errors import MissingFileError, ValidationError


@dataclass(frozen=True)
class UploadFile:
    """A file attachment for a multipart request."""

    filename: str
    content: bytes | BinaryIO
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> UploadFile:
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or guessed or "application/octet-stream",
        )

    def as_httpx_file(self) -> tuple[str, bytes | BinaryIO, str]:
        return (self.filename, self.content, self.content_type)


@dataclass(frozen=True)
class RequestBody:
    """Outgoing body: exactly one of ``json`` or ``data``/``files`` is used."""

    json: Any = None
    data: dict[str, Any] | None = None
    files: list[tuple[str, tuple]] | None = None

    @property
    def is_multipart(self) -> bool:
        return bool(self.files)

    def as_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``ApiClient.request``."""
        if self.is_multipart:
            return {"data": self.data, "files": self.files}
        return {"json": self.json}


def lowercase_fields(payload: Mapping[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """Return a copy of ``payload`` with the named enum fields lowercased.

    A field may name a nested key with a dot (``"frequency.type"``). String
    values are lowercased; list values are lowercased element-wise.
    """
    result = dict(payload)
    for name in fields:
        head, _, tail = name.partition(".")
        if head not in result:
            continue
        if tail:
            nested = result[head]
            if isinstance(nested, Mapping):
                result[head] = lowercase_fields(nested, [tail])
            continue
        result[head] = _lower(result[head])
    return result


def _lower(value: Any) -> Any:
    if isinstance(value, str):
        return value.lower()
    if isinstance(value, (list, tuple)):
        return [str(item).lower() for item in value]
    return value


def form_value(value: Any) -> str:
    """Render a single non-list value as a form field string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def form_fields(payload: Mapping[str, Any], bracket_lists: bool = False) -> dict[str, Any]:
    """Re-serialize every payload field as multipart form values."""
    fields: dict[str, Any] = {}
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            items = [form_value(item) for item in value if item is not None]
            fields[f"{key}[]" if bracket_lists else key] = items
        else:
            fields[key] = form_value(value)
    return fields


def build_request_body(
    payload: Mapping[str, Any] | None,
    files: Sequence[UploadFile] | None = None,
    contract: UploadContract | None = None,
    lowercase: Iterable[str] = (),
) -> RequestBody:
    """Build the outgoing body for an operation.

    Zero files yields a JSON body; one or more files yields a multipart body
    with every payload field re-serialized as a form field.

    Raises
    ------
    MissingFileError
        If the contract requires more files than were given.
    ValidationError
        If more files were given than the contract allows, or files were
        given without a contract.
    """
    normalized = lowercase_fields(payload or {}, lowercase)
    attachments = [f for f in (files or []) if f is not None]

    if contract is not None:
        if len(attachments) < contract.min_files:
            raise MissingFileError()
        if contract.max_files is not None and len(attachments) > contract.max_files:
            raise ValidationError(
                f"At most {contract.max_files} file(s) allowed for field '{contract.field_name}'"
            )

    if not attachments:
        return RequestBody(json=normalized)

    if contract is None:
        raise ValidationError("File attachments are not supported for this operation")

    return RequestBody(
        data=form_fields(normalized, bracket_lists=contract.bracket_lists),
        files=[(contract.field_name, f.as_httpx_file()) for f in attachments],
    )
