"""Binary response bodies (downloads, generated documents, CSV exports)."""

from __future__ import annotations

from dataclasses import dataclass
from email.message import Message
from pathlib import Path

import httpx


@dataclass(frozen=True)
class BinaryPayload:
    """Raw bytes of a download plus the metadata needed to save it."""

    content: bytes
    content_type: str | None = None
    filename: str | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> BinaryPayload:
        return cls(
            content=response.content,
            content_type=response.headers.get("content-type"),
            filename=filename_from_disposition(response.headers.get("content-disposition")),
        )

    def save_to(self, directory: str | Path, default_name: str) -> Path:
        """Write the payload into ``directory`` and return the file path.

        The server-suggested filename wins over ``default_name``; only its
        final path component is used.
        """
        name = Path(self.filename or default_name).name or default_name
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / name
        target.write_bytes(self.content)
        return target


def filename_from_disposition(header: str | None) -> str | None:
    """Extract the filename from a Content-Disposition header (RFC 6266 / 2231)."""
    if not header:
        return None
    message = Message()
    message["content-disposition"] = header
    filename = message.get_filename()
    if not filename:
        return None
    return filename.strip() or None
