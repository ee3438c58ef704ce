"""Shared plumbing for the domain service modules.

Every public service coroutine funnels its transport call through
``BaseService._call`` so failures are converted, logged and raised the same
way everywhere: the transport exception becomes a tagged ApiError, one ERROR
record is written with ``service``/``operation`` context, and the ApiError
(never the raw httpx exception) reaches the caller.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Iterable, Mapping, Sequence

from fixit_client.config.upload_contracts import UploadContract
from fixit_client.errors import ApiError, ErrorKind, UploadContractError
from fixit_client.normalizer import (
    Page,
    ShapeDescriptor,
    normalize_entity,
    normalize_list,
    unwrap_envelope,
)
from fixit_client.payloads import RequestBody, UploadFile, build_request_body, lowercase_fields
from fixit_client.transport.binary import BinaryPayload
from fixit_client.transport.client import ApiClient

logger = logging.getLogger(__name__)


class BaseService:
    """Base class for one REST resource.

    Parameters
    ----------
    api_client:
        The shared transport client.
    contracts:
        Upload contract table (operation name -> UploadContract).
    """

    service_name = "base"

    def __init__(self, api_client: ApiClient, contracts: Mapping[str, UploadContract]) -> None:
        self._api = api_client
        self._contracts = contracts

    # ------------------------------------------------------------------
    # Error boundary
    # ------------------------------------------------------------------

    async def _call(self, operation: str, awaitable: Awaitable[Any]) -> Any:
        """Await a transport call, converting any failure into ApiError."""
        try:
            return await awaitable
        except Exception as exc:
            error = ApiError.from_exception(exc)
            self._log_failure(operation, error)
            if error is exc:
                raise
            raise error from exc

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    async def _list(
        self,
        operation: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        abort: asyncio.Event | None = None,
        shape: ShapeDescriptor | None = None,
        background: bool = False,
    ) -> Page | Any:
        body = await self._call(
            operation, self._api.get(path, params=params, abort=abort, background=background)
        )
        return normalize_list(body, shape or ShapeDescriptor.list_of())

    async def _entity(
        self,
        operation: str,
        method: str,
        path: str,
        shape: ShapeDescriptor | None = None,
        **kwargs: Any,
    ) -> Any:
        body = await self._call(operation, self._api.request(method, path, **kwargs))
        return normalize_entity(body, shape or ShapeDescriptor.entity())

    async def _raw(self, operation: str, method: str, path: str, **kwargs: Any) -> Any:
        return await self._call(operation, self._api.request(method, path, **kwargs))

    async def _data(self, operation: str, method: str, path: str, **kwargs: Any) -> Any:
        """Return the ``data`` member of a success envelope (or the whole body)."""
        body = await self._raw(operation, method, path, **kwargs)
        data, _meta = unwrap_envelope(body)
        return data

    async def _blob(self, operation: str, method: str, path: str, **kwargs: Any) -> BinaryPayload:
        return await self._raw(operation, method, path, response_type="blob", **kwargs)

    async def _download_to(
        self,
        operation: str,
        directory: str | Path,
        default_name: str,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> Path:
        payload = await self._blob(operation, method, path, **kwargs)
        target = payload.save_to(directory, default_name)
        logger.info(
            "Saved %s download to %s",
            operation,
            target,
            extra={"service": self.service_name, "operation": operation},
        )
        return target

    # ------------------------------------------------------------------
    # Payload helpers
    # ------------------------------------------------------------------

    def _contract(self, operation: str) -> UploadContract:
        key = f"{self.service_name}.{operation}"
        try:
            return self._contracts[key]
        except KeyError:
            raise UploadContractError(f"No upload contract registered for '{key}'") from None

    def _upload_body(
        self,
        operation: str,
        payload: Mapping[str, Any] | None,
        files: Sequence[UploadFile] | None,
        lowercase: Iterable[str] = (),
    ) -> RequestBody:
        """Build the JSON or multipart body for a file-bearing operation."""
        try:
            return build_request_body(payload, files, self._contract(operation), lowercase)
        except ApiError as error:
            self._log_failure(operation, error)
            raise

    @staticmethod
    def _lower(payload: Mapping[str, Any] | None, fields: Iterable[str]) -> dict[str, Any]:
        return lowercase_fields(payload or {}, fields)

    def _log_failure(self, operation: str, error: ApiError) -> None:
        log = logger.info if error.kind is ErrorKind.ABORTED else logger.error
        log(
            "%s.%s failed: %s",
            self.service_name,
            operation,
            error.message,
            extra={
                "service": self.service_name,
                "operation": operation,
                "error_kind": error.kind.value,
                "status_code": error.status_code,
            },
        )


def count_from(data: Any) -> int:
    """Read a counter from ``{count}``, ``{unreadCount}`` or a bare number."""
    if isinstance(data, dict):
        data = data.get("count", data.get("unreadCount", 0))
    try:
        return int(data or 0)
    except (TypeError, ValueError):
        return 0
