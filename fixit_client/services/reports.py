"""Reporting endpoints (``/reports``) and the filtered listings they draw on."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService
from fixit_client.transport.binary import BinaryPayload

REPORT_BASE_URL = "/reports"
REPORT_FILTER_ENUMS = ("status", "category", "priority")


class ReportService(BaseService):
    service_name = "reports"

    async def maintenance_summary(self, params: dict[str, Any] | None = None) -> Any:
        """Summary of requests; accepts propertyId, status, category, date range, page, limit."""
        return await self._data(
            "maintenance_summary",
            "GET",
            f"{REPORT_BASE_URL}/maintenance-summary",
            params=self._lower(params, REPORT_FILTER_ENUMS),
        )

    async def vendor_performance(self, params: dict[str, Any] | None = None) -> Any:
        return await self._data("vendor_performance", "GET", f"{REPORT_BASE_URL}/vendor-performance", params=params)

    async def common_issues(self, params: dict[str, Any] | None = None) -> Any:
        return await self._data("common_issues", "GET", f"{REPORT_BASE_URL}/common-issues", params=params)

    async def filtered_requests(self, params: dict[str, Any] | None = None) -> Page | Any:
        return await self._list(
            "filtered_requests",
            "/requests",
            self._lower(params, REPORT_FILTER_ENUMS),
            shape=ShapeDescriptor.list_of("requests"),
        )

    async def filtered_scheduled_maintenance(self, params: dict[str, Any] | None = None) -> Page | Any:
        return await self._list(
            "filtered_scheduled_maintenance",
            "/scheduled-maintenance",
            self._lower(params, REPORT_FILTER_ENUMS),
            shape=ShapeDescriptor.list_of("tasks"),
        )

    async def download_maintenance_summary_csv(self, params: dict[str, Any] | None = None) -> BinaryPayload:
        return await self._blob(
            "download_maintenance_summary_csv",
            "GET",
            f"{REPORT_BASE_URL}/maintenance-summary",
            params=_csv_params(self._lower(params, REPORT_FILTER_ENUMS)),
        )

    async def download_maintenance_summary_csv_to(
        self, directory: str | Path, params: dict[str, Any] | None = None
    ) -> Path:
        return await self._download_to(
            "download_maintenance_summary_csv",
            directory,
            "maintenance-summary.csv",
            "GET",
            f"{REPORT_BASE_URL}/maintenance-summary",
            params=_csv_params(self._lower(params, REPORT_FILTER_ENUMS)),
        )


def _csv_params(params: dict[str, Any]) -> dict[str, Any]:
    return {**params, "format": "csv"}
