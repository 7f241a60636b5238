from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT
from ..core.exceptions import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    timeout: float = DEFAULT_API_TIMEOUT
    token: Optional[str] = None


def _error_message(resp) -> Optional[str]:
    """Pick the server's ``message``/``reason`` from an error body, if any."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        msg = body.get("message") or body.get("reason") or body.get("error")
        return str(msg) if msg else None
    return None


class HRApiClient:
    """Thin JSON client over the remote HR REST API.

    Every method returns the decoded JSON body untouched; shaping it into
    canonical records is the normalizers' job. Network errors and non-2xx
    answers raise FetchError.
    """

    def __init__(self, config: ApiConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return headers

    def _request(self, method: str, path: str, *, params: Optional[dict] = None, json: Any = None) -> Any:
        url = self._url(path)
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise FetchError(f"Network error: {e}", url=url) from e

        if not (200 <= resp.status_code < 300):
            server_message = _error_message(resp)
            message = server_message or f"Request failed with status {resp.status_code}"
            logger.warning("%s %s -> %s: %s", method, url, resp.status_code, message)
            raise FetchError(message, status_code=resp.status_code, url=url, server_message=server_message)

        try:
            return resp.json()
        except ValueError as e:
            raise FetchError("Response is not valid JSON", status_code=resp.status_code, url=url) from e

    # Directory
    def get_kyc_forms(self) -> Any:
        return self._request("GET", "/kyc")

    # Attendance
    def get_all_attendance(self) -> Any:
        return self._request("GET", "/attendance/all")

    def get_employee_monthly_attendance(self, employee_id: str, *, month: int, year: int) -> Any:
        return self._request(
            "GET",
            "/attendance/report/monthly/employee",
            params={"employeeId": employee_id, "month": month, "year": year},
        )

    def get_monthly_summary(self, employee_id: str, *, month: int, year: int) -> Any:
        return self._request(
            "GET", f"/attendance/{employee_id}/monthly-summary", params={"month": month, "year": year}
        )

    def get_monthly_stats(self, employee_id: str, *, month: int, year: int) -> Any:
        return self._request(
            "GET", f"/attendance/{employee_id}/monthly-stats", params={"month": month, "year": year}
        )

    def get_regularizations(self) -> Any:
        return self._request("GET", "/attendance/regularization-history/all")

    # Leave
    def get_leave_history(self, employee_id: str) -> Any:
        return self._request("GET", f"/leave/history/{employee_id}")

    def get_leave_balance(self, employee_id: str) -> Any:
        return self._request("GET", f"/leave/balance/{employee_id}")

    # Uniforms / ID cards
    def get_uniforms(self) -> Any:
        return self._request("GET", "/uniforms/all")

    def get_id_cards(self) -> Any:
        return self._request("GET", "/id-cards/all")

    # Status transitions
    def post_kyc_action(self, employee_id: str, action: str, *, reason: Optional[str] = None) -> Any:
        body = {"reason": reason} if reason else None
        return self._request("POST", f"/kyc/{employee_id}/{action}", json=body)

    def update_leave_status(self, leave_id: str, status: str, *, rejection_reason: Optional[str] = None) -> Any:
        payload: dict = {"status": status}
        if rejection_reason:
            payload["rejectionReason"] = rejection_reason
        return self._request("PUT", f"/leave/update/{leave_id}", json=payload)

    def approve_regularization(self, record_id: str, *, approved_by: str) -> Any:
        return self._request(
            "PATCH",
            f"/attendance/regularize/{record_id}/approve",
            json={"status": "Approved", "approvedBy": approved_by},
        )

    def reject_regularization(self, record_id: str, *, reason: str) -> Any:
        return self._request(
            "PATCH",
            f"/attendance/regularize/{record_id}/reject",
            json={"status": "Rejected", "rejectionReason": reason},
        )
