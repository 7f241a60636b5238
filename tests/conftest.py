from __future__ import annotations

from datetime import datetime

import pytest
import requests

from hr_reporting.api.client import ApiConfig, HRApiClient

BASE_URL = "https://hr.test/api"


class FakeResponse:
    def __init__(self, status_code=200, body=None, *, raw_text=None):
        self.status_code = status_code
        self._body = body
        self._raw_text = raw_text

    def json(self):
        if self._raw_text is not None:
            raise ValueError("not json")
        return self._body


class FakeSession:
    """Scripted stand-in for requests.Session keyed by (method, path)."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def add(self, method, path, response):
        self.routes[(method, path)] = response

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        self.calls.append({"method": method, "path": path, "params": params, "json": json, "timeout": timeout})
        response = self.routes.get((method, path))
        if response is None:
            return FakeResponse(404, {"message": f"no route {method} {path}"})
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response()
        return response

    def count(self, method, path):
        return sum(1 for c in self.calls if c["method"] == method and c["path"] == path)


@pytest.fixture
def fixed_now():
    return datetime(2025, 5, 20, 10, 0, 0)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def api(session):
    return HRApiClient(ApiConfig(base_url=BASE_URL, timeout=5), session=session)


@pytest.fixture
def network_error():
    return requests.ConnectionError("connection refused")


@pytest.fixture
def kyc_payload():
    return {
        "kycForms": [
            {
                "_id": "k1",
                "status": "Pending",
                "personalDetails": {
                    "employeeId": "EMP001",
                    "fullName": "Asha Rao",
                    "designation": "Supervisor",
                    "projectName": "Exozen - Ops",
                },
            },
            {
                "_id": "k2",
                "status": "Approved",
                "personalDetails": {
                    "employeeId": "EMP002",
                    "fullName": "Ravi Kumar",
                    "designation": "Technician",
                    "projectName": "Prestige Tower",
                },
            },
            {
                "_id": "k3",
                "status": "Pending",
                "personalDetails": {
                    "employeeId": "EMP003",
                    "fullName": "Meena Iyer",
                    "designation": "Technician",
                    "projectName": "Exozen - Ops",
                },
            },
            {"_id": "k4", "personalDetails": {"fullName": "No Id"}},
        ]
    }


@pytest.fixture
def attendance_payload():
    return {
        "attendance": [
            {
                "_id": "a1",
                "employeeId": "EMP001",
                "date": "2025-05-01T00:00:00.000Z",
                "punchInTime": "2025-05-01T09:00:00.000Z",
                "punchOutTime": "2025-05-01T17:30:00.000Z",
                "status": "Present",
                "isLate": False,
            },
            {
                "_id": "a2",
                "employeeId": "EMP002",
                "date": "2025-05-02",
                "punchInTime": "2025-05-02T09:45:00.000Z",
                "punchOutTime": None,
                "status": "Present",
                "isLate": True,
            },
            {
                "_id": "a3",
                "employeeId": "EMP003",
                "date": "2025-05-05",
                "punchInTime": "2025-05-05T18:00:00.000Z",
                "punchOutTime": "2025-05-05T09:00:00.000Z",
                "status": "Absent",
            },
            {"_id": "a4", "date": "2025-05-05", "status": "Present"},
        ]
    }


@pytest.fixture
def leave_history_payload():
    return {
        "employeeId": "EMP001",
        "leaveHistory": [
            {
                "leaveId": "L1",
                "leaveType": "EL",
                "startDate": "2025-05-06",
                "endDate": "2025-05-07",
                "numberOfDays": 2,
                "status": "Approved",
                "reason": "Family function",
            },
            {
                "leaveId": "L2",
                "leaveType": "SL",
                "startDate": "2025-05-12",
                "endDate": "2025-05-12",
                "isHalfDay": True,
                "status": "Pending",
                "reason": "Clinic visit",
            },
            {"leaveType": "CL", "startDate": "2025-05-13", "endDate": "2025-05-13", "status": "Rejected"},
        ],
    }


@pytest.fixture
def leave_balance_payload():
    return {
        "employeeId": "EMP001",
        "balances": {
            "EL": {"allocated": 12, "used": 2, "remaining": 10, "pending": 0},
            "SL": {"allocated": 6, "used": 0, "remaining": 5.5, "pending": 0.5},
            "CompOff": {"allocated": 2, "used": 1, "remaining": 1, "pending": 0},
        },
        "totalAllocated": 20,
        "totalUsed": 3,
        "totalRemaining": 16.5,
        "totalPending": 0.5,
    }


@pytest.fixture
def fake_response():
    return FakeResponse
