#!/usr/bin/env python3
"""
Smoke test for a running HostelInsight server.

Logs in as each of the accounts created by ``manage.py ensure_test_users``,
hits every read endpoint the role may use and reports failures.  Expects
the hostel to be seeded (``manage.py seed_hostel``).

    python unified_api_test.py [BASE_URL]
"""
import sys
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests

BASE_URL = sys.argv[1].rstrip("/") if len(sys.argv) > 1 else "http://127.0.0.1:8000"

TEST_USERS = {
    "admin": {"email": "admin@hostelinsight.com", "password": "123456"},
    "student": {"email": "student1@hostelinsight.com", "password": "123456"},
}

COMMON = [
    ("GET", "/healthz", None, 200),
    ("GET", "/api/auth/me", None, 200),
    ("GET", "/api/hostel/floors", None, 200),
    ("GET", "/api/hostel/summary", None, 200),
    ("GET", "/api/dashboard", None, 200),
]

BY_ROLE = {
    "admin": [
        ("GET", "/api/admin/dashboard", None, 200),
        ("GET", "/api/admin/room-change", None, 200),
        ("GET", "/api/admin/room-change?status=Approved", None, 200),
        ("GET", "/api/admin/complaints", None, 200),
        ("GET", "/api/admin/feedback", None, 200),
        ("GET", "/api/admin/laundry", None, 200),
        ("GET", "/api/admin/late-entry?status=Pending", None, 200),
        ("GET", "/api/admin/leave?status=Pending", None, 200),
        ("GET", "/api/admin/students", None, 200),
        ("GET", "/api/personal-details", None, 403),
    ],
    "student": [
        ("GET", "/api/bookings/me", None, 200),
        ("GET", "/api/room-change/mine", None, 200),
        ("GET", "/api/complaints/mine", None, 200),
        ("GET", "/api/laundry/mine", None, 200),
        ("GET", "/api/late-entry/mine", None, 200),
        ("GET", "/api/leave/mine", None, 200),
        ("GET", "/api/personal-details", None, 200),
        ("GET", "/api/admin/dashboard", None, 403),
    ],
}


@dataclass
class TestResult:
    success: bool
    endpoint: str
    method: str
    status_code: int
    response_time: float
    role: str
    error_message: str = ""


class HostelAPITester:
    def __init__(self):
        self.session = requests.Session()
        self.results: List[TestResult] = []
        self.refresh: Optional[str] = None

    @property
    def errors(self) -> List[TestResult]:
        return [r for r in self.results if not r.success]

    def login(self, role: str) -> bool:
        creds = TEST_USERS[role]
        resp = self.request(role, "POST", "/api/auth/login", creds, 200)
        if resp is None or resp.status_code != 200:
            return False
        data = resp.json()
        self.session.headers["Authorization"] = f"Token {data['token']}"
        self.refresh = data.get("jwt_refresh")
        return True

    def request(self, role: str, method: str, endpoint: str, data: Optional[Dict], expected: int):
        start = time.time()
        try:
            resp = self.session.request(method, f"{BASE_URL}{endpoint}", json=data, timeout=10)
        except requests.RequestException as e:
            self.results.append(TestResult(False, endpoint, method, 0, time.time() - start, role, str(e)))
            print(f"ERR  [{role}] {method} {endpoint}: {e}")
            return None
        elapsed = time.time() - start
        ok = resp.status_code == expected
        self.results.append(TestResult(ok, endpoint, method, resp.status_code, elapsed, role,
                                       "" if ok else resp.text[:200]))
        print(f"{'OK ' if ok else 'FAIL'} [{role}] {method} {endpoint} -> {resp.status_code} ({elapsed:.2f}s)")
        return resp

    def run_role(self, role: str):
        self.session = requests.Session()
        if not self.login(role):
            return
        for method, endpoint, data, expected in COMMON + BY_ROLE[role]:
            self.request(role, method, endpoint, data, expected)
        self.request(role, "POST", "/api/auth/logout", {"refresh": self.refresh}, 200)

    def run(self) -> bool:
        for role in TEST_USERS:
            self.run_role(role)
        self.report()
        return not self.errors

    def report(self):
        total = len(self.results)
        print(f"\n{total - len(self.errors)}/{total} checks passed")
        for r in self.errors:
            print(f"  [{r.role}] {r.method} {r.endpoint} -> {r.status_code}: {r.error_message}")


def main():
    sys.exit(0 if HostelAPITester().run() else 1)


if __name__ == "__main__":
    main()
