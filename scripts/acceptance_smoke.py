"""
Acceptance smoke checks for thumbnail-studio.

Usage:
  DATABASE_URL=sqlite:///./data/acceptance_thumbnail_studio.db PYTHONPATH=src .venv/bin/python scripts/acceptance_smoke.py
  DATABASE_URL=sqlite:///./data/acceptance_thumbnail_studio.db PYTHONPATH=src .venv/bin/python scripts/acceptance_smoke.py --with-external
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass
from typing import Callable

from fastapi.testclient import TestClient

SMOKE_USER = "acceptance-smoke-user"


@dataclass
class CheckResult:
    name: str
    passed: bool
    detail: str


def _ok(name: str, detail: str) -> CheckResult:
    return CheckResult(name=name, passed=True, detail=detail)


def _fail(name: str, detail: str) -> CheckResult:
    return CheckResult(name=name, passed=False, detail=detail)


def run_check(name: str, fn: Callable[[], CheckResult]) -> CheckResult:
    try:
        return fn()
    except Exception as exc:  # pragma: no cover - smoke tool
        return _fail(name, f"exception: {exc}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run acceptance smoke checks.")
    parser.add_argument(
        "--with-external",
        action="store_true",
        help="Run a real generation against the inference API and ImageKit.",
    )
    args = parser.parse_args()

    database_url = os.getenv("DATABASE_URL", "sqlite:///./data/acceptance_thumbnail_studio.db")
    os.environ["DATABASE_URL"] = database_url
    os.environ.setdefault("NO_PROXY", "*")

    from thumbnail_studio.core.database import init_db
    from thumbnail_studio.main import app

    init_db()

    client = TestClient(app)
    headers = {"X-User-Id": SMOKE_USER}
    results: list[CheckResult] = []

    def check_root() -> CheckResult:
        resp = client.get("/")
        if resp.status_code != 200:
            return _fail("GET /", f"status={resp.status_code}, body={resp.text[:200]}")
        return _ok("GET /", "healthy")

    def check_health() -> CheckResult:
        resp = client.get("/health")
        if resp.status_code != 200:
            return _fail("GET /health", f"status={resp.status_code}, body={resp.text[:200]}")
        return _ok("GET /health", "healthy")

    def check_options() -> CheckResult:
        resp = client.get("/api/thumbnails/options")
        if resp.status_code != 200:
            return _fail("GET /api/thumbnails/options", f"status={resp.status_code}")
        data = resp.json()
        if not data.get("styles") or not data.get("color_schemes"):
            return _fail("GET /api/thumbnails/options", f"unexpected response: {json.dumps(data)[:300]}")
        return _ok("GET /api/thumbnails/options", f"styles={len(data['styles'])}")

    def check_list_requires_auth() -> CheckResult:
        resp = client.get("/api/thumbnails")
        if resp.status_code != 401:
            return _fail("GET /api/thumbnails (anonymous)", f"status={resp.status_code}")
        return _ok("GET /api/thumbnails (anonymous)", "401 as expected")

    def check_delete_missing_is_success() -> CheckResult:
        resp = client.delete("/api/thumbnails/99999999", headers=headers)
        if resp.status_code != 200:
            return _fail("DELETE /api/thumbnails/{id}", f"status={resp.status_code}")
        return _ok("DELETE /api/thumbnails/{id}", resp.json().get("message", ""))

    def check_generate_external() -> CheckResult:
        payload = {
            "title": "10 Python tricks you did not know",
            "style": "Bold & Graphic",
            "aspect_ratio": "16:9",
            "color_scheme": "vibrant",
        }
        resp = client.post("/api/thumbnails/generate", json=payload, headers=headers)
        if resp.status_code != 200:
            return _fail(
                "POST /api/thumbnails/generate",
                f"status={resp.status_code}, body={resp.text[:300]}",
            )
        thumbnail = resp.json()["thumbnail"]
        return _ok(
            "POST /api/thumbnails/generate",
            f"id={thumbnail.get('id')}, image_url={thumbnail.get('image_url')}",
        )

    # Always-run checks.
    results.append(run_check("GET /", check_root))
    results.append(run_check("GET /health", check_health))
    results.append(run_check("GET /api/thumbnails/options", check_options))
    results.append(run_check("GET /api/thumbnails (anonymous)", check_list_requires_auth))
    results.append(run_check("DELETE /api/thumbnails/{id}", check_delete_missing_is_success))

    # Optional external checks.
    if args.with_external:
        results.append(run_check("POST /api/thumbnails/generate", check_generate_external))

    passed = sum(1 for item in results if item.passed)
    failed = len(results) - passed

    print("\nAcceptance Smoke Report")
    print("=" * 24)
    for item in results:
        status = "PASS" if item.passed else "FAIL"
        print(f"[{status}] {item.name}: {item.detail}")

    print("-" * 24)
    print(f"passed={passed}, failed={failed}, total={len(results)}")
    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
