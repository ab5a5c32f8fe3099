from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from skills_hub.marketplace.fetch import BoundedFetcher

REPO_URL = "https://github.com/acme/skills"
RAW_BASE = "https://raw.githubusercontent.com/acme/skills/main"


class FakeRemote:
    """In-memory raw.githubusercontent.com served through ``httpx.MockTransport``."""

    repo_url = REPO_URL
    raw_base = RAW_BASE

    def __init__(self) -> None:
        self.responses: dict[str, httpx.Response] = {}
        self.errors: dict[str, type[httpx.HTTPError]] = {}
        self.requests: list[str] = []

    def add(self, path: str, body: str | bytes, *, status: int = 200) -> None:
        content = body.encode("utf-8") if isinstance(body, str) else body
        self.responses[f"{RAW_BASE}/{path}"] = httpx.Response(status, content=content)

    def add_manifest(self, skills: list[dict[str, Any]], **extra: Any) -> None:
        payload = {
            "version": "1.0.0",
            "generated": "2026-01-01T00:00:00Z",
            "repository": REPO_URL,
            "count": len(skills),
            "skills": skills,
            **extra,
        }
        self.add("manifest.json", json.dumps(payload))

    def fail(self, path: str, error: type[httpx.HTTPError] = httpx.ConnectError) -> None:
        self.errors[f"{RAW_BASE}/{path}"] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        error = self.errors.get(url)
        if error is not None:
            raise error("simulated failure", request=request)
        response = self.responses.get(url)
        if response is None:
            return httpx.Response(404, content=b"404: Not Found")
        return httpx.Response(response.status_code, content=response.content)

    def fetcher(self, **kwargs: Any) -> BoundedFetcher:
        return BoundedFetcher(transport=httpx.MockTransport(self.handler), **kwargs)


def skill_entry(skill_id: str = "foo", **overrides: Any) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "id": skill_id,
        "name": skill_id.replace("-", " ").title(),
        "version": "1.0.0",
        "author": "acme",
        "category": "frontend",
        "tags": ["react", "typescript"],
        "description": f"Rules for {skill_id}.",
        "platforms": ["cursor", "claude"],
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def make_skill_entry():
    return skill_entry
