import json
import math
import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from juicescout.utils.errors import set_report_dir

BASE_URL = "https://docsapi.helpscout.net/v1"

ENV_VARS = (
    "HELPSCOUT_API",
    "HELPSCOUT_BASE_URL",
    "HELPSCOUT_COLLECTION_ID",
    "HELPJUICE_NAME",
    "CATEGORIES_PATH",
    "QUESTIONS_PATH",
    "ANSWERS_PATH",
)


class FakeResponse:
    def __init__(self, status_code, payload=None, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeHelpScout:
    """In-memory HelpScout Docs API that stands in for a ``requests.Session``."""

    def __init__(
        self,
        collections=("col-1",),
        existing_categories=(),
        category_failures=(),
        article_responses=None,
        page_size=50,
    ):
        self.collections = [{"id": c, "name": f"Collection {c}"} for c in collections]
        self.categories = [{"id": f"hs-pre-{i}", "name": n} for i, n in enumerate(existing_categories, 1)]
        self.category_failures = set(category_failures)
        self.article_responses = dict(article_responses or {})
        self.page_size = page_size
        self.articles = []
        self.calls = []
        self.post_headers = []
        self.closed = False
        self._next_id = 1

    def request(self, method, url, params=None, data=None, headers=None, timeout=None):
        self.calls.append((method, url))
        path = url.split("/v1/", 1)[1]

        if method == "GET" and path == "collections":
            return FakeResponse(200, {"collections": {"page": 1, "pages": 1, "items": self.collections}})

        if method == "GET" and path.startswith("collections/") and path.endswith("/categories"):
            page = (params or {}).get("page", 1)
            pages = max(1, math.ceil(len(self.categories) / self.page_size))
            chunk = self.categories[(page - 1) * self.page_size : page * self.page_size]
            return FakeResponse(200, {"categories": {"page": page, "pages": pages, "items": chunk}})

        if method == "POST":
            self.post_headers.append(dict(headers or {}))

        if method == "POST" and path == "categories":
            body = json.loads(data)
            if body["name"] in self.category_failures:
                return FakeResponse(400, {"code": 400, "error": "Name is already used"})
            self.categories.append({"id": f"hs-{self._next_id}", "name": body["name"], "collectionId": body["collectionId"]})
            self._next_id += 1
            return FakeResponse(201)

        if method == "POST" and path == "articles":
            body = json.loads(data)
            if body["name"] in self.article_responses:
                status, text = self.article_responses[body["name"]]
                return FakeResponse(status, text=text)
            self.articles.append(body)
            return FakeResponse(201)

        return FakeResponse(404, {"code": 404, "error": "Not Found"})

    def close(self):
        self.closed = True

    def posts(self, resource):
        return [url for method, url in self.calls if method == "POST" and url.endswith("/" + resource)]


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path, monkeypatch):
    """Run every test in its own directory so reports never leak."""
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_report_dir(os.path.join("reports", "migration"))
    yield tmp_path
    set_report_dir(os.path.join("reports", "migration"))


@pytest.fixture
def helpscout_cfg():
    return {"api_key": "secret", "base_url": BASE_URL, "collection_id": "", "timeout": 5}


@pytest.fixture
def write_csv(tmp_path):
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def fake_helpscout():
    """Factory for :class:`FakeHelpScout` instances."""
    return FakeHelpScout


@pytest.fixture
def fake_response():
    return FakeResponse
