"""
HelpScout Docs API helper functions for HelpJuice → HelpScout migration.

This module implements the low-level interactions with the HelpScout Docs
REST API: listing collections and categories, creating categories and
creating articles.  Every function takes the ``helpscout`` configuration
dictionary (``api_key``, ``base_url``, ``collection_id``, ``timeout``) and an
optional ``requests.Session`` so that a run can share one authenticated
connection.

Calls are made once, in order, with no retries.  A network failure raises
:class:`~juicescout.utils.errors.TransportError`.  A listing that fails is
fatal and raises :class:`~juicescout.utils.errors.APIError`.  A rejected
category or article is reported and skipped, except for the two responses
meaning HelpScout could not read the request at all, which raise
:class:`~juicescout.utils.errors.FatalPayloadError`.

Usage example::

    from juicescout.extractors.helpjuice_extractor import parse_csv, process_categories
    from juicescout.migrators.helpscout_migrator import create_session, migrate_categories

    cfg = {"api_key": ..., "base_url": "https://docsapi.helpscout.net/v1"}
    categories = process_categories(parse_csv("categories.csv"))
    with create_session(cfg) as session:
        mappings, collection_id = migrate_categories(cfg, categories, session=session)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests

from juicescout.models.helpjuice import Category
from juicescout.models.helpscout import Article, CategoryMapping, CategoryPayload
from juicescout.utils.categories import build_category_mappings, unmapped
from juicescout.utils.errors import (
    APIError,
    FatalPayloadError,
    TransportError,
    report_error,
    report_ok,
    report_warning,
)

DEFAULT_BASE_URL = "https://docsapi.helpscout.net/v1"
DEFAULT_TIMEOUT = 30

# HelpScout ignores the password; the API key alone authenticates.
BASIC_AUTH_PASSWORD = "X"

# Error messages HelpScout returns with a 400 when the request body itself is
# unreadable.  They repeat for every later article.
FATAL_PAYLOAD_ERRORS = (
    "Invalid Json",
    "Content-Type must be set to 'application/json'",
)


class Verdict(Enum):
    CONTINUE = "continue"
    ABORT = "abort"


@dataclass
class MigrationStats:
    created: int = 0
    failed: int = 0


###############################################################################
# Request helpers
###############################################################################

def helpscout_auth(cfg: Dict[str, Any]) -> Tuple[str, str]:
    """Basic auth credentials for the HelpScout Docs API."""
    return (cfg["api_key"], BASIC_AUTH_PASSWORD)


def create_session(cfg: Dict[str, Any]) -> requests.Session:
    """Create a session authenticated with the configured API key."""
    session = requests.Session()
    session.auth = helpscout_auth(cfg)
    return session


def _url(cfg: Dict[str, Any], path: str) -> str:
    base = (cfg.get("base_url") or DEFAULT_BASE_URL).rstrip("/")
    return f"{base}/{path.lstrip('/')}"


def _request(
    cfg: Dict[str, Any],
    method: str,
    path: str,
    *,
    session: Optional[requests.Session] = None,
    **kwargs: Any,
) -> requests.Response:
    url = _url(cfg, path)
    kwargs.setdefault("timeout", cfg.get("timeout") or DEFAULT_TIMEOUT)
    try:
        if session is None:
            return requests.request(method, url, auth=helpscout_auth(cfg), **kwargs)
        return session.request(method, url, **kwargs)
    except requests.RequestException as e:
        raise TransportError(f"{method} {url} failed: {e}") from e


def _get_json(
    cfg: Dict[str, Any],
    path: str,
    *,
    session: Optional[requests.Session] = None,
    params: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    resp = _request(cfg, "GET", path, session=session, params=params)
    if not 200 <= resp.status_code < 300:
        raise APIError(f"GET {path} returned {resp.status_code}: {resp.text}", resp.status_code, resp.text)
    try:
        data = resp.json()
    except ValueError as e:
        raise APIError(f"GET {path} returned invalid JSON: {e}", resp.status_code, resp.text) from e
    if not isinstance(data, dict):
        raise APIError(f"GET {path} returned unexpected JSON: {resp.text}", resp.status_code, resp.text)
    return data


def _items(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    block = data.get(key)
    if not isinstance(block, dict) or not isinstance(block.get("items"), list):
        raise APIError(f"Response is missing '{key}.items': {json.dumps(data)[:500]}")
    return block["items"]


###############################################################################
# Listing helpers
###############################################################################

def list_collections(cfg: Dict[str, Any], *, session: Optional[requests.Session] = None) -> List[Dict[str, Any]]:
    """
    List the collections of the HelpScout Docs site.

    :param cfg: HelpScout configuration dictionary.
    :return: The raw collection objects.
    :raises APIError: if the call fails or the response is malformed.
    :raises TransportError: if HelpScout cannot be reached.
    """
    return _items(_get_json(cfg, "collections", session=session), "collections")


def select_collection_id(cfg: Dict[str, Any], collections: List[Dict[str, Any]]) -> str:
    """
    Pick the collection that receives the migrated categories and articles.

    The configured ``collection_id`` is used when set and listed; otherwise
    the first collection HelpScout returns is used.

    :raises APIError: if there is no usable collection.
    """
    if not collections:
        raise APIError("HelpScout returned no collections; create one before migrating")
    wanted = cfg.get("collection_id")
    if wanted:
        for collection in collections:
            if collection.get("id") == wanted:
                return wanted
        raise APIError(f"Collection '{wanted}' was not found on HelpScout")
    collection_id = collections[0].get("id")
    if not collection_id:
        raise APIError("The first HelpScout collection has no id")
    return str(collection_id)


def list_categories(
    cfg: Dict[str, Any], collection_id: str, *, session: Optional[requests.Session] = None
) -> List[Dict[str, Any]]:
    """
    List every category in ``collection_id``, following pagination.

    :raises APIError: if any page fails or is malformed.
    :raises TransportError: if HelpScout cannot be reached.
    """
    items: List[Dict[str, Any]] = []
    page = 1
    while True:
        data = _get_json(cfg, f"collections/{collection_id}/categories", session=session, params={"page": page})
        items.extend(_items(data, "categories"))
        pages = data["categories"].get("pages") or 1
        try:
            pages = int(pages)
        except (TypeError, ValueError) as e:
            raise APIError(f"Response has an invalid 'categories.pages': {pages!r}") from e
        if page >= pages:
            break
        page += 1
    return items


###############################################################################
# Creation helpers
###############################################################################

def create_on_helpscout(
    cfg: Dict[str, Any],
    resource: str,
    payload: str,
    name: str,
    *,
    session: Optional[requests.Session] = None,
) -> Tuple[int, str]:
    """
    POST an already serialized JSON ``payload`` to ``/{resource}``.

    :param resource: Either ``"categories"`` or ``"articles"``.
    :param payload: The JSON request body.
    :param name: Name of the item, used in log output.
    :return: The response status code and body text.
    :raises TransportError: if HelpScout cannot be reached.
    """
    resp = _request(
        cfg,
        "POST",
        resource,
        session=session,
        data=payload.encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )
    if resp.status_code == 201:
        print(f"[INFO] Success! {name} has been created on HelpScout.")
    else:
        print(f"[ERROR] HelpScout returned {resp.status_code} for {name}: {resp.text}")
    return resp.status_code, resp.text


def classify_article_response(status_code: int, body: str) -> Verdict:
    """
    Decide whether the run can move on to the next article.

    Only a 400 carrying one of :data:`FATAL_PAYLOAD_ERRORS` aborts: it means
    the request was built wrong and every later article would fail the same
    way.  Any other failure is specific to the article.
    """
    if status_code != 400:
        return Verdict.CONTINUE
    try:
        data = json.loads(body)
    except ValueError:
        return Verdict.CONTINUE
    if isinstance(data, dict) and data.get("error") in FATAL_PAYLOAD_ERRORS:
        return Verdict.ABORT
    return Verdict.CONTINUE


###############################################################################
# Migration steps
###############################################################################

def migrate_categories(
    cfg: Dict[str, Any],
    categories: Iterable[Category],
    *,
    session: Optional[requests.Session] = None,
    source: str = "",
    stats: Optional[MigrationStats] = None,
) -> Tuple[List[CategoryMapping], str]:
    """
    Create the HelpJuice categories on HelpScout and map them back.

    Categories are created one by one in the selected collection.  A rejected
    category is reported and skipped.  Afterwards the collection's categories
    are listed again and linked to the HelpJuice categories by exact name.

    :param cfg: HelpScout configuration dictionary.
    :param categories: HelpJuice categories to create.
    :param source: Label of the HelpJuice site, stored in the reports.
    :param stats: Optional counters updated with created and failed categories.
    :return: The category mappings and the ID of the collection used.
    :raises APIError: if a listing call fails or there is no collection.
    :raises TransportError: if HelpScout cannot be reached.
    """
    categories = list(categories)
    stats = stats if stats is not None else MigrationStats()

    collection_id = select_collection_id(cfg, list_collections(cfg, session=session))
    print(f"[INFO] Migrating categories into collection {collection_id}")

    for category in categories:
        payload = CategoryPayload(collection_id=collection_id, name=category.name).to_json()
        status, body = create_on_helpscout(cfg, "categories", payload, category.name, session=session)
        item = {"kind": "category", "name": category.name, "source": source}
        if status == 201:
            stats.created += 1
            report_ok("CATEGORY_CREATED", item, {"helpjuice_id": category.id})
        else:
            stats.failed += 1
            report_error("CATEGORY_CREATE_FAILED", item, {"status": status, "response": body})

    mappings = build_category_mappings(categories, list_categories(cfg, collection_id, session=session))
    for mapping in unmapped(mappings):
        report_warning(
            "CATEGORY_UNMAPPED",
            {"kind": "category", "name": mapping.name, "source": source},
            {"helpscout_id": mapping.destination_id},
        )
    return mappings, collection_id


def migrate_articles(
    cfg: Dict[str, Any],
    articles: Iterable[Article],
    collection_id: str,
    *,
    session: Optional[requests.Session] = None,
    source: str = "",
) -> MigrationStats:
    """
    Create each article in ``collection_id``.

    Rejected articles are reported and skipped.

    :return: Counters of created and failed articles.
    :raises FatalPayloadError: if HelpScout cannot read the request body.
        The offending payload is printed first.
    :raises TransportError: if HelpScout cannot be reached.
    """
    stats = MigrationStats()
    for article in articles:
        payload = article.to_json(collection_id)
        status, body = create_on_helpscout(cfg, "articles", payload, article.name, session=session)
        item = {"kind": "article", "name": article.name, "source": source}

        if classify_article_response(status, body) is Verdict.ABORT:
            print(payload)
            report_error("FATAL_PAYLOAD", item, {"status": status, "response": body, "payload": payload})
            raise FatalPayloadError(
                f"HelpScout could not read the payload for '{article.name}': {body}",
                status,
                body,
                payload,
            )

        if status == 201:
            stats.created += 1
            report_ok("ARTICLE_CREATED", item, {"categories": article.categories})
        else:
            stats.failed += 1
            report_error("ARTICLE_CREATE_FAILED", item, {"status": status, "response": body})
    return stats
