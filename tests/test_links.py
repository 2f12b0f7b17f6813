from __future__ import annotations

import pytest
import requests

from catalog import Catalog
from catalog import links
from catalog.links import LinkStatus, check_link, check_references, collect_reference_urls


class FakeResponse:
    def __init__(self, status_code: int):
        self.status_code = status_code


@pytest.fixture
def calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, str]]:
    """Route HEAD/GET through a status table instead of the network."""
    head_status = {
        "https://ok.example/": 200,
        "https://blocks-head.example/": 405,
        "https://gone.example/": 404,
    }
    get_status = {
        "https://blocks-head.example/": 200,
        "https://gone.example/": 404,
    }
    recorded: list[tuple[str, str]] = []

    def fake_head(url, **kwargs):
        recorded.append(("HEAD", url))
        if url == "https://down.example/":
            raise requests.ConnectionError("connection refused")
        return FakeResponse(head_status.get(url, 200))

    def fake_get(url, **kwargs):
        recorded.append(("GET", url))
        return FakeResponse(get_status.get(url, 200))

    monkeypatch.setattr(links.requests, "head", fake_head)
    monkeypatch.setattr(links.requests, "get", fake_get)
    return recorded


def test_check_link_ok_uses_head_only(calls) -> None:
    result = check_link("https://ok.example/")
    assert result == LinkStatus(url="https://ok.example/", status=200)
    assert result.ok
    assert calls == [("HEAD", "https://ok.example/")]


def test_check_link_falls_back_to_get(calls) -> None:
    result = check_link("https://blocks-head.example/")
    assert result.status == 200
    assert result.ok
    assert calls == [("HEAD", "https://blocks-head.example/"), ("GET", "https://blocks-head.example/")]


def test_check_link_broken(calls) -> None:
    result = check_link("https://gone.example/")
    assert result.status == 404
    assert not result.ok


def test_check_link_network_error_is_reported(calls) -> None:
    result = check_link("https://down.example/")
    assert result.status is None
    assert "connection refused" in result.error
    assert not result.ok


def test_collect_reference_urls(catalog: Catalog) -> None:
    assert collect_reference_urls(catalog) == {
        "https://en.wikipedia.org/wiki/Single-responsibility_principle": ["single_responsibility"],
        "https://refactoring.guru/design-patterns/singleton": ["singleton", "strategy"],
    }


def test_check_references_deduplicates_urls(calls, catalog: Catalog) -> None:
    results = check_references(catalog, max_workers=2, timeout=1)

    assert [r.url for r in results] == [
        "https://en.wikipedia.org/wiki/Single-responsibility_principle",
        "https://refactoring.guru/design-patterns/singleton",
    ]
    assert results[1].entry_ids == ("singleton", "strategy")
    assert all(r.ok for r in results)
    assert len(calls) == 2


def test_check_references_empty_catalog(calls) -> None:
    assert check_references(Catalog([])) == []
    assert calls == []
