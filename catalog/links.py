"""
Reference link checking for catalog entries.

Every entry links to external articles; this checks that those URLs still
answer. HEAD is tried first for speed, with a GET fallback for sites that
block HEAD.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import requests

from .store import Catalog

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


@dataclass
class LinkStatus:
    url: str
    status: Optional[int] = None
    error: Optional[str] = None
    entry_ids: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.error is None and self.status is not None and self.status < 400


def check_link(url: str, timeout: float = 10.0) -> LinkStatus:
    """Check a single URL. Network failures are reported, not raised."""
    headers = {"User-Agent": USER_AGENT}
    try:
        response = requests.head(url, headers=headers, timeout=timeout, allow_redirects=True)
        if response.status_code >= 400:
            response = requests.get(url, headers=headers, timeout=timeout, allow_redirects=True)
        return LinkStatus(url=url, status=response.status_code)
    except requests.RequestException as exc:
        return LinkStatus(url=url, error=str(exc))


def collect_reference_urls(catalog: Catalog) -> Dict[str, List[str]]:
    """Map each unique reference URL to the ids of the entries citing it."""
    urls: Dict[str, List[str]] = {}
    for entry in catalog.all():
        for reference in entry.references:
            urls.setdefault(reference.url, []).append(entry.id)
    return urls


def check_references(catalog: Catalog, max_workers: int = 8, timeout: float = 10.0) -> List[LinkStatus]:
    """Check every unique reference URL in the catalog.

    Args:
        catalog: Catalog whose references are checked
        max_workers: Size of the thread pool
        timeout: Per-request timeout in seconds

    Returns:
        One LinkStatus per unique URL, in catalog order
    """
    urls = collect_reference_urls(catalog)
    if not urls:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(lambda u: check_link(u, timeout), urls))

    for result in results:
        result.entry_ids = tuple(urls[result.url])

    return results
