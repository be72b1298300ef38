"""Maps URLs to logical page class names."""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

DEFAULT_COMPONENT_LIMIT = 20


def _split(url: str):
    parts = urlsplit(url)
    if not parts.netloc and "://" not in url:
        parts = urlsplit("//" + url)
    return parts


def split_url(url: str) -> Tuple[str, str]:
    """Return (host, path) with user info and port removed, case preserved."""
    parts = _split(url)
    host = parts.netloc.rsplit("@", 1)[-1]
    if host.startswith("["):
        host = host.split("]", 1)[0] + "]"
    else:
        host = host.split(":", 1)[0]
    return host, parts.path


def url_pattern(url: str) -> str:
    """Pattern registered for a minted page: authority (port kept) + path."""
    parts = _split(url)
    return parts.netloc.rsplit("@", 1)[-1] + parts.path


def capitalize_component(text: str, limit: int = DEFAULT_COMPONENT_LIMIT) -> str:
    """Strip non-word characters and capitalise; empty or overlong parts are dropped."""
    text = re.sub(r"\W+", "", text or "", flags=re.ASCII)
    if not text or len(text) > limit:
        return ""
    return text[0].upper() + text[1:]


class PageRouter:
    """Resolves URLs against an insertion-ordered pattern -> page name map.

    Unknown URLs mint a new page name and register ``host[:port] + path`` as
    its pattern. The map passed in is mutated; nothing is ever removed from it.
    """

    def __init__(
        self,
        url_page_map: Dict[str, str],
        component_limit: int = DEFAULT_COMPONENT_LIMIT,
        on_new_page: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.url_page_map = url_page_map
        self.component_limit = component_limit
        self.page_index = 0
        self._on_new_page = on_new_page
        self._resolved: Dict[str, str] = {}

    def match(self, url: str) -> Optional[str]:
        for pattern, page_name in self.url_page_map.items():
            if pattern in url:
                return page_name
        return None

    def page_name_for(self, host: str, path: str) -> str:
        host_parts = host.split(".")
        path_parts = [p for p in path.split("/") if p]
        name = "Page"
        if host_parts[0] != "www":
            name += capitalize_component(host_parts[0], self.component_limit)
        if len(host_parts) > 1:
            name += capitalize_component(host_parts[1], self.component_limit)
        if path_parts:
            name += capitalize_component(path_parts[0], self.component_limit)

        # Seed names may already use a suffix; skip past them.
        taken = set(self.url_page_map.values())
        while True:
            candidate = name + str(self.page_index)
            self.page_index += 1
            if candidate not in taken:
                return candidate

    def resolve(self, url: str) -> str:
        if url in self._resolved:
            return self._resolved[url]

        page_name = self.match(url)
        if page_name is None:
            host, path = split_url(url)
            page_name = self.page_name_for(host, path)
            pattern = url_pattern(url)
            self.url_page_map[pattern] = page_name
            logger.info(f"[Router] New page {page_name} for pattern '{pattern}'")
            if self._on_new_page:
                self._on_new_page(page_name)

        self._resolved[url] = page_name
        return page_name
