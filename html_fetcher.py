#!/usr/bin/env python3
"""
HTML Fetcher - Retrieves upstream pages with a time based response cache

Every failure (network error, non-2xx status) collapses to ``None`` so that
callers never have to handle exceptions.
"""

import time
import logging
from typing import Dict, Any, Optional, Callable

import requests
from fake_useragent import UserAgent

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36'
)
DEFAULT_ACCEPT = (
    'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,'
    'image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7'
)
DEFAULT_CACHE_TTL = 3600  # one hour
DEFAULT_TIMEOUT = 30


class HtmlFetcher:
    def __init__(self, cache_ttl: int = DEFAULT_CACHE_TTL, timeout: int = DEFAULT_TIMEOUT,
                 rotate_user_agent: bool = False, clock: Callable[[], float] = time.time):
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self.clock = clock
        # url -> {'html': str, 'timestamp': float}
        self.cache: Dict[str, Dict[str, Any]] = {}

        self.session = requests.Session()
        self.user_agent = UserAgent().random if rotate_user_agent else DEFAULT_USER_AGENT
        self.setup_session()

    def setup_session(self):
        """Setup session with browser-like headers"""
        headers = {
            'User-Agent': self.user_agent,
            'Accept': DEFAULT_ACCEPT,
            'Accept-Language': 'en-US,en;q=0.9',
        }
        self.session.headers.update(headers)

    def get_cached_html(self, url: str) -> Optional[str]:
        """Get cached HTML if it is still inside the freshness window"""
        cached = self.cache.get(url)
        if cached is None:
            return None
        if self.clock() - cached['timestamp'] < self.cache_ttl:
            return cached['html']
        del self.cache[url]
        return None

    def cache_html(self, url: str, html: str) -> None:
        """Cache HTML with timestamp, dropping expired entries"""
        now = self.clock()
        expired = [key for key, cached in self.cache.items() if now - cached['timestamp'] >= self.cache_ttl]
        for key in expired:
            del self.cache[key]

        self.cache[url] = {
            'html': html,
            'timestamp': now
        }

    def fetch_html(self, url: str) -> Optional[str]:
        """Fetch the HTML of ``url``, served from cache while fresh"""
        cached = self.get_cached_html(url)
        if cached is not None:
            logger.debug(f"Cache hit: {url}")
            return cached

        logger.info(f"Fetching URL: {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error fetching {url}: {str(e)}")
            return None

        if not 200 <= response.status_code < 300:
            logger.error(f"Failed to fetch {url}: {response.status_code} {response.reason}")
            return None

        html = response.text
        self.cache_html(url, html)
        return html

    def clear_cache(self):
        self.cache.clear()

    def cache_size(self) -> int:
        return len(self.cache)
