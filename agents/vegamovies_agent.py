#!/usr/bin/env python3
"""
VegaMovies Agent - Movie listings and movie details mirrored from a
WordPress movie site

Every public method returns records, an empty list or None. Failures are
logged, never raised.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

from html_fetcher import HtmlFetcher
from models import Category, Movie, MovieDetails, RecentPost
from movie_extractors import (
    parse_category_menu,
    parse_movie_details,
    parse_movies,
    parse_recent_posts,
)

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

STATIC_CATEGORIES = (
    Category("Dual Audio [Hindi] 720P", "/category/dual-audio-hindi-english-movies/"),
    Category("Hollywood Movies 1080P", "/category/hollywood-movies/"),
    Category("Telugu", "/category/telugu-movies-free-download/"),
    Category("Action", "/category/action/"),
    Category("Adventure", "/category/adventure/"),
    Category("Animation", "/category/animation/"),
    Category("Cartoon", "/category/cartoon/"),
    Category("Comedy", "/category/comedy/"),
    Category("Crime", "/category/crime/"),
    Category("Documentary", "/category/documentary/"),
    Category("Drama", "/category/drama/"),
    Category("Family", "/category/family/"),
    Category("Fantasy", "/category/fantasy/"),
    Category("History", "/category/history/"),
    Category("Horror", "/category/horror/"),
    Category("Mystery", "/category/mystery/"),
    Category("Romance", "/category/romance/"),
    Category("Thriller", "/category/thriller/"),
    Category("War", "/category/war/"),
    Category("Web Series", "/category/tv-shows/"),
    Category("Tamil 720P", "/category/tamil-movies/"),
    Category("Pakistani", "/category/pakistani-movies/"),
    Category("Punjabi Movies 720P", "/category/punjabi-movies/"),
)


class VegaMoviesAgent:
    def __init__(self, base_url: str, fetcher: Optional[HtmlFetcher] = None,
                 category_strategy: str = 'static'):
        self.base_url = base_url.rstrip('/')
        self.fetcher = fetcher or HtmlFetcher()
        self.category_strategy = category_strategy

    # ---------- URL construction ----------

    def homepage_url(self, page: int = 1) -> str:
        page = max(page, 1)
        return f"{self.base_url}/page/{page}/" if page > 1 else self.base_url

    def search_url(self, query: str, page: int = 1) -> str:
        page = max(page, 1)
        encoded = quote(query, safe='')
        if page > 1:
            return f"{self.base_url}/page/{page}/?s={encoded}"
        return f"{self.base_url}/?s={encoded}"

    def category_url(self, path: str, page: int = 1) -> str:
        """
        Category listings live at the site root, without the /category
        prefix used by the navigation links.
        """
        page = max(page, 1)
        base_path = path if path.startswith('/') else f"/{path}"
        if base_path == '/category' or base_path.startswith('/category/'):
            base_path = base_path[len('/category'):] or '/'
        if not base_path.endswith('/'):
            base_path = f"{base_path}/"
        page_path = f"page/{page}/" if page > 1 else ''
        return f"{self.base_url}{base_path}{page_path}"

    def movie_url(self, path: str) -> str:
        return f"{self.base_url}{self._normalize_path(path)}"

    @staticmethod
    def _normalize_path(path: str) -> str:
        return path if path.startswith('/') else f"/{path}"

    # ---------- listings ----------

    def _get_movies(self, url: str) -> List[Movie]:
        html = self.fetcher.fetch_html(url)
        if not html:
            return []
        try:
            movies = parse_movies(html, self.base_url)
        except Exception as e:
            logger.error(f"Error parsing movies from {url}: {str(e)}")
            return []
        logger.info(f"Parsed {len(movies)} movies from {url}")
        return movies

    def get_homepage_movies(self, page: int = 1) -> List[Movie]:
        return self._get_movies(self.homepage_url(page))

    def get_search_results(self, query: str, page: int = 1) -> List[Movie]:
        if not query or not query.strip():
            return []
        return self._get_movies(self.search_url(query.strip(), page))

    def get_category_movies(self, path: str, page: int = 1) -> List[Movie]:
        return self._get_movies(self.category_url(path, page))

    # ---------- details ----------

    def get_movie_details(self, path: str) -> Optional[MovieDetails]:
        """Details of the movie at ``path``, None when it cannot be found"""
        url = self.movie_url(path)
        html = self.fetcher.fetch_html(url)
        if not html:
            return None
        try:
            return parse_movie_details(html, self.base_url, self._normalize_path(path))
        except Exception as e:
            logger.error(f"Error parsing movie details from {url}: {str(e)}")
            return None

    # ---------- navigation ----------

    def get_categories(self) -> List[Category]:
        if self.category_strategy == 'scraped':
            return self.get_scraped_categories()
        return list(STATIC_CATEGORIES)

    def get_scraped_categories(self) -> List[Category]:
        """Categories from the site menu, the static list when scraping yields nothing"""
        categories = []
        html = self.fetcher.fetch_html(self.base_url)
        if html:
            try:
                categories = parse_category_menu(html)
            except Exception as e:
                logger.error(f"Error parsing category menu: {str(e)}")

        if not categories:
            logger.warning("No categories scraped, using static category list")
            return list(STATIC_CATEGORIES)
        return categories

    def get_recent_posts(self) -> List[RecentPost]:
        html = self.fetcher.fetch_html(self.base_url)
        if not html:
            return []
        try:
            return parse_recent_posts(html)
        except Exception as e:
            logger.error(f"Error parsing recent posts: {str(e)}")
            return []


def main():
    """Test the VegaMovies agent"""
    from config_manager import get_site_config

    config = get_site_config()
    agent = VegaMoviesAgent(
        config['base_url'],
        HtmlFetcher(cache_ttl=config['cache_ttl'], timeout=config['request_timeout']),
        category_strategy=config['category_strategy'],
    )

    print("Testing VegaMovies Agent...")
    movies = agent.get_homepage_movies()
    print(f"\nFound {len(movies)} movies on the homepage:")
    for i, movie in enumerate(movies[:5], 1):
        print(f"{i}. {movie.title}")
        print(f"   Path: {movie.path}")

    if movies:
        details = agent.get_movie_details(movies[0].path)
        if details:
            print(f"\n{details.title}: {len(details.download_links)} download links")


if __name__ == "__main__":
    main()
