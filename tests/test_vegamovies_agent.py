import pytest

import agents.vegamovies_agent as vegamovies_agent
from agents.vegamovies_agent import VegaMoviesAgent, STATIC_CATEGORIES

from conftest import BASE_URL, DETAIL_PAGE, HOMEPAGE_WITH_SIDEBAR, StubFetcher, article, listing_page


def make_agent(pages=None, **kwargs):
    fetcher = StubFetcher(pages)
    return VegaMoviesAgent(BASE_URL, fetcher, **kwargs), fetcher


@pytest.mark.parametrize('page, expected', [
    (1, BASE_URL),
    (0, BASE_URL),
    (2, f"{BASE_URL}/page/2/"),
])
def test_homepage_url(page, expected):
    agent, _ = make_agent()
    assert agent.homepage_url(page) == expected


def test_search_url_encodes_query():
    agent, _ = make_agent()

    assert agent.search_url("iron man & co") == f"{BASE_URL}/?s=iron%20man%20%26%20co"
    assert agent.search_url("iron man", 3) == f"{BASE_URL}/page/3/?s=iron%20man"


@pytest.mark.parametrize('path, page, expected', [
    ("dual-audio-hindi-english-movies", 2, f"{BASE_URL}/dual-audio-hindi-english-movies/page/2/"),
    ("dual-audio-hindi-english-movies", 1, f"{BASE_URL}/dual-audio-hindi-english-movies/"),
    ("/category/action/", 1, f"{BASE_URL}/action/"),
    ("category/action", 3, f"{BASE_URL}/action/page/3/"),
    ("/categorized-movies/", 1, f"{BASE_URL}/categorized-movies/"),
])
def test_category_url(path, page, expected):
    agent, _ = make_agent()
    assert agent.category_url(path, page) == expected


def test_movie_url_adds_leading_slash():
    agent, _ = make_agent()

    assert agent.movie_url("the-movie-2021/") == f"{BASE_URL}/the-movie-2021/"
    assert agent.movie_url("/the-movie-2021/") == f"{BASE_URL}/the-movie-2021/"


def test_base_url_trailing_slash_is_ignored():
    agent = VegaMoviesAgent(BASE_URL + '/', StubFetcher())
    assert agent.homepage_url(2) == f"{BASE_URL}/page/2/"


def test_homepage_movies_in_document_order():
    html = listing_page(*[
        article(f"{BASE_URL}/movie-{i}/", f"Movie {i}", f"/img/{i}.jpg") for i in range(20)
    ])
    agent, fetcher = make_agent({BASE_URL: html})

    movies = agent.get_homepage_movies(1)

    assert len(movies) == 20
    assert [movie.path for movie in movies] == [f"/movie-{i}/" for i in range(20)]
    assert fetcher.requested == [BASE_URL]


def test_category_movies_use_listing_parser():
    url = f"{BASE_URL}/dual-audio-hindi-english-movies/page/2/"
    html = listing_page(article(f"{BASE_URL}/dual/", "Dual Audio Movie", "/img/d.jpg"))
    agent, fetcher = make_agent({url: html})

    movies = agent.get_category_movies("dual-audio-hindi-english-movies", 2)

    assert fetcher.requested == [url]
    assert [movie.title for movie in movies] == ["Dual Audio Movie"]


def test_search_results():
    url = f"{BASE_URL}/?s=the%20movie"
    html = listing_page(article(f"{BASE_URL}/the-movie/", "The Movie", "/img/m.jpg"))
    agent, _ = make_agent({url: html})

    assert [movie.title for movie in agent.get_search_results("  the movie ")] == ["The Movie"]


def test_blank_search_does_not_fetch():
    agent, fetcher = make_agent()

    assert agent.get_search_results("   ") == []
    assert fetcher.requested == []


def test_fetch_failure_collapses_to_empty_results():
    agent, _ = make_agent()

    assert agent.get_homepage_movies(2) == []
    assert agent.get_search_results("anything") == []
    assert agent.get_category_movies("action") == []
    assert agent.get_movie_details("missing/") is None
    assert agent.get_recent_posts() == []


def test_parser_errors_are_logged_not_raised(monkeypatch, caplog):
    def explode(*args, **kwargs):
        raise RuntimeError("parser broke")

    monkeypatch.setattr(vegamovies_agent, 'parse_movies', explode)
    monkeypatch.setattr(vegamovies_agent, 'parse_movie_details', explode)
    agent, _ = make_agent({BASE_URL: "<html></html>", f"{BASE_URL}/x/": "<html></html>"})

    assert agent.get_homepage_movies() == []
    assert agent.get_movie_details("x/") is None
    assert "parser broke" in caplog.text


def test_movie_details():
    agent, fetcher = make_agent({f"{BASE_URL}/the-movie-2021/": DETAIL_PAGE})

    details = agent.get_movie_details("the-movie-2021/")

    assert fetcher.requested == [f"{BASE_URL}/the-movie-2021/"]
    assert details.title == "The Movie"
    assert details.path == "/the-movie-2021/"
    assert details.imdb_id == "tt1234567"


def test_movie_details_without_title_is_not_found():
    agent, _ = make_agent({f"{BASE_URL}/empty/": "<html><body><p>Removed</p></body></html>"})
    assert agent.get_movie_details("empty/") is None


def test_static_categories_do_not_fetch():
    agent, fetcher = make_agent()

    categories = agent.get_categories()

    assert categories == list(STATIC_CATEGORIES)
    assert categories[0].path == "/category/dual-audio-hindi-english-movies/"
    assert fetcher.requested == []


def test_scraped_categories():
    agent, _ = make_agent({BASE_URL: HOMEPAGE_WITH_SIDEBAR}, category_strategy='scraped')

    categories = agent.get_categories()

    assert [category.name for category in categories] == ["Action", "Comedy"]


def test_scraped_categories_fall_back_to_static_list():
    agent, _ = make_agent({BASE_URL: listing_page()}, category_strategy='scraped')
    assert agent.get_categories() == list(STATIC_CATEGORIES)

    offline_agent, _ = make_agent(category_strategy='scraped')
    assert offline_agent.get_categories() == list(STATIC_CATEGORIES)


def test_recent_posts():
    agent, _ = make_agent({BASE_URL: HOMEPAGE_WITH_SIDEBAR})

    posts = agent.get_recent_posts()

    assert [post.path for post in posts] == ["/first-post/", "/second-post/"]
