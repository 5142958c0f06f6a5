import pytest

BASE_URL = "https://vegamovies.you"


def article(path, title, image):
    return f"""
    <article class="post-item">
        <div class="post-thumbnail">
            <a href="{path}"><img class="blog-picture" src="{image}" alt="{title}"></a>
        </div>
        <h3 class="entry-title"><a href="{path}">{title}</a></h3>
    </article>
    """


def listing_page(*articles):
    return f"""
    <html><body>
    <div id="primary">{''.join(articles)}</div>
    </body></html>
    """


DETAIL_PAGE = """
<html>
<head>
    <meta property="og:image" content="https://vegamovies.you/uploads/posts/covers/the-movie.jpg">
</head>
<body>
<h1 class="entry-title">Download The Movie (2021) Dual Audio {Hindi-English} 1080p</h1>
<div class="post-meta-wrap"><span class="date-time"><time datetime="2024-03-03">March 3, 2024</time></span></div>
<div class="entry-content">
    <p>Download The Movie (2021) in Hindi. Vegamovies.you is the best site to download movies.</p>
    <p><strong>👉IMDb Rating:</strong> 7.5/10<br>
    Movie Name: The Movie<br>
    Release Year: 2021<br>
    Language: Hindi-English<br>
    Size: 400MB || 1GB<br>
    Format: MKV<br>
    Runtime : 120 Minutes<br>
    Quality: 1080p WEB-DL<br>
    Genres: Action, Drama<br>
    Writers: Jane Doe<br>
    Cast: John Smith, Ann Lee<br>
    Director: Sam Roe</p>
    <p>A retired hitman returns for one last job.</p>
    <p>The job goes wrong in every possible way.</p>
    <p>Please share this post with your friends.</p>
</div>
<div class="post-extra">
    <h3>Movie-SYNOPSIS/PLOT:</h3>
    <p>A story of revenge.</p>
    <h3>Screenshots: (Must See Before Downloading)</h3>
    <div class="container">
        <p><img src="/wp-content/uploads/shot1.jpg"><img src="https://img.example.com/shot2.jpg"></p>
    </div>
    <h5 class="wp-block-heading">1080p Downloads</h5>
    <p><a class="btn" href="https://dl.example.com/1"><button class="dwd-button">1080p [2.1GB]</button></a></p>
    <p><a class="btn" href="https://dl.example.com/2"><button class="dwd-button">1080p x265 [1.2GB]</button></a></p>
    <h5 class="wp-block-heading">G-Direct [Instant]</h5>
    <p><a class="btn" href="https://gd.example.com/1"><button class="dwd-button">720p [900MB]</button></a></p>
    <h5 class="wp-block-heading">Join our Telegram</h5>
    <p><a class="btn" href="https://t.me/example"><button class="dwd-button">Join</button></a></p>
</div>
<div class="tabs__content"><iframe src="https://player.example.com/embed/movie/tt1234567"></iframe></div>
<div class="post-tags"><a href="/tag/action/" rel="tag">Action</a><a href="/tag/2021/" rel="tag">2021 Movies</a></div>
</body>
</html>
"""

HOMEPAGE_WITH_SIDEBAR = listing_page(
    article(f"{BASE_URL}/the-movie-2021/", "The Movie (2021)", "/uploads/the-movie.jpg"),
) + """
<ul id="menu-primary-menu">
    <li class="menu-item-has-children"><a href="#">Genres</a>
        <ul class="sub-menu">
            <li><a href="https://vegamovies.you/category/action/">Action</a></li>
            <li><a href="https://vegamovies.you/category/comedy/">Comedy</a></li>
            <li><a href="https://vegamovies.you/category/action/">Action</a></li>
            <li><a href="https://vegamovies.you/how-to-download/">How To Download</a></li>
        </ul>
    </li>
</ul>
<div id="recent-posts-2">
    <ul>
        <li><a href="https://vegamovies.you/first-post/">First Post</a></li>
        <li><a href="https://vegamovies.you/second-post/">Second Post</a></li>
        <li><a href="https://vegamovies.you/no-title/"></a></li>
    </ul>
</div>
"""


class StubFetcher:
    """Serves canned HTML by URL and records every request"""

    def __init__(self, pages=None):
        self.pages = pages or {}
        self.requested = []

    def fetch_html(self, url):
        self.requested.append(url)
        return self.pages.get(url)

    def cache_size(self):
        return len(self.pages)


class FakeResponse:
    def __init__(self, text='', status_code=200, reason='OK'):
        self.text = text
        self.status_code = status_code
        self.reason = reason


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def detail_html():
    return DETAIL_PAGE


@pytest.fixture
def stub_fetcher():
    return StubFetcher()
