#!/usr/bin/env python3
"""
Movie Extractors - Turn upstream WordPress markup into movie records

The detail page is handled by a table of small independent extractors, one
per field, each taking the parsed document and the upstream base URL and
returning a value or ``None``. When the upstream template changes only the
affected extractor needs updating.
"""

import re
import logging
from typing import Dict, List, Optional, Tuple, Any
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from models import (
    Category,
    DownloadLink,
    Movie,
    MovieDetails,
    RecentPost,
    NO_DESCRIPTION,
)

logger = logging.getLogger(__name__)

COVERS_PATH = '/uploads/posts/covers/'
MOVIE_INFO_MARKER = 'IMDb Rating:'
DOWNLOAD_HEADING_TAG = 'h5'
DOWNLOAD_HEADING_KEYWORDS = ('download', 'g-direct')
SCREENSHOT_HEADING_TAGS = ['h2', 'h3', 'h4']
IMDB_ID_PATTERN = re.compile(r'tt\d+')
LINE_BREAK_PATTERN = re.compile(r'<br\s*/?>', re.IGNORECASE)
LEADING_BULLETS_PATTERN = re.compile(r'^[^\w]+')

# Checked in this order for every line, first match wins
MOVIE_INFO_LABELS = (
    ('rating', re.compile(r'IMDb Rating\s*:')),
    ('movie_name', re.compile(r'Movie Name\s*:')),
    ('year', re.compile(r'Release Year\s*:')),
    ('language', re.compile(r'Language\s*:')),
    ('size', re.compile(r'Size\s*:')),
    ('format', re.compile(r'Format\s*:')),
    ('duration', re.compile(r'Runtime\s*:')),
    ('quality', re.compile(r'Quality\s*:')),
    ('category', re.compile(r'Genres\s*:')),
    ('writers', re.compile(r'Writers\s*:')),
    ('stars', re.compile(r'Cast\s*:')),
    ('director', re.compile(r'Director\s*:')),
)


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or '', 'html.parser')


def absolutize_url(url: str, base_url: str) -> str:
    """Resolve a relative URL against the upstream origin"""
    if url.startswith('http'):
        return url
    return urljoin(base_url.rstrip('/') + '/', url)


def url_path(url: str) -> str:
    """Reduce a full or relative URL to a site-relative path"""
    path = urlparse(url).path or '/'
    return path if path.startswith('/') else f"/{path}"


def _text(tag) -> str:
    return tag.get_text().strip() if tag is not None else ''


# ---------- listings ----------

def parse_movies(html: str, base_url: str) -> List[Movie]:
    """Parse a listing page (homepage, search, category) into movies"""
    soup = make_soup(html)
    movies = []
    seen_paths = set()

    for element in soup.select('article.post-item'):
        link = element.select_one('h3.entry-title a')
        href = (link.get('href') or '').strip() if link else ''
        title = _text(link)
        image = element.select_one('img.blog-picture')
        image_url = (image.get('src') or '').strip() if image else ''

        if not (href and title and image_url) or href in seen_paths:
            continue

        seen_paths.add(href)
        movies.append(Movie(
            title=title,
            image_url=absolutize_url(image_url, base_url),
            path=url_path(href),
        ))

    return movies


def parse_recent_posts(html: str) -> List[RecentPost]:
    """Parse the recent posts sidebar widget"""
    soup = make_soup(html)
    posts = []
    for link in soup.select('#recent-posts-2 ul li a'):
        title = _text(link)
        href = (link.get('href') or '').strip()
        if title and href:
            posts.append(RecentPost(title=title, path=url_path(href)))
    return posts


def parse_category_menu(html: str) -> List[Category]:
    """Parse category links out of the primary navigation menu"""
    soup = make_soup(html)
    categories = []
    seen_names = set()

    selector = 'ul#menu-primary-menu > li.menu-item-has-children > ul.sub-menu > li > a'
    for link in soup.select(selector):
        name = _text(link)
        href = (link.get('href') or '').strip()
        if not name or not href or name in seen_names:
            continue
        path = url_path(href)
        if path.startswith('/category/'):
            categories.append(Category(name=name, path=path))
            seen_names.add(name)

    return categories


# ---------- detail page fields ----------

def extract_title(soup, base_url: str) -> Optional[str]:
    return _text(soup.select_one('h1.entry-title')) or None


def extract_image_url(soup, base_url: str) -> Optional[str]:
    """Open Graph image first, then the first cover image in the content"""
    meta = soup.select_one('meta[property="og:image"]')
    image_url = (meta.get('content') or '').strip() if meta else ''
    if image_url:
        if image_url.startswith('http') or COVERS_PATH in image_url:
            return absolutize_url(image_url, base_url)
        return f"{base_url.rstrip('/')}{COVERS_PATH}{image_url.lstrip('/')}"

    for image in soup.select('div.entry-content p img'):
        src = (image.get('src') or '').strip()
        if COVERS_PATH in src:
            return absolutize_url(src, base_url)
    return None


def extract_paragraphs(soup, base_url: str) -> Tuple[str, ...]:
    """
    Storyline paragraphs of the post body.

    Site promo text and the metadata paragraph are skipped. When more than
    one paragraph is left the last one is dropped: on the upstream template
    it is a trailing disclaimer. This can cut real synopsis text on posts
    that do not carry that footer.
    """
    host = urlparse(base_url).netloc.lower()
    if host.startswith('www.'):
        host = host[len('www.'):]
    promo_marker = f"{host} is the best"
    paragraphs = []
    for paragraph in soup.select('div.entry-content > p'):
        text = _text(paragraph)
        if not text or promo_marker in text.lower() or MOVIE_INFO_MARKER in text:
            continue
        paragraphs.append(text)

    if len(paragraphs) > 1:
        paragraphs = paragraphs[:-1]
    return tuple(paragraphs)


def extract_release_date(soup, base_url: str) -> Optional[str]:
    return _text(soup.select_one('div.post-meta-wrap .date-time time')) or None


def extract_imdb_id(soup, base_url: str) -> Optional[str]:
    iframe = soup.select_one('div.tabs__content iframe')
    if iframe is None:
        return None
    match = IMDB_ID_PATTERN.search(iframe.get('src') or '')
    return match.group() if match else None


def _download_link(anchor, group_title: str) -> Optional[DownloadLink]:
    href = (anchor.get('href') or '').strip()
    if not href:
        return None
    button = anchor.select_one('button.dwd-button')
    label = _text(button) if button is not None else _text(anchor)
    return DownloadLink(
        url=href,
        title=label or 'Download',
        quality=label.split('[')[0].strip() or 'Download',
        group_title=group_title,
    )


def extract_download_links(soup, base_url: str) -> Tuple[DownloadLink, ...]:
    """
    Download buttons grouped under their section headings.

    A heading mentioning "download" or "g-direct" opens a group that runs
    until the next heading of the same level.
    """
    links = []
    for heading in soup.find_all(DOWNLOAD_HEADING_TAG):
        group_title = _text(heading)
        lowered = group_title.lower()
        if not any(keyword in lowered for keyword in DOWNLOAD_HEADING_KEYWORDS):
            continue

        for sibling in heading.find_next_siblings():
            if sibling.name == heading.name:
                break
            anchors = sibling.select('a.btn')
            if sibling.name == 'a' and 'btn' in sibling.get('class', []):
                anchors.insert(0, sibling)
            for anchor in anchors:
                link = _download_link(anchor, group_title)
                if link:
                    links.append(link)

    return tuple(links)


def extract_screenshots(soup, base_url: str) -> Tuple[str, ...]:
    for heading in soup.find_all(SCREENSHOT_HEADING_TAGS):
        if 'Screenshots' not in heading.get_text():
            continue
        container = heading.find_next_sibling()
        if container is None:
            return ()
        screenshots = []
        for image in container.find_all('img'):
            src = (image.get('src') or '').strip()
            if src:
                screenshots.append(absolutize_url(src, base_url))
        return tuple(screenshots)
    return ()


def extract_synopsis(soup, base_url: str) -> Optional[str]:
    for heading in soup.find_all('h3'):
        heading_text = heading.get_text().upper()
        if 'SYNOPSIS' not in heading_text and 'PLOT' not in heading_text:
            continue
        paragraph = heading.find_next_sibling()
        if paragraph is not None and paragraph.name == 'p':
            return _text(paragraph) or None
    return None


def extract_tags(soup, base_url: str):
    tags = frozenset(_text(link) for link in soup.select('a[rel~="tag"]'))
    return tags - {''}


def _split_lines(tag) -> List[str]:
    """Text of each line of ``tag``, lines being separated by <br> tags"""
    fragments = LINE_BREAK_PATTERN.split(tag.decode_contents())
    return [make_soup(fragment).get_text().strip() for fragment in fragments]


def extract_movie_info(soup, base_url: str) -> Dict[str, str]:
    """Label/value pairs from the "IMDb Rating:" metadata paragraph"""
    info_paragraph = None
    for paragraph in soup.select('div.entry-content > p'):
        if MOVIE_INFO_MARKER in paragraph.get_text():
            info_paragraph = paragraph
            break
    if info_paragraph is None:
        return {}

    info = {}
    for line in _split_lines(info_paragraph):
        for field_name, label in MOVIE_INFO_LABELS:
            match = label.search(line)
            if not match:
                continue
            value = line[match.end():].strip()
            if field_name == 'rating':
                value = LEADING_BULLETS_PATTERN.sub('', value.replace('👉', '')).strip()
            if value:
                info[field_name] = value
            break
    return info


DETAIL_EXTRACTORS = (
    ('image_url', extract_image_url),
    ('paragraphs', extract_paragraphs),
    ('release_date', extract_release_date),
    ('imdb_id', extract_imdb_id),
    ('download_links', extract_download_links),
    ('screenshots', extract_screenshots),
    ('synopsis', extract_synopsis),
    ('tags', extract_tags),
)


def parse_movie_details(html: str, base_url: str, path: Optional[str] = None) -> Optional[MovieDetails]:
    """Parse a movie page; ``None`` when the page has no title"""
    soup = make_soup(html)

    title = extract_title(soup, base_url)
    if not title:
        return None

    fields: Dict[str, Any] = {}
    for field_name, extractor in DETAIL_EXTRACTORS:
        try:
            value = extractor(soup, base_url)
        except Exception as e:
            logger.debug(f"Error extracting {field_name}: {str(e)}")
            continue
        if value:
            fields[field_name] = value

    try:
        fields.update(extract_movie_info(soup, base_url))
    except Exception as e:
        logger.debug(f"Error extracting movie info: {str(e)}")

    fields['description'] = '\n\n'.join(fields.get('paragraphs', ())) or NO_DESCRIPTION

    return MovieDetails(
        title=fields.get('movie_name') or title,
        path=path,
        **fields
    )
