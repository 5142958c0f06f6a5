#!/usr/bin/env python3
"""
Data models for the movie catalog mirror.

Every record is built fresh from parsed upstream HTML for a single request
and never mutated afterwards.
"""

from collections import OrderedDict
from dataclasses import dataclass, field, asdict
from typing import Dict, FrozenSet, List, Optional, Tuple, Any

DEFAULT_DOWNLOAD_GROUP = 'Downloads'
NO_DESCRIPTION = 'No description available.'


@dataclass(frozen=True)
class Movie:
    """A single entry of a movie listing page."""

    title: str
    image_url: str  # always absolute
    path: str  # site-relative, host stripped

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DownloadLink:
    url: str
    title: str
    quality: str
    group_title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MovieDetails:
    """
    Everything the detail page shows for one movie.

    Only ``title`` is mandatory; every other field is absent-safe and
    defaults to ``None`` or an empty collection.
    """

    title: str
    image_url: Optional[str] = None
    path: Optional[str] = None
    description: str = NO_DESCRIPTION
    paragraphs: Tuple[str, ...] = ()
    download_links: Tuple[DownloadLink, ...] = ()
    category: Optional[str] = None
    release_date: Optional[str] = None
    tags: FrozenSet[str] = field(default_factory=frozenset)
    imdb_id: Optional[str] = None
    year: Optional[str] = None
    screenshots: Tuple[str, ...] = ()
    rating: Optional[str] = None
    language: Optional[str] = None
    size: Optional[str] = None
    format: Optional[str] = None
    duration: Optional[str] = None
    quality: Optional[str] = None
    writers: Optional[str] = None
    stars: Optional[str] = None
    director: Optional[str] = None
    synopsis: Optional[str] = None
    movie_name: Optional[str] = None

    def __post_init__(self):
        if not self.title:
            raise ValueError("MovieDetails requires a non-empty title")

    @property
    def genres(self) -> List[str]:
        """Genre names from the comma separated ``category`` field"""
        if not self.category:
            return []
        return [genre.strip() for genre in self.category.split(',') if genre.strip()]

    @property
    def has_movie_info(self) -> bool:
        return bool(self.rating or self.year or self.language)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['paragraphs'] = list(self.paragraphs)
        data['download_links'] = [link.to_dict() for link in self.download_links]
        data['screenshots'] = list(self.screenshots)
        data['tags'] = sorted(self.tags)
        return data


@dataclass(frozen=True)
class Category:
    name: str
    path: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RecentPost:
    title: str
    path: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def group_download_links(links) -> "OrderedDict[str, List[DownloadLink]]":
    """
    Partition download links by their group title.

    Groups keep the order in which they first appear, links keep their
    original order inside a group. Links without a group title land in the
    default "Downloads" bucket.
    """
    groups: "OrderedDict[str, List[DownloadLink]]" = OrderedDict()
    for link in links:
        groups.setdefault(link.group_title or DEFAULT_DOWNLOAD_GROUP, []).append(link)
    return groups
