"""Shared test fixtures."""

import os
import tempfile
import threading

import pytest

# Keep config, cache and log files out of the real home directory
os.environ.setdefault("NEWSBOARD_HOME", tempfile.mkdtemp(prefix="newsboard-test-"))

from newsboard.errors import SourceUnavailable  # noqa: E402
from newsboard.sources.base import AdapterKind, Category, SourceDescriptor  # noqa: E402


class FakeHttp:
    """Stands in for HttpClient: url -> payload, or url -> exception to raise."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self._lock = threading.Lock()

    def _get(self, url):
        with self._lock:
            self.calls.append(url)
        if url not in self.responses:
            raise SourceUnavailable(url, "404 Not Found")
        value = self.responses[url]
        if isinstance(value, BaseException):
            raise value
        return value

    def get_json(self, url):
        return self._get(url)

    def get_bytes(self, url):
        return self._get(url)


class Clock:
    """Controllable epoch-ms clock."""

    def __init__(self, now=1_700_000_000_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def feed_source():
    return SourceDescriptor(
        id="arxiv", name="arXiv CS", category=Category.ACADEMIC,
        icon="https://arxiv.org/favicon.ico", color="#b31b1b",
        api="https://feeds.test/arxiv", kind=AdapterKind.FEED,
        homepage="https://arxiv.org/",
    )


@pytest.fixture
def poll_source():
    return SourceDescriptor(
        id="hackernews", name="Hacker News", category=Category.TECH,
        icon="https://news.ycombinator.com/favicon.ico", color="#ff6600",
        api="https://hn.test/topstories.json", item_api="https://hn.test/item/{id}.json",
        kind=AdapterKind.POLL, homepage="https://news.ycombinator.com/",
        permalink="https://news.ycombinator.com/item?id={id}",
    )


@pytest.fixture
def listing_source():
    return SourceDescriptor(
        id="reddit", name="r/programming", category=Category.DEV,
        icon="https://www.reddit.com/favicon.ico", color="#ff4500",
        api="https://reddit.test/hot.json", kind=AdapterKind.LISTING,
        homepage="https://www.reddit.com",
    )


@pytest.fixture
def search_source():
    return SourceDescriptor(
        id="github-popular", name="GitHub Popular Repos", category=Category.DEV,
        icon="https://github.com/favicon.ico", color="#6e5494",
        api="https://github.test/search", kind=AdapterKind.SEARCH,
        homepage="https://github.com/", permalink="https://github.com/{id}",
    )


@pytest.fixture
def flat_source():
    return SourceDescriptor(
        id="v2ex", name="V2EX", category=Category.TECH,
        icon="https://www.v2ex.com/static/icon-192.png", color="#1a1a1a",
        api="https://v2ex.test/hot.json", kind=AdapterKind.FLAT,
        homepage="https://www.v2ex.com/", permalink="https://www.v2ex.com/t/{id}",
    )


@pytest.fixture
def sample_rss():
    """RSS 2.0 document with 25 items; item 3 has no title."""
    items = []
    for i in range(25):
        title = "" if i == 3 else f"Paper {i}"
        items.append(f"""
    <item>
      <title>{title}</title>
      <link>https://arxiv.org/abs/{i}</link>
      <description>&lt;p&gt;Abstract &lt;b&gt;number&lt;/b&gt; {i}. {'x' * 150}&lt;/p&gt;</description>
      <pubDate>Tue, 14 Nov 2023 {i % 24:02d}:00:00 GMT</pubDate>
    </item>""")
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>arXiv cs.AI</title>
    <link>https://arxiv.org/</link>
    <description>Recent papers</description>{''.join(items)}
  </channel>
</rss>""".encode("utf-8")


@pytest.fixture
def sample_listing():
    """Reddit-style listing: 10 children, 3 of them stickied."""
    children = []
    for i in range(10):
        children.append({
            "kind": "t3",
            "data": {
                "id": f"p{i}",
                "title": f"Post {i}",
                "url": "" if i == 4 else f"https://example.com/{i}",
                "permalink": f"/r/programming/comments/p{i}/post_{i}/",
                "selftext": "<p>Body</p>" if i % 2 else "",
                "created_utc": 1_700_000_000 + i * 60,
                "score": i * 10,
                "stickied": i in (0, 1, 2),
            },
        })
    return {"kind": "Listing", "data": {"children": children}}


@pytest.fixture
def sample_search():
    return {
        "total_count": 2,
        "items": [
            {
                "id": 101,
                "full_name": "octo/rocket",
                "description": "A fast rocket engine",
                "html_url": "https://github.com/octo/rocket",
                "created_at": "2023-11-14T10:00:00Z",
                "stargazers_count": 4200,
            },
            {
                "id": 102,
                "full_name": "octo/quiet",
                "description": None,
                "html_url": "https://github.com/octo/quiet",
                "created_at": "2023-11-13T10:00:00Z",
                "stargazers_count": 7,
            },
        ],
    }


@pytest.fixture
def sample_flat():
    return [
        {
            "id": 1001,
            "title": "Which editor do you use?",
            "url": "https://www.v2ex.com/t/1001",
            "content": "Curious what everyone is using these days. " * 5,
            "created": 1_700_000_100,
            "replies": 88,
        },
        {
            "id": 1002,
            "title": "Job board thread",
            "link": "https://www.v2ex.com/t/1002#reply0",
            "content": "",
            "created": 1_700_000_200,
        },
    ]
