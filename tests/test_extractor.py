"""Tests for the extractor module."""

import json

import pytest
from bs4 import BeautifulSoup

from ig_media.extractor import (
    EXTRACTORS,
    extract_embed_markers,
    extract_meta_tags,
    extract_oembed,
    extract_structured_data,
    get_all_extractors,
    run_extractors,
)
from ig_media.extractor.base import (
    DEFAULT_QUALITY,
    HD_QUALITY,
    META_QUALITY,
    is_media_url,
    make_candidate,
    quality_score,
    unescape_url,
)
from ig_media.models import FetchVariant, MediaKind, RawPage


CDN = "https://scontent-lax3-1.cdninstagram.com/v"

STRUCTURED_HTML = r"""
<html><head></head><body><script>
{"display_url":"https:\/\/scontent-lax3-1.cdninstagram.com\/v\/t51\/thumb_1080.jpg?x=1&y=2",
 "video_url":"https:\/\/scontent-lax3-1.cdninstagram.com\/v\/t50\/clip_720.mp4?efg=abc&oh=1",
 "playable_url":"https:\/\/tracker.example.com\/pixel",
 "video_versions":[{"type":101,"url":"https:\/\/scontent-lax3-1.cdninstagram.com\/v\/t50\/clip_1080.mp4"}]}
</script></body></html>
"""

META_HTML = f"""
<html><head>
<meta property="og:video" content="{CDN}/og_clip.mp4">
<meta property="og:video:secure_url" content="{CDN}/og_clip.mp4">
<meta property="og:image" content="{CDN}/og_image.jpg">
<meta property="og:description" content="10 likes, 2 comments - sunset">
</head><body></body></html>
"""

EMBED_HTML = r"""
<html><body>
<img class="EmbeddedMediaImage" alt="post" src="https://scontent.cdninstagram.com/v/embed.jpg?a=1&amp;b=2">
<script>{"video_url":"https:\/\/scontent.cdninstagram.com\/v\/embed_clip.mp4"}</script>
</body></html>
"""


def _soup(html):
    return BeautifulSoup(html, "html.parser")


def _page(html, variant=FetchVariant.PAGE):
    return RawPage(html=html, url="https://www.instagram.com/p/ABC/", variant=variant)


class TestHelpers:
    """Tests for shared extractor helpers."""

    def test_unescape_url(self):
        raw = r"https:\/\/a.cdninstagram.com\/v?x=1&y=2"
        assert unescape_url(raw) == "https://a.cdninstagram.com/v?x=1&y=2"

    def test_unescape_html_entity(self):
        assert unescape_url("https://a.com/v?x=1&amp;y=2") == "https://a.com/v?x=1&y=2"

    @pytest.mark.parametrize("url,hd,expected", [
        (f"{CDN}/clip_1080.mp4", False, 1080),
        (f"{CDN}/clip_720.mp4", False, 720),
        (f"{CDN}/clip_480.mp4", False, 480),
        (f"{CDN}/clip.mp4", False, DEFAULT_QUALITY),
        (f"{CDN}/clip.mp4", True, HD_QUALITY),
        (f"{CDN}/clip_hd.mp4", False, HD_QUALITY),
        (f"{CDN}/clip_hd_1080.mp4", False, 1080),
        (f"{CDN}/123108045.mp4", False, DEFAULT_QUALITY),
        (f"{CDN}/clip.mp4?oh=00_Ab720cXyz&efg=1080", False, DEFAULT_QUALITY),
        (f"{CDN}/clip.mp4?tag=hd", False, DEFAULT_QUALITY),
    ])
    def test_quality_score(self, url, hd, expected):
        assert quality_score(url, hd=hd) == expected

    def test_meta_quality_below_any_structured_score(self):
        assert META_QUALITY < DEFAULT_QUALITY

    @pytest.mark.parametrize("url,kind,expected", [
        ("https://example.com/a.mp4", MediaKind.VIDEO, True),
        (f"{CDN}/stream", MediaKind.VIDEO, True),
        ("https://example.com/page", MediaKind.VIDEO, False),
        ("/relative/clip.mp4", MediaKind.VIDEO, False),
        ("javascript:alert(1).mp4", MediaKind.VIDEO, False),
        (f"{CDN}/a.jpg", MediaKind.IMAGE, True),
        ("https://example.com/a.jpg", MediaKind.IMAGE, False),
        ("", MediaKind.IMAGE, False),
        (None, MediaKind.VIDEO, False),
    ])
    def test_is_media_url(self, url, kind, expected):
        assert is_media_url(url, kind) is expected

    def test_make_candidate_rejects_spurious_match(self):
        assert make_candidate(MediaKind.VIDEO, "https://example.com/api", "test") is None
        assert make_candidate(MediaKind.VIDEO, "", "test") is None

    def test_make_candidate_drops_bad_thumbnail(self):
        candidate = make_candidate(
            MediaKind.VIDEO, f"{CDN}/clip.mp4", "test", thumbnail_url="not a url",
        )
        assert candidate.thumbnail_url is None


class TestStructuredDataExtractor:
    """Tests for extract_structured_data."""

    def test_finds_videos_and_images(self):
        page = _page(STRUCTURED_HTML)
        candidates = extract_structured_data(page, _soup(page.html))

        videos = [c for c in candidates if c.media_kind == MediaKind.VIDEO]
        images = [c for c in candidates if c.media_kind == MediaKind.IMAGE]

        assert [c.url for c in videos] == [
            f"{CDN}/t50/clip_720.mp4?efg=abc&oh=1",
            f"{CDN}/t50/clip_1080.mp4",
        ]
        assert [c.quality_score for c in videos] == [720, 1080]
        assert images[0].url == f"{CDN}/t51/thumb_1080.jpg?x=1&y=2"

    def test_video_thumbnail_from_display_url(self):
        page = _page(STRUCTURED_HTML)
        candidates = extract_structured_data(page, _soup(page.html))
        video = candidates[0]
        assert video.thumbnail_url == f"{CDN}/t51/thumb_1080.jpg?x=1&y=2"

    def test_spurious_url_discarded(self):
        page = _page(STRUCTURED_HTML)
        urls = [c.url for c in extract_structured_data(page, _soup(page.html))]
        assert not any("tracker.example.com" in u for u in urls)

    def test_hd_key_marks_quality(self):
        html = r'{"playable_url_quality_hd":"https:\/\/video.fbcdn.net\/v\/clip.mp4"}'
        page = _page(html)
        candidates = extract_structured_data(page, _soup(html))
        assert candidates[0].quality_score == HD_QUALITY
        assert candidates[0].source == "structured_data"

    def test_no_markers(self):
        page = _page("<html><body>nothing here</body></html>")
        assert extract_structured_data(page, _soup(page.html)) == []


class TestMetaTagExtractor:
    """Tests for extract_meta_tags."""

    def test_reads_og_video_and_image(self):
        page = _page(META_HTML)
        candidates = extract_meta_tags(page, _soup(page.html))

        assert [(c.media_kind, c.url) for c in candidates] == [
            (MediaKind.VIDEO, f"{CDN}/og_clip.mp4"),
            (MediaKind.IMAGE, f"{CDN}/og_image.jpg"),
        ]
        assert all(c.quality_score == META_QUALITY for c in candidates)
        assert candidates[0].thumbnail_url == f"{CDN}/og_image.jpg"

    def test_image_only(self):
        html = f'<meta property="og:image" content="{CDN}/only.jpg">'
        candidates = extract_meta_tags(_page(html), _soup(html))
        assert len(candidates) == 1
        assert candidates[0].media_kind == MediaKind.IMAGE

    def test_non_cdn_image_ignored(self):
        html = '<meta property="og:image" content="https://static.example.com/logo.png">'
        assert extract_meta_tags(_page(html), _soup(html)) == []


class TestEmbedMarkerExtractor:
    """Tests for extract_embed_markers."""

    def test_embed_page(self):
        page = _page(EMBED_HTML, FetchVariant.EMBED)
        candidates = extract_embed_markers(page, _soup(page.html))

        assert candidates[0].media_kind == MediaKind.VIDEO
        assert candidates[0].url == "https://scontent.cdninstagram.com/v/embed_clip.mp4"
        assert candidates[0].thumbnail_url == "https://scontent.cdninstagram.com/v/embed.jpg?a=1&b=2"
        assert candidates[1].media_kind == MediaKind.IMAGE
        assert candidates[1].url == "https://scontent.cdninstagram.com/v/embed.jpg?a=1&b=2"

    def test_video_tag(self):
        html = '<video class="x" src="https://scontent.cdninstagram.com/v/tag.mp4?a=1&amp;b=2"></video>'
        page = _page(html, FetchVariant.EMBED)
        candidates = extract_embed_markers(page, _soup(html))
        assert candidates[0].url == "https://scontent.cdninstagram.com/v/tag.mp4?a=1&b=2"

    def test_ignores_non_embed_pages(self):
        page = _page(EMBED_HTML, FetchVariant.PAGE)
        assert extract_embed_markers(page, _soup(page.html)) == []


class TestOEmbedExtractor:
    """Tests for extract_oembed."""

    def test_thumbnail_as_image(self):
        body = json.dumps({"title": "hello", "thumbnail_url": f"{CDN}/oembed.jpg"})
        page = _page(body, FetchVariant.OEMBED)
        candidates = extract_oembed(page, _soup(body))
        assert len(candidates) == 1
        assert candidates[0].url == f"{CDN}/oembed.jpg"
        assert candidates[0].media_kind == MediaKind.IMAGE

    def test_invalid_json(self):
        page = _page("<html>login</html>", FetchVariant.OEMBED)
        assert extract_oembed(page, _soup(page.html)) == []

    def test_ignores_html_pages(self):
        body = json.dumps({"thumbnail_url": f"{CDN}/oembed.jpg"})
        assert extract_oembed(_page(body), _soup(body)) == []


class TestRunExtractors:
    """Tests for the extractor registry."""

    def test_registration_order(self):
        assert get_all_extractors() == [
            extract_structured_data,
            extract_embed_markers,
            extract_meta_tags,
            extract_oembed,
        ]
        assert get_all_extractors() is not EXTRACTORS

    def test_all_extractors_contribute(self):
        candidates, metadata = run_extractors(_page(STRUCTURED_HTML + META_HTML))
        sources = {c.source for c in candidates}
        assert sources == {"structured_data", "meta_tags"}
        assert metadata.description == "10 likes, 2 comments - sunset"
        assert metadata.og_image == f"{CDN}/og_image.jpg"

    def test_oembed_metadata(self):
        body = json.dumps({"title": "caption text", "thumbnail_url": f"{CDN}/t.jpg"})
        candidates, metadata = run_extractors(_page(body, FetchVariant.OEMBED))
        assert metadata.description == "caption text"
        assert metadata.og_image == f"{CDN}/t.jpg"
        assert [c.source for c in candidates] == ["oembed"]
