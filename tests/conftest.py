from unittest.mock import MagicMock

import pytest

FEED_HEADER = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns:yt="http://www.youtube.com/xml/schemas/2015"
      xmlns:media="http://search.yahoo.com/mrss/"
      xmlns="http://www.w3.org/2005/Atom">
  <title>Test Channel</title>
"""


def _response(status_code=200, json_data=None, text="", content=b""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.content = content
    resp.json.return_value = json_data
    return resp


def _entry(video_id="abc123", title="Demo", link=None, published="2024-01-01T10:00:00+00:00",
           description=None, thumbnail=None):
    parts = ["  <entry>", f"    <id>yt:video:{video_id}</id>"]
    if video_id is not None:
        parts.append(f"    <yt:videoId>{video_id}</yt:videoId>")
    if title is not None:
        parts.append(f"    <title>{title}</title>")
    if link is not None:
        parts.append(f'    <link rel="alternate" href="{link}"/>')
    if published is not None:
        parts.append(f"    <published>{published}</published>")
    if description is not None or thumbnail is not None:
        parts.append("    <media:group>")
        if description is not None:
            parts.append(f"      <media:description>{description}</media:description>")
        if thumbnail is not None:
            parts.append(f'      <media:thumbnail url="{thumbnail}" width="480" height="360"/>')
        parts.append("    </media:group>")
    parts.append("  </entry>")
    return "\n".join(parts)


@pytest.fixture
def make_response():
    return _response


@pytest.fixture
def feed_entry():
    return _entry


@pytest.fixture
def feed_xml():
    def _build(*entries):
        return (FEED_HEADER + "\n".join(entries) + "\n</feed>").encode("utf-8")
    return _build


@pytest.fixture
def feed_session(make_response):
    """A session whose GET returns the given feed bytes."""
    def _build(content, status_code=200):
        session = MagicMock()
        session.get.return_value = make_response(status_code, content=content, text="feed body")
        return session
    return _build
