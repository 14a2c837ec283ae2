import feedparser
import requests
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from pydantic import ValidationError
from ..models import FeedEntry, VideoRecord, WATCH_URL, THUMBNAIL_URL

FEED_URL = "https://www.youtube.com/feeds/videos.xml?channel_id={channel_id}"

class FeedError(Exception):
    """The channel feed could not be fetched or parsed. Fatal for the run."""

class InvalidEntryError(Exception):
    """A single feed entry could not be converted into a VideoRecord."""

def parse_date(entry) -> Optional[datetime]:
    # feedparser normalizes 'published_parsed' to UTC
    if entry.get("published_parsed"):
        return datetime(*entry.published_parsed[:6], tzinfo=timezone.utc)
    return None

def _thumbnail(entry) -> Optional[str]:
    for thumb in entry.get("media_thumbnail") or []:
        if thumb.get("url"):
            return thumb["url"]
    return None

def _alternate_link(entry) -> Optional[str]:
    # not entry.link: feedparser copies <id> into it when there is no <link>
    for link in entry.get("links") or []:
        if link.get("rel", "alternate") == "alternate" and link.get("href"):
            return link["href"]
    return None

def to_feed_entry(entry) -> FeedEntry:
    """Read the fields we care about from a feedparser entry."""
    return FeedEntry(
        video_id=entry.get("yt_videoid") or None,
        title=entry.get("title") or None,
        link=_alternate_link(entry),
        published=parse_date(entry),
        published_raw=entry.get("published"),
        # media:group/media:description lands in 'summary'
        description=entry.get("summary", entry.get("media_description")),
        thumbnail_url=_thumbnail(entry),
    )

def to_video_record(entry: FeedEntry) -> VideoRecord:
    if entry.video_id is None or entry.title is None:
        raise InvalidEntryError("missing id/title")

    link = entry.link or WATCH_URL.format(video_id=entry.video_id)
    if entry.published is None:
        raise InvalidEntryError(f"invalid published date: {entry.published_raw!r}")

    try:
        return VideoRecord(
            video_id=entry.video_id,
            title=entry.title,
            canonical_url=link,
            published_at=entry.published,
            description=entry.description or "",
            thumbnail_url=entry.thumbnail_url or THUMBNAIL_URL.format(video_id=entry.video_id),
        )
    except ValidationError as e:
        raise InvalidEntryError(str(e)) from e

def fetch_feed(channel_id: str, session: Optional[requests.Session] = None) -> List[FeedEntry]:
    url = FEED_URL.format(channel_id=channel_id)
    http = session or requests

    response = http.get(url, timeout=30)
    if response.status_code != 200:
        raise FeedError(f"Failed to fetch RSS ({response.status_code}): {response.text}")

    feed = feedparser.parse(response.content)
    if feed.bozo and not feed.entries:
        raise FeedError(f"Failed to parse RSS: {feed.get('bozo_exception')}")

    return [to_feed_entry(entry) for entry in list(feed.entries or [])]

def read_videos(
    channel_id: str, session: Optional[requests.Session] = None
) -> Tuple[List[VideoRecord], List[FeedEntry]]:
    """
    Fetch the channel feed and convert it.
    Returns (records in feed order, entries that failed conversion).
    """
    entries = fetch_feed(channel_id, session)
    print(f"  - Found {len(entries)} RSS entries")

    records, skipped = [], []
    for entry in entries:
        try:
            records.append(to_video_record(entry))
        except InvalidEntryError as e:
            print(f"    - Skipping entry ({entry.video_id or '?'}): {e}")
            skipped.append(entry)

    return records, skipped
