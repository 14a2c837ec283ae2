from pydantic import BaseModel, Field
from typing import Dict, Optional, Literal, Set, Tuple, Any
from datetime import datetime, timezone

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
THUMBNAIL_URL = "https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"

Outcome = Literal[
    "skipped_duplicate",
    "duplicate_conflict",
    "published",
    "publish_failed",
    "create_failed",
    "dry_run",
]

class FeedEntry(BaseModel):
    """One parsed feed entry. Nothing is guaranteed present."""
    video_id: Optional[str] = None
    title: Optional[str] = None
    link: Optional[str] = None
    published: Optional[datetime] = None
    published_raw: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None

class VideoRecord(BaseModel):
    video_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    canonical_url: str
    published_at: datetime
    description: str = ""
    thumbnail_url: str

    @property
    def slug(self) -> str:
        return f"yt-{self.video_id}"

    @property
    def key(self) -> Tuple[str, str]:
        return (self.slug, self.canonical_url)

    @property
    def published_iso(self) -> str:
        # 2024-01-01T10:00:00.000Z
        ts = self.published_at
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        ts = ts.astimezone(timezone.utc)
        return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"

class Inventory(BaseModel):
    """Slugs and video URLs already in the collection, plus anything created this run."""
    slugs: Set[str] = set()
    urls: Set[str] = set()

    def contains(self, key: Tuple[str, str]) -> bool:
        slug, url = key
        return slug in self.slugs or url in self.urls

    def add(self, key: Tuple[str, str]):
        slug, url = key
        self.slugs.add(slug)
        self.urls.add(url)

class ImageRef(BaseModel):
    url: str
    alt: Optional[str] = None

class CmsItemPayload(BaseModel):
    isDraft: bool = False
    isArchived: bool = False
    fieldData: Dict[str, Any]

class SyncResult(BaseModel):
    status_code: int
    body: str
    stats: Dict[str, int] = {}

    @property
    def ok(self) -> bool:
        return self.status_code == 200
