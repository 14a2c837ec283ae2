import os
import yaml
from typing import Mapping, Optional
from pydantic import BaseModel

FIELDS_CONFIG = "config/fields.yaml"

class ConfigError(Exception):
    pass

class FieldMap(BaseModel):
    """Slugs of the collection's custom fields."""
    video_url: str = "video-url"
    description: str = "description-2"
    published: str = "published-date"
    thumbnail: str = "thumbnail-image"

def load_field_map(path: str = FIELDS_CONFIG) -> FieldMap:
    if not os.path.exists(path):
        return FieldMap()

    with open(path, "r") as f:
        config = yaml.safe_load(f) or {}

    return FieldMap(**(config.get("fields") or {}))

class SyncConfig(BaseModel):
    webflow_token: str
    collection_id: str
    channel_id: str
    dry_run: bool = False
    fields: FieldMap = FieldMap()

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "SyncConfig":
        env = os.environ if env is None else env

        required = {
            "WEBFLOW_API_TOKEN": env.get("WEBFLOW_API_TOKEN"),
            "COLLECTION_ID": env.get("COLLECTION_ID"),
            "YOUTUBE_CHANNEL_ID": env.get("YOUTUBE_CHANNEL_ID"),
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ConfigError(f"Missing required env vars: {', '.join(missing)}")

        return cls(
            webflow_token=required["WEBFLOW_API_TOKEN"],
            collection_id=required["COLLECTION_ID"],
            channel_id=required["YOUTUBE_CHANNEL_ID"],
            dry_run=env.get("DRY_RUN", "false").lower() == "true",
            fields=load_field_map(env.get("FIELDS_CONFIG", FIELDS_CONFIG)),
        )
