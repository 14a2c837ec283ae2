import requests
from typing import Dict, List, Mapping, Optional
from .config import ConfigError, FieldMap, SyncConfig
from .extract.youtube_feed import read_videos
from .load.webflow import WebflowClient
from .models import Inventory, Outcome, SyncResult, VideoRecord
from .transform.webflow_item import build_payload

def upsert_record(
    record: VideoRecord,
    client: WebflowClient,
    inventory: Inventory,
    fields: FieldMap,
    dry_run: bool = False,
) -> Outcome:
    key = record.key
    if inventory.contains(key):
        return "skipped_duplicate"

    payload = build_payload(record, fields)

    if dry_run:
        print(f"    - [Dry Run] would create {record.slug} ({record.title[:40]})")
        inventory.add(key)
        return "dry_run"

    status, item_id = client.create_item(payload)
    if status == "duplicate":
        print(f"    - Duplicate slug, skipping: {record.slug}")
        inventory.add(key)
        return "duplicate_conflict"
    if status != "created":
        return "create_failed"

    inventory.add(key)
    print(f"    - Created item: {item_id} ({record.title[:40]})")

    # A failed publish leaves the item created but unpublished.
    # Later runs see the slug and won't retry it.
    if not client.publish_item(item_id):
        return "publish_failed"

    print(f"    - Published: {record.title[:40]}")
    return "published"

def upsert_records(
    records: List[VideoRecord],
    client: WebflowClient,
    inventory: Inventory,
    fields: FieldMap,
    dry_run: bool = False,
) -> Dict[str, int]:
    stats = {
        "processed": 0,
        "skipped_duplicate": 0,
        "duplicate_conflict": 0,
        "created": 0,
        "published": 0,
        "publish_failed": 0,
        "create_failed": 0,
        "dry_run": 0,
    }

    for record in records:
        stats["processed"] += 1
        outcome = upsert_record(record, client, inventory, fields, dry_run)
        stats[outcome] += 1
        if outcome in ("published", "publish_failed"):
            stats["created"] += 1

    return stats

def print_summary(stats: Dict[str, int], dry_run: bool):
    print("\n=========================")
    print("--- Sync Summary ---")
    print("=========================")
    print(f"Found:           {stats.get('found', 0)}")
    print(f"Invalid:         {stats.get('invalid', 0)}")
    print(f"Processed:       {stats.get('processed', 0)}")
    print(f"Already in CMS:  {stats.get('skipped_duplicate', 0) + stats.get('duplicate_conflict', 0)}")
    print(f"Created:         {stats.get('created', 0)}")
    print(f"Published:       {stats.get('published', 0)}")
    print(f"Errors:          {stats.get('create_failed', 0) + stats.get('publish_failed', 0)}")
    if dry_run:
        print(f"Dry Run Skipped: {stats.get('dry_run', 0)}")
    print("=========================")

def handler(
    config: Optional[SyncConfig] = None,
    env: Optional[Mapping[str, str]] = None,
    client: Optional[WebflowClient] = None,
    feed_session: Optional[requests.Session] = None,
) -> SyncResult:
    """
    One sync run: load the CMS inventory, read the channel feed,
    create and publish every video the collection doesn't have yet.
    """
    if config is None:
        try:
            config = SyncConfig.from_env(env)
        except ConfigError as e:
            print(str(e))
            return SyncResult(status_code=500, body=str(e))

    print(f"--- YouTube -> Webflow Sync Started (DRY_RUN={config.dry_run}) ---")

    owns_client = client is None
    if owns_client:
        client = WebflowClient(config.webflow_token, config.collection_id, config.fields)

    try:
        print("\n[Phase 1] Inventory")
        inventory = client.load_inventory()
        print(f"  - Known slugs: {len(inventory.slugs)}, known URLs: {len(inventory.urls)}")

        print("\n[Phase 2] Feed")
        records, skipped = read_videos(config.channel_id, feed_session)

        print(f"\n[Phase 3] Upserting {len(records)} videos")
        stats = upsert_records(records, client, inventory, config.fields, config.dry_run)
        stats["found"] = len(records) + len(skipped)
        stats["invalid"] = len(skipped)
    except Exception as e:
        print(f"Sync failed: {e}")
        return SyncResult(status_code=500, body=str(e))
    finally:
        if owns_client:
            client.close()

    print_summary(stats, config.dry_run)
    return SyncResult(status_code=200, body="Sync complete", stats=stats)
