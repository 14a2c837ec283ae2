import requests
from typing import Optional, Dict, Any, Tuple
from ..config import FieldMap
from ..models import CmsItemPayload, Inventory

PAGE_SIZE = 100

def _is_success(response) -> bool:
    return 200 <= response.status_code < 300

class WebflowClient:
    def __init__(
        self,
        token: str,
        collection_id: str,
        fields: Optional[FieldMap] = None,
        session: Optional[requests.Session] = None,
    ):
        self.collection_id = collection_id
        self.fields = fields or FieldMap()
        self.base_url = "https://api.webflow.com/v2"
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    @property
    def items_url(self) -> str:
        return f"{self.base_url}/collections/{self.collection_id}/items"

    def close(self):
        self.session.close()

    def list_items(self, offset: int = 0) -> Optional[Dict[str, Any]]:
        """One page of the collection listing, or None if the request failed."""
        try:
            resp = self.session.get(
                self.items_url,
                params={"offset": offset, "limit": PAGE_SIZE},
                timeout=30,
            )
        except requests.RequestException as e:
            print(f"Error listing items at offset {offset}: {e}")
            return None

        if not _is_success(resp):
            print(f"Error listing items ({resp.status_code}): {resp.text}")
            return None

        try:
            page = resp.json()
        except ValueError as e:
            print(f"Error reading items page at offset {offset}: {e}")
            return None
        if not isinstance(page, dict):
            print(f"Unexpected items page at offset {offset}: {page!r}")
            return None
        return page

    @staticmethod
    def _next_offset(page: Dict[str, Any]) -> Optional[int]:
        items = page.get("items") or []
        pagination = page.get("pagination") or {}
        offset = pagination.get("offset") or 0
        total = pagination.get("total")
        if not items or total is None:
            return None
        next_offset = offset + len(items)
        return next_offset if next_offset < total else None

    def load_inventory(self) -> Inventory:
        """
        Walks every page of the collection and collects item slugs and video URLs.
        A failed page ends the walk; whatever was collected so far is returned.
        """
        inventory = Inventory()
        offset = 0
        pages = 0

        while offset is not None:
            page = self.list_items(offset)
            if page is None:
                print(f"  - Inventory incomplete, stopped after {pages} page(s)")
                break
            pages += 1

            for item in page.get("items") or []:
                field_data = item.get("fieldData") or {}
                slug = field_data.get("slug", item.get("slug"))
                if slug:
                    inventory.slugs.add(slug)
                url = field_data.get(self.fields.video_url)
                if url:
                    inventory.urls.add(url)

            offset = self._next_offset(page)

        return inventory

    def create_item(self, payload: CmsItemPayload) -> Tuple[str, Optional[str]]:
        """
        Returns (status, item_id).
        status is 'created', 'duplicate' (409) or 'error'.
        """
        try:
            resp = self.session.post(self.items_url, json=payload.model_dump(), timeout=30)
        except requests.RequestException as e:
            print(f"Error creating item: {e}")
            return "error", None

        if resp.status_code == 409:
            return "duplicate", None

        if not _is_success(resp):
            print(f"Error creating item ({resp.status_code}): {resp.text}")
            return "error", None

        try:
            created = resp.json()
        except ValueError:
            created = None
        if not isinstance(created, dict):
            created = {}
        item_id = created.get("id") or (created.get("item") or {}).get("id")
        if not item_id:
            print(f"Create succeeded but no item id in response: {created}")
            return "error", None

        return "created", item_id

    def publish_item(self, item_id: str) -> bool:
        try:
            resp = self.session.post(
                f"{self.items_url}/publish",
                json={"itemIds": [item_id], "publishToWebflow": True},
                timeout=30,
            )
        except requests.RequestException as e:
            print(f"Error publishing item {item_id}: {e}")
            return False

        if not _is_success(resp):
            print(f"Error publishing item ({resp.status_code}): {resp.text}")
            return False
        return True
