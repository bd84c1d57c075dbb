"""Reference-code to item-id resolution."""

from __future__ import annotations

from typing import Any

import httpx

from pricesync.core.exceptions import ErrorCode
from pricesync.core.http_adapter import CatalogClient, error_detail
from pricesync.core.logging import get_logger

logger = get_logger(__name__)
failure_logger = logger.bind(error_code=ErrorCode.RESOLUTION_FAILED.value)


def _reference_ids(item: dict[str, Any]) -> list[str]:
    return [
        str(entry.get("Value"))
        for entry in item.get("referenceId") or []
        if isinstance(entry, dict) and entry.get("Key") == "RefId"
    ]


def select_item_id(products: list[dict[str, Any]], reference_code: str) -> str | None:
    """Pick the item id for ``reference_code`` from a search result.

    The first item, in remote order, whose RefId equals the code wins. When no
    item advertises its RefId the first item of the first product is used.
    Entries that are not JSON objects are ignored.
    """
    first: str | None = None
    for product in products:
        if not isinstance(product, dict) or not isinstance(product.get("items"), list):
            continue
        for item in product["items"]:
            if not isinstance(item, dict):
                continue
            item_id = item.get("itemId")
            if not item_id:
                continue
            if reference_code in _reference_ids(item):
                return str(item_id)
            if first is None:
                first = str(item_id)
    return first


class IdentifierResolver:
    """Resolve reference codes through the catalog search endpoint."""

    def __init__(self, client: CatalogClient):
        self.client = client

    async def resolve(self, reference_code: str) -> str | None:
        """Return the item id for ``reference_code`` or ``None``.

        Lookup errors, including bodies that are not JSON, are logged and
        reported as ``None``.
        """
        try:
            products = await self.client.search_by_reference(reference_code)
        except httpx.HTTPError as exc:
            failure_logger.warning(f"Lookup failed for {reference_code}: {error_detail(exc)}")
            return None
        except ValueError as exc:
            failure_logger.warning(f"Unreadable lookup response for {reference_code}: {exc}")
            return None

        item_id = select_item_id(products, reference_code)
        if item_id is None:
            failure_logger.warning(f"No catalog item found for reference {reference_code}")
        return item_id
