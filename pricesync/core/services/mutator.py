"""Price replace calls."""

from __future__ import annotations

from typing import Any

import httpx

from pricesync.core.exceptions import ErrorCode
from pricesync.core.http_adapter import CatalogClient, error_detail
from pricesync.core.logging import get_logger
from pricesync.core.models import OperationOutcome, ResolvedUpdate

logger = get_logger(__name__)


class PriceMutator:
    """Apply one base-price update per call.

    Args:
        client: catalog client issuing the PUT.
        mirror_cost_price: send the base price as ``costPrice`` too instead of
            leaving it ``null`` for the catalog to derive.
        dry_run: build the request but never send it.
    """

    def __init__(self, client: CatalogClient, mirror_cost_price: bool = False, dry_run: bool = False):
        self.client = client
        self.mirror_cost_price = mirror_cost_price
        self.dry_run = dry_run

    def build_payload(self, update: ResolvedUpdate) -> dict[str, Any]:
        return {
            "itemId": update.item_id,
            "basePrice": update.amount_minor_units,
            "costPrice": update.amount_minor_units if self.mirror_cost_price else None,
            "markup": None,
            "fixedPrices": [],
        }

    async def update_price(self, update: ResolvedUpdate) -> OperationOutcome:
        """Send the update and describe what happened; never raises."""
        outcome = {
            "item_id": update.item_id,
            "reference_code": update.reference_code,
            "amount_minor_units": update.amount_minor_units,
        }
        payload = self.build_payload(update)

        if self.dry_run:
            logger.info(f"DRY-RUN PUT pricing/prices/{update.item_id} {payload}")
            return OperationOutcome(**outcome, succeeded=True, dry_run=True)

        try:
            response = await self.client.put_price(update.item_id, payload)
        except httpx.HTTPStatusError as exc:
            return OperationOutcome(
                **outcome,
                succeeded=False,
                http_status=exc.response.status_code,
                error_detail=error_detail(exc),
                error_code=ErrorCode.MUTATION_FAILED.value,
            )
        except httpx.HTTPError as exc:
            return OperationOutcome(
                **outcome,
                succeeded=False,
                error_detail=error_detail(exc),
                error_code=ErrorCode.MUTATION_FAILED.value,
            )

        return OperationOutcome(**outcome, succeeded=True, http_status=response.status_code)
