"""
Webhook endpoints.

The hosted backend's database webhook posts here on every row change in
a catalog table. The change is republished on the in-process feed.
"""

import hmac
import logging
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel

from artgallery.catalog.feed import ChangeEvent, ChangeFeed, get_change_feed
from artgallery.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hooks", tags=["hooks"])


class CatalogChangePayload(BaseModel):
    """Row change as sent by the database webhook."""

    type: Literal["INSERT", "UPDATE", "DELETE"]
    table: str
    record: dict[str, Any] | None = None
    old_record: dict[str, Any] | None = None


class HookResponse(BaseModel):
    received: bool = True
    subscribers: int


def _secret_matches(supplied: str | None) -> bool:
    if not settings.webhook_secret:
        return True
    return supplied is not None and hmac.compare_digest(supplied, settings.webhook_secret)


@router.post("/catalog", response_model=HookResponse)
async def catalog_changed(
    payload: CatalogChangePayload,
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    x_webhook_secret: Annotated[str | None, Header()] = None,
) -> HookResponse:
    """
    Announce a catalog row change to in-process subscribers.

    When a webhook secret is configured the request must carry it in the
    ``X-Webhook-Secret`` header.
    """
    if not _secret_matches(x_webhook_secret):
        logger.warning("Rejected catalog webhook for %s: bad secret", payload.table)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid webhook secret",
        )

    await feed.publish(
        ChangeEvent(
            table=payload.table,
            type=payload.type,
            record=payload.record,
            old_record=payload.old_record,
        )
    )
    return HookResponse(subscribers=feed.subscriber_count(payload.table))
