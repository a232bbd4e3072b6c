"""Best-effort creative (thumbnail) decoration for campaign aggregates.

Fetching creatives is a network call owned by the caller; this module only
decides which campaigns are eligible, picks the thumbnail and returns new
aggregates. A failed lookup leaves the campaign undecorated.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from roas_dashboard.domain.models import CampaignAggregate, CreativeInfo
from roas_dashboard.log_config import get_logger

logger = get_logger(__name__)

CreativeFetcher = Callable[[str, str], Sequence[Mapping[str, Any] | CreativeInfo]]


def to_creative(raw: Mapping[str, Any] | CreativeInfo) -> CreativeInfo:
    if isinstance(raw, CreativeInfo):
        return raw
    image_urls = raw.get("image_urls") or raw.get("imageUrls") or ()
    return CreativeInfo(
        creative_type=raw.get("creative_type") or raw.get("type"),
        thumbnail_url=raw.get("thumbnail_url") or raw.get("thumbnailUrl"),
        image_urls=tuple(str(url) for url in image_urls if url),
    )


def pick_thumbnail(creative: CreativeInfo) -> str | None:
    if creative.creative_type == "video" and creative.thumbnail_url:
        return creative.thumbnail_url
    if creative.image_urls:
        return creative.image_urls[0]
    return None


def attach_creative(aggregate: CampaignAggregate, creative: Mapping[str, Any] | CreativeInfo) -> CampaignAggregate:
    info = to_creative(creative)
    return aggregate.with_creative(thumbnail_url=pick_thumbnail(info), creative_type=info.creative_type)


def is_creative_eligible(aggregate: CampaignAggregate) -> bool:
    return aggregate.channel_type.has_creative_api


def enrich_creatives(aggregates: Sequence[CampaignAggregate], fetch: CreativeFetcher) -> list[CampaignAggregate]:
    """Decorate eligible campaigns with the first creative ``fetch`` returns.

    ``fetch(channel_id, campaign_id)`` may raise; the error is logged and the
    campaign is returned unchanged.
    """
    enriched: list[CampaignAggregate] = []
    for aggregate in aggregates:
        if not is_creative_eligible(aggregate):
            enriched.append(aggregate)
            continue
        try:
            creatives = fetch(aggregate.channel_id, aggregate.campaign_id)
        except Exception as exc:
            logger.warning(
                "Creative lookup failed",
                channel_id=aggregate.channel_id,
                campaign_id=aggregate.campaign_id,
                error=str(exc),
            )
            enriched.append(aggregate)
            continue
        if not creatives:
            enriched.append(aggregate)
            continue
        enriched.append(attach_creative(aggregate, creatives[0]))
    return enriched
