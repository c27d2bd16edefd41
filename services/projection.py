# services/projection.py
"""
Maps raw `collections` rows (see database/collections.py) to API models.
"""

from typing import Any, Dict

from database.models import AllTimeWindowStats, Collection, RankStats, WindowStats
from database.utils import from_buffer
from .formatting import format_eth


def _pick_image(row: Dict[str, Any]) -> Any:
    """Collection image, or the first sampled token image as a fallback."""
    if row.get("image"):
        return row["image"]
    sample_images = row.get("sample_images") or []
    return sample_images[0] if sample_images else None


def project_collection(row: Dict[str, Any], include_top_bid: bool = False) -> Collection:
    token_count = row.get("token_count")

    collection = Collection(
        id=row["id"],
        slug=row.get("slug"),
        name=row.get("name"),
        image=_pick_image(row),
        banner=row.get("banner"),
        discord_url=row.get("discord_url"),
        external_url=row.get("external_url"),
        twitter_username=row.get("twitter_username"),
        description=row.get("description"),
        sample_images=list(row.get("sample_images") or []),
        token_count=str(token_count) if token_count is not None else None,
        primary_contract=from_buffer(row.get("contract")),
        token_set_id=row.get("token_set_id"),
        floor_ask_price=format_eth(row.get("floor_sell_value")),
        rank=RankStats(
            day1=row.get("day1_rank"),
            day7=row.get("day7_rank"),
            day30=row.get("day30_rank"),
            all_time=row.get("all_time_rank"),
        ),
        volume=AllTimeWindowStats(
            day1=format_eth(row.get("day1_volume")),
            day7=format_eth(row.get("day7_volume")),
            day30=format_eth(row.get("day30_volume")),
            all_time=format_eth(row.get("all_time_volume")),
        ),
        volume_change=WindowStats(
            day1=row.get("day1_volume_change"),
            day7=row.get("day7_volume_change"),
            day30=row.get("day30_volume_change"),
        ),
        floor_sale=WindowStats(
            day1=format_eth(row.get("day1_floor_sell_value")),
            day7=format_eth(row.get("day7_floor_sell_value")),
            day30=format_eth(row.get("day30_floor_sell_value")),
        ),
    )

    if include_top_bid:
        collection.top_bid_value = format_eth(row.get("top_buy_value"))
        collection.top_bid_maker = from_buffer(row.get("top_buy_maker"))

    return collection
