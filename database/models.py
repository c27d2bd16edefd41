from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

import config


class SortBy(str, Enum):
    """Sort dimensions accepted by the 'sortBy' query parameter."""
    ONE_DAY_VOLUME = '1DayVolume'
    SEVEN_DAY_VOLUME = '7DayVolume'
    THIRTY_DAY_VOLUME = '30DayVolume'
    ALL_TIME_VOLUME = 'allTimeVolume'


class CollectionsQuery(BaseModel):
    """
    Pydantic модель параметров запроса списка коллекций.
    (Используется в services/collections_service.py)

    Text filters are lower-cased on construction, so every equality
    filter compares against the canonical lower-case value stored in the DB.
    """
    collections_set_id: Optional[str] = None
    community: Optional[str] = None
    contract: Optional[str] = Field(default=None, pattern=r'^0x[a-fA-F0-9]{40}$')
    name: Optional[str] = None
    slug: Optional[str] = None
    # Kept as a plain string: unknown values fall back to the default sort
    sort_by: str = config.DEFAULT_SORT_BY
    include_top_bid: bool = False
    limit: int = Field(default=config.DEFAULT_LIMIT, ge=1, le=config.MAX_LIMIT)
    continuation: Optional[str] = None

    @field_validator('collections_set_id', 'community', 'contract', 'name', 'slug')
    @classmethod
    def lowercase_filter(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value is not None else None


# --- Response models ---

class WindowStats(BaseModel):
    """Per-window aggregate (1 day / 7 days / 30 days)."""
    model_config = ConfigDict(populate_by_name=True)

    day1: Optional[float] = Field(default=None, alias='1day')
    day7: Optional[float] = Field(default=None, alias='7day')
    day30: Optional[float] = Field(default=None, alias='30day')


class AllTimeWindowStats(WindowStats):
    """Per-window aggregate that also carries an all-time value."""
    all_time: Optional[float] = Field(default=None, alias='allTime')


class RankStats(BaseModel):
    """Per-window rank (integer position, 1 = highest volume)."""
    model_config = ConfigDict(populate_by_name=True)

    day1: Optional[int] = Field(default=None, alias='1day')
    day7: Optional[int] = Field(default=None, alias='7day')
    day30: Optional[int] = Field(default=None, alias='30day')
    all_time: Optional[int] = Field(default=None, alias='allTime')


class Collection(BaseModel):
    """
    Проекция одной коллекции для ответа API.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    slug: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    banner: Optional[str] = None
    discord_url: Optional[str] = Field(default=None, alias='discordUrl')
    external_url: Optional[str] = Field(default=None, alias='externalUrl')
    twitter_username: Optional[str] = Field(default=None, alias='twitterUsername')
    description: Optional[str] = None
    sample_images: List[Optional[str]] = Field(default_factory=list, alias='sampleImages')
    token_count: Optional[str] = Field(default=None, alias='tokenCount')
    primary_contract: Optional[str] = Field(default=None, alias='primaryContract')
    token_set_id: Optional[str] = Field(default=None, alias='tokenSetId')
    floor_ask_price: Optional[float] = Field(default=None, alias='floorAskPrice')
    rank: RankStats = Field(default_factory=RankStats)
    volume: AllTimeWindowStats = Field(default_factory=AllTimeWindowStats)
    volume_change: WindowStats = Field(default_factory=WindowStats, alias='volumeChange')
    floor_sale: WindowStats = Field(default_factory=WindowStats, alias='floorSale')
    # Only present in the response when 'includeTopBid' was requested
    top_bid_value: Optional[float] = Field(default=None, alias='topBidValue')
    top_bid_maker: Optional[str] = Field(default=None, alias='topBidMaker')


TOP_BID_FIELDS = {'top_bid_value', 'top_bid_maker'}


class CollectionsPage(BaseModel):
    """
    Одна страница результатов + курсор продолжения (None = конец выдачи).
    """
    collections: List[Collection]
    continuation: Optional[str] = None
    include_top_bid: bool = Field(default=False, exclude=True)

    def to_response(self) -> dict:
        """Serializes the page with API (camelCase) field names."""
        exclude = None
        if not self.include_top_bid:
            exclude = {'collections': {'__all__': TOP_BID_FIELDS}}
        return self.model_dump(by_alias=True, exclude=exclude)
