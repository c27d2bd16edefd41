# api/endpoints/collections.py

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

import config
from database.models import CollectionsQuery, SortBy
from services import list_collections, InvalidRequest, InvalidCursor, UpstreamFailure

# --- Setup ---
log = logging.getLogger(__name__)
collections_router = APIRouter()


# ============================================================================
# === ПУБЛИЧНЫЙ ЭНДПОИНТ (JSON) ===
# ============================================================================
@collections_router.get("/collections/v4")
def get_collections(
    collectionsSetId: Optional[str] = Query(None, description="Filter to a particular collection set"),
    community: Optional[str] = Query(None, description="Filter to a particular community, e.g. `artblocks`"),
    contract: Optional[str] = Query(
        None,
        pattern=r"^0x[a-fA-F0-9]{40}$",
        description="Filter to a particular contract",
    ),
    name: Optional[str] = Query(None, description="Search for collections that match a string, e.g. `bored`"),
    slug: Optional[str] = Query(None, description="Filter to a particular slug, e.g. `boredapeyachtclub`"),
    sortBy: SortBy = Query(SortBy(config.DEFAULT_SORT_BY)),
    includeTopBid: bool = Query(False),
    limit: int = Query(config.DEFAULT_LIMIT, ge=1, le=config.MAX_LIMIT),
    continuation: Optional[str] = Query(None),
):
    """
    Get a filtered list of collections, sorted by volume (descending).
    Pass back `continuation` from the previous response to get the next page.
    """
    log_prefix = "[API /collections/v4 GET]"
    log.info(f"{log_prefix} Запрошены коллекции (sortBy={sortBy.value}, limit={limit})...")

    try:
        query = CollectionsQuery(
            collections_set_id=collectionsSetId,
            community=community,
            contract=contract,
            name=name,
            slug=slug,
            sort_by=sortBy.value,
            include_top_bid=includeTopBid,
            limit=limit,
            continuation=continuation,
        )
        page = list_collections(query, log_prefix=log_prefix)
        return page.to_response()

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (InvalidRequest, InvalidCursor) as e:
        log.warning(f"{log_prefix} ⚠️ {type(e).__name__}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamFailure as e:
        log.error(f"{log_prefix} ❌ Ошибка хранилища: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
