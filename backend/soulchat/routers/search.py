from fastapi import APIRouter, HTTPException

from soulchat.models.search import SearchRequest, SearchResponse
from soulchat.services.search_gateway import SearchError, SearchGateway

router = APIRouter(prefix="/api/search", tags=["search"])


@router.post("", response_model=SearchResponse)
async def search_web(body: SearchRequest):
    """Raw provider results, without the chat reply formatting."""
    try:
        data = await SearchGateway.from_settings().fetch(body.query)
    except SearchError as e:
        detail = {"error": e.message}
        if e.details:
            detail["details"] = e.details
        raise HTTPException(status_code=e.status_code, detail=detail)

    return SearchResponse(
        results=[r for r in (data.get("results") or []) if isinstance(r, dict)],
        search_id=data.get("search_id"),
        query=data.get("query") or body.query,
    )
