from fastapi import APIRouter

from local_crud.api.deps import AppSettings, RawBody, StoreDep, handler_boundary
from local_crud.config import Settings
from local_crud.schemas import SearchRequest, SearchResponse
from local_crud.services.search import search_items
from local_crud.services.store.base import RecordStore
from local_crud.services.validation import load_request, parse_json_body

router = APIRouter(tags=["search"])


@router.post("/search", response_model=SearchResponse)
def search(
    raw: bytes = RawBody,
    store: RecordStore = StoreDep,
    settings: Settings = AppSettings,
) -> SearchResponse:
    with handler_boundary(store, "search"):
        request = load_request(SearchRequest, parse_json_body(raw))
        items, limit = search_items(store, request, default_limit=settings.default_search_limit)
    return SearchResponse(total=len(items), limit=limit, items=items)
