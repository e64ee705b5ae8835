from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ...analytics import AnalyticsEngine
from ...metrics import API_COUNTER
from ...schemas.analytics import (
    AnalyticsResponse,
    MoodTrendItem,
    MoodTrendResponse,
    StreakStatsResponse,
    SummaryStatsResponse,
)
from ...schemas.journal import (
    EntryCreate,
    EntryCreateResponse,
    MoodListResponse,
    MoodModel,
    TagCreate,
    TagListResponse,
    TagModel,
    TagUsageResponse,
)
from ...services.storage import DuplicateEntryError, StorageService

router = APIRouter(prefix="/api/v1", tags=["core"])


def get_storage_service(request: Request) -> StorageService:
    return request.app.state.storage_service


def get_analytics_engine(request: Request) -> AnalyticsEngine:
    return request.app.state.analytics_engine


def _check_range(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start must not be after end",
        )


@router.get("/analytics", response_model=AnalyticsResponse)
async def read_analytics(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
) -> AnalyticsResponse:
    _check_range(start, end)
    result = await engine.compute_analytics(start, end)
    API_COUNTER.labels(endpoint="analytics").inc()
    return AnalyticsResponse.model_validate(result)


@router.get("/analytics/streaks", response_model=StreakStatsResponse)
async def read_streaks(
    engine: AnalyticsEngine = Depends(get_analytics_engine),
) -> StreakStatsResponse:
    stats = await engine.compute_streak_stats()
    API_COUNTER.labels(endpoint="analytics_streaks").inc()
    return StreakStatsResponse.model_validate(stats)


@router.get("/analytics/mood-trend", response_model=MoodTrendResponse)
async def read_mood_trend(
    start: date = Query(...),
    end: date = Query(...),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
) -> MoodTrendResponse:
    _check_range(start, end)
    points = await engine.compute_mood_trend(start, end)
    API_COUNTER.labels(endpoint="analytics_mood_trend").inc()
    return MoodTrendResponse(
        start=start,
        end=end,
        items=[MoodTrendItem.model_validate(point) for point in points],
    )


@router.get("/analytics/summary", response_model=SummaryStatsResponse)
async def read_summary(
    engine: AnalyticsEngine = Depends(get_analytics_engine),
) -> SummaryStatsResponse:
    summary = await engine.compute_summary_stats()
    API_COUNTER.labels(endpoint="analytics_summary").inc()
    return SummaryStatsResponse.model_validate(summary)


@router.post(
    "/entries",
    response_model=EntryCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_entry(
    payload: EntryCreate,
    storage: StorageService = Depends(get_storage_service),
) -> EntryCreateResponse:
    try:
        entry = await storage.create_entry(
            entry_date=payload.entry_date,
            primary_mood_id=payload.primary_mood_id,
            secondary_mood1_id=payload.secondary_mood1_id,
            secondary_mood2_id=payload.secondary_mood2_id,
            title=payload.title,
            content=payload.content,
            category=payload.category,
            tag_ids=payload.tag_ids,
        )
    except DuplicateEntryError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    API_COUNTER.labels(endpoint="entries_post").inc()
    return EntryCreateResponse(id=entry.id, word_count=entry.word_count)


@router.get("/moods", response_model=MoodListResponse)
async def list_moods(storage: StorageService = Depends(get_storage_service)) -> MoodListResponse:
    moods = await storage.list_all_moods()
    API_COUNTER.labels(endpoint="moods_get").inc()
    return MoodListResponse(items=[MoodModel.model_validate(m) for m in moods])


@router.get("/tags", response_model=TagListResponse)
async def list_tags(storage: StorageService = Depends(get_storage_service)) -> TagListResponse:
    tags = await storage.list_all_tags()
    API_COUNTER.labels(endpoint="tags_get").inc()
    return TagListResponse(items=[TagModel.model_validate(t) for t in tags])


@router.post("/tags", response_model=TagModel, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    storage: StorageService = Depends(get_storage_service),
) -> TagModel:
    if not payload.name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="tag name required")
    tag = await storage.create_tag(payload.name)
    API_COUNTER.labels(endpoint="tags_post").inc()
    return TagModel.model_validate(tag)


@router.post("/tags/recalculate", response_model=TagUsageResponse)
async def recalculate_tag_usage(
    storage: StorageService = Depends(get_storage_service),
) -> TagUsageResponse:
    usage = await storage.recalculate_tag_usage_counts()
    API_COUNTER.labels(endpoint="tags_recalculate").inc()
    return TagUsageResponse(usage=usage)
