"""
FastAPI router for achievements and research papers.

Achievements carry one optional photo ("photo"); research papers carry one
PDF ("pdfFile") which can be downloaded through the API.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import StreamingResponse

from common.utils.responses import paginated_response, success_response
from portfolio.dependencies import (
    get_achievement_service,
    get_research_service,
    require_admin,
)
from portfolio.routers.forms import parse_string_list, read_uploads, submitted
from portfolio.services.content.achievement_service import AchievementService
from portfolio.services.content.research_service import ResearchService


router = APIRouter(prefix="/researchAchievement", tags=["research", "achievements"])


# ─────────────────────────────────────────────────────────────────
# Achievements
# ─────────────────────────────────────────────────────────────────

@router.get("/achievements")
async def list_achievements(
    achievement_service: Annotated[AchievementService, Depends(get_achievement_service)],
    category: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
):
    items, pagination = await achievement_service.list(category=category, page=page, limit=limit)
    return paginated_response(items, pagination)


@router.get("/achievements/{achievement_id}")
async def get_achievement(
    achievement_id: str,
    achievement_service: Annotated[AchievementService, Depends(get_achievement_service)],
):
    achievement = await achievement_service.get_by_id(achievement_id)
    return success_response(achievement)


@router.post("/achievements", status_code=201)
async def create_achievement(
    user: Annotated[dict, Depends(require_admin)],
    achievement_service: Annotated[AchievementService, Depends(get_achievement_service)],
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    date: Annotated[Optional[str], Form()] = None,
    place: Annotated[Optional[str], Form()] = None,
    event: Annotated[Optional[str], Form()] = None,
    position: Annotated[Optional[str], Form()] = None,
    category: Annotated[Optional[str], Form()] = None,
    photo: Annotated[Optional[UploadFile], File()] = None,
):
    fields = submitted(
        title=title,
        description=description,
        date=date,
        place=place,
        event=event,
        position=position,
        category=category,
    )
    uploads = await read_uploads([photo] if photo else None)
    achievement = await achievement_service.create(fields, uploads)
    return success_response(achievement, message="Achievement created successfully")


@router.put("/achievements/{achievement_id}")
async def update_achievement(
    achievement_id: str,
    user: Annotated[dict, Depends(require_admin)],
    achievement_service: Annotated[AchievementService, Depends(get_achievement_service)],
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    date: Annotated[Optional[str], Form()] = None,
    place: Annotated[Optional[str], Form()] = None,
    event: Annotated[Optional[str], Form()] = None,
    position: Annotated[Optional[str], Form()] = None,
    category: Annotated[Optional[str], Form()] = None,
    photo: Annotated[Optional[UploadFile], File()] = None,
):
    """Update an achievement. A new photo replaces the stored one."""
    fields = submitted(
        title=title,
        description=description,
        date=date,
        place=place,
        event=event,
        position=position,
        category=category,
    )
    uploads = await read_uploads([photo] if photo else None)
    achievement = await achievement_service.update(achievement_id, fields, uploads)
    return success_response(achievement, message="Achievement updated successfully")


@router.delete("/achievements/{achievement_id}")
async def delete_achievement(
    achievement_id: str,
    user: Annotated[dict, Depends(require_admin)],
    achievement_service: Annotated[AchievementService, Depends(get_achievement_service)],
):
    await achievement_service.delete(achievement_id)
    return success_response(message="Achievement deleted successfully")


# ─────────────────────────────────────────────────────────────────
# Research papers
# ─────────────────────────────────────────────────────────────────

@router.get("/research")
async def list_research(
    research_service: Annotated[ResearchService, Depends(get_research_service)],
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
):
    items, pagination = await research_service.list(page=page, limit=limit)
    return paginated_response(items, pagination)


@router.get("/research/{research_id}")
async def get_research(
    research_id: str,
    research_service: Annotated[ResearchService, Depends(get_research_service)],
):
    paper = await research_service.get_by_id(research_id)
    return success_response(paper)


@router.get("/research/{research_id}/download")
async def download_research(
    research_id: str,
    research_service: Annotated[ResearchService, Depends(get_research_service)],
):
    """Stream the paper's PDF as an attachment."""
    filename, remote = await research_service.open_download(research_id)

    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    if remote.content_length:
        headers["Content-Length"] = remote.content_length

    return StreamingResponse(
        remote.iter_bytes(),
        media_type="application/pdf",
        headers=headers,
    )


@router.post("/research", status_code=201)
async def create_research(
    user: Annotated[dict, Depends(require_admin)],
    research_service: Annotated[ResearchService, Depends(get_research_service)],
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    publishedDate: Annotated[Optional[str], Form()] = None,
    publisher: Annotated[Optional[str], Form()] = None,
    doi: Annotated[Optional[str], Form()] = None,
    authors: Annotated[Optional[List[str]], Form()] = None,
    tags: Annotated[Optional[List[str]], Form()] = None,
    pdfFile: Annotated[Optional[UploadFile], File()] = None,
):
    """Add a research paper. The PDF is required."""
    fields = submitted(
        title=title,
        description=description,
        publishedDate=publishedDate,
        publisher=publisher,
        doi=doi,
        authors=parse_string_list(authors, "authors"),
        tags=parse_string_list(tags, "tags"),
    )
    uploads = await read_uploads([pdfFile] if pdfFile else None)
    paper = await research_service.create(fields, uploads)
    return success_response(paper, message="Research paper added successfully")


@router.put("/research/{research_id}")
async def update_research(
    research_id: str,
    user: Annotated[dict, Depends(require_admin)],
    research_service: Annotated[ResearchService, Depends(get_research_service)],
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    publishedDate: Annotated[Optional[str], Form()] = None,
    publisher: Annotated[Optional[str], Form()] = None,
    doi: Annotated[Optional[str], Form()] = None,
    authors: Annotated[Optional[List[str]], Form()] = None,
    tags: Annotated[Optional[List[str]], Form()] = None,
    pdfFile: Annotated[Optional[UploadFile], File()] = None,
):
    fields = submitted(
        title=title,
        description=description,
        publishedDate=publishedDate,
        publisher=publisher,
        doi=doi,
        authors=parse_string_list(authors, "authors"),
        tags=parse_string_list(tags, "tags"),
    )
    uploads = await read_uploads([pdfFile] if pdfFile else None)
    paper = await research_service.update(research_id, fields, uploads)
    return success_response(paper, message="Research paper updated successfully")


@router.delete("/research/{research_id}")
async def delete_research(
    research_id: str,
    user: Annotated[dict, Depends(require_admin)],
    research_service: Annotated[ResearchService, Depends(get_research_service)],
):
    await research_service.delete(research_id)
    return success_response(message="Research paper deleted successfully")
