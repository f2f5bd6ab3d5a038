"""
FastAPI router for project endpoints.

Reads are public. Writes require an admin token and take multipart forms
with image files under the "images" field.
"""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from common.utils.responses import paginated_response, success_response
from portfolio.dependencies import get_project_service, require_admin
from portfolio.routers.forms import (
    parse_bool,
    parse_json_list,
    read_uploads,
    submitted,
)
from portfolio.services.content.project_service import ProjectService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


# ─────────────────────────────────────────────────────────────────
# Read
# ─────────────────────────────────────────────────────────────────

@router.get("")
async def list_projects(
    project_service: Annotated[ProjectService, Depends(get_project_service)],
    category: Optional[str] = None,
    featured: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
):
    """List projects, newest first, without detailedDescription."""
    items, pagination = await project_service.list(
        category=category,
        featured=parse_bool(featured),
        page=page,
        limit=limit,
    )
    return paginated_response(items, pagination)


@router.get("/category/{category}")
async def list_projects_by_category(
    category: str,
    project_service: Annotated[ProjectService, Depends(get_project_service)],
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
):
    items, pagination = await project_service.list_by_category(category, page=page, limit=limit)
    return paginated_response(items, pagination)


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    project_service: Annotated[ProjectService, Depends(get_project_service)],
):
    project = await project_service.get_by_id(project_id)
    return success_response(project)


# ─────────────────────────────────────────────────────────────────
# Write
# ─────────────────────────────────────────────────────────────────

@router.post("", status_code=201)
async def create_project(
    user: Annotated[dict, Depends(require_admin)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    detailedDescription: Annotated[Optional[str], Form()] = None,
    technologies: Annotated[Optional[str], Form()] = None,
    category: Annotated[Optional[str], Form()] = None,
    projectDate: Annotated[Optional[str], Form()] = None,
    teamMembers: Annotated[Optional[str], Form()] = None,
    githubLink: Annotated[Optional[str], Form()] = None,
    liveDemoLink: Annotated[Optional[str], Form()] = None,
    featured: Annotated[Optional[str], Form()] = None,
    images: Annotated[Optional[List[UploadFile]], File()] = None,
):
    """Create a project with optional images."""
    fields = submitted(
        title=title,
        description=description,
        detailedDescription=detailedDescription,
        technologies=parse_json_list(technologies, "technologies"),
        category=category,
        projectDate=projectDate,
        teamMembers=parse_json_list(teamMembers, "teamMembers"),
        githubLink=githubLink,
        liveDemoLink=liveDemoLink,
        featured=parse_bool(featured),
    )
    project = await project_service.create(fields, await read_uploads(images))
    return success_response(project, message="Project created successfully")


@router.put("/{project_id}")
async def update_project(
    project_id: str,
    user: Annotated[dict, Depends(require_admin)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    detailedDescription: Annotated[Optional[str], Form()] = None,
    technologies: Annotated[Optional[str], Form()] = None,
    category: Annotated[Optional[str], Form()] = None,
    projectDate: Annotated[Optional[str], Form()] = None,
    teamMembers: Annotated[Optional[str], Form()] = None,
    githubLink: Annotated[Optional[str], Form()] = None,
    liveDemoLink: Annotated[Optional[str], Form()] = None,
    featured: Annotated[Optional[str], Form()] = None,
    existingImages: Annotated[Optional[str], Form()] = None,
    images: Annotated[Optional[List[UploadFile]], File()] = None,
):
    """
    Update a project.

    existingImages lists the stored images to keep; new files are appended.
    """
    fields = submitted(
        title=title,
        description=description,
        detailedDescription=detailedDescription,
        technologies=parse_json_list(technologies, "technologies"),
        category=category,
        projectDate=projectDate,
        teamMembers=parse_json_list(teamMembers, "teamMembers"),
        githubLink=githubLink,
        liveDemoLink=liveDemoLink,
        featured=parse_bool(featured),
        existingImages=parse_json_list(existingImages, "existingImages"),
    )
    project = await project_service.update(project_id, fields, await read_uploads(images))
    return success_response(project, message="Project updated successfully")


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    user: Annotated[dict, Depends(require_admin)],
    project_service: Annotated[ProjectService, Depends(get_project_service)],
):
    await project_service.delete(project_id)
    logger.info(f"Project {project_id} deleted by {user.get('email') or user.get('sub')}")
    return success_response(message="Project deleted successfully")
