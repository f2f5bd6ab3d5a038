"""
FastAPI router for the owner's profile sections.

Section reads and the contact form are public; everything else requires an
admin token.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from common.utils.responses import success_response
from portfolio.dependencies import get_profile_service, require_admin, require_auth
from portfolio.routers.forms import read_uploads
from portfolio.schemas.profile import (
    ContactMessageRequest,
    UpdateAboutRequest,
    UpdateAcademicRequest,
    UpdateContactRequest,
    UpdateCoursesRequest,
    UpdateHeroRequest,
    UpdateNewsRequest,
)
from portfolio.services.profile.profile_service import ProfileService


router = APIRouter(prefix="/users", tags=["users"])


# ─────────────────────────────────────────────────────────────────
# Session user
# ─────────────────────────────────────────────────────────────────

@router.get("/user-data")
async def get_user_data(user: Annotated[dict, Depends(require_auth)]):
    """Return the identity carried by the caller's token."""
    return success_response({
        "id": user.get("sub"),
        "email": user.get("email"),
        "name": user.get("name"),
        "role": user.get("role"),
    })


# ─────────────────────────────────────────────────────────────────
# Hero
# ─────────────────────────────────────────────────────────────────

@router.get("/profile-data")
async def get_profile_data(
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    return success_response(await profile_service.get_hero())


@router.put("/update-profile")
async def update_profile(
    request: UpdateHeroRequest,
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    profile = await profile_service.update_hero(request.model_dump(exclude_unset=True))
    return success_response(profile, message="Profile updated successfully")


@router.post("/upload-profile")
async def upload_profile(
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
    profilePicture: Annotated[Optional[UploadFile], File()] = None,
):
    uploads = await read_uploads([profilePicture] if profilePicture else None)
    result = await profile_service.upload_profile_picture(uploads[0] if uploads else None)
    return success_response(result, message="Profile picture uploaded successfully")


# ─────────────────────────────────────────────────────────────────
# Academic / About
# ─────────────────────────────────────────────────────────────────

@router.get("/academic-profile")
async def get_academic_profile(
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    return success_response(await profile_service.get_academic())


@router.put("/academic-profile")
async def update_academic_profile(
    request: UpdateAcademicRequest,
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    academic = await profile_service.update_academic(
        education=request.education,
        achievements=request.achievements,
        research_focus=request.researchFocus,
    )
    return success_response(academic, message="Academic profile updated successfully")


@router.get("/about")
async def get_about(
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    return success_response(await profile_service.get_about())


@router.put("/about")
async def update_about(
    request: UpdateAboutRequest,
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    about = await profile_service.update_about(request.model_dump(exclude_unset=True))
    return success_response(about, message="About section updated successfully")


# ─────────────────────────────────────────────────────────────────
# News / Courses
# ─────────────────────────────────────────────────────────────────

@router.get("/news")
async def get_news(
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    return success_response(await profile_service.get_news())


@router.put("/news")
async def update_news(
    request: UpdateNewsRequest,
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    news = await profile_service.update_news(request.newsItems)
    return success_response(news, message="News updated successfully")


@router.delete("/news/{item_id}")
async def delete_news_item(
    item_id: str,
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    await profile_service.delete_news_item(item_id)
    return success_response(message="News item deleted successfully")


@router.get("/courses")
async def get_courses(
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    return success_response(await profile_service.get_courses())


@router.put("/courses")
async def update_courses(
    request: UpdateCoursesRequest,
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    courses = await profile_service.update_courses(request.courses)
    return success_response(courses, message="Courses updated successfully")


@router.delete("/courses/{course_id}")
async def delete_course(
    course_id: str,
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    await profile_service.delete_course(course_id)
    return success_response(message="Course deleted successfully")


# ─────────────────────────────────────────────────────────────────
# Contact / Messages
# ─────────────────────────────────────────────────────────────────

@router.get("/contact")
async def get_contact(
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    return success_response(await profile_service.get_contact())


@router.put("/contact")
async def update_contact(
    request: UpdateContactRequest,
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    contact = await profile_service.update_contact(request.model_dump(exclude_unset=True))
    return success_response(contact, message="Contact information updated successfully")


@router.post("/messages", status_code=201)
async def send_message(
    request: ContactMessageRequest,
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Public contact form."""
    message = await profile_service.save_message(request.model_dump())
    return success_response(message, message="Message received successfully")


@router.get("/messages")
async def get_messages(
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    return success_response(await profile_service.get_messages())


@router.delete("/messages/{message_id}")
async def delete_message(
    message_id: str,
    user: Annotated[dict, Depends(require_admin)],
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    await profile_service.delete_message(message_id)
    return success_response(message="Message deleted successfully")
