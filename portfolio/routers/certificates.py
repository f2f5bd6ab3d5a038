"""
FastAPI router for certificate endpoints.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from common.utils.responses import paginated_response, success_response
from portfolio.dependencies import get_certificate_service, require_admin
from portfolio.routers.forms import (
    parse_bool,
    parse_json_list,
    read_uploads,
    submitted,
)
from portfolio.services.content.certificate_service import CertificateService


router = APIRouter(prefix="/certificates", tags=["certificates"])


# ─────────────────────────────────────────────────────────────────
# Read
# ─────────────────────────────────────────────────────────────────

@router.get("")
async def list_certificates(
    certificate_service: Annotated[CertificateService, Depends(get_certificate_service)],
    category: Optional[str] = None,
    featured: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
):
    items, pagination = await certificate_service.list(
        category=category,
        featured=parse_bool(featured),
        page=page,
        limit=limit,
    )
    return paginated_response(items, pagination)


@router.get("/category/{category}")
async def list_certificates_by_category(
    category: str,
    certificate_service: Annotated[CertificateService, Depends(get_certificate_service)],
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
):
    items, pagination = await certificate_service.list_by_category(
        category, page=page, limit=limit
    )
    return paginated_response(items, pagination)


@router.get("/{certificate_id}")
async def get_certificate(
    certificate_id: str,
    certificate_service: Annotated[CertificateService, Depends(get_certificate_service)],
):
    certificate = await certificate_service.get_by_id(certificate_id)
    return success_response(certificate)


# ─────────────────────────────────────────────────────────────────
# Write
# ─────────────────────────────────────────────────────────────────

@router.post("", status_code=201)
async def create_certificate(
    user: Annotated[dict, Depends(require_admin)],
    certificate_service: Annotated[CertificateService, Depends(get_certificate_service)],
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    issuingOrganization: Annotated[Optional[str], Form()] = None,
    issueDate: Annotated[Optional[str], Form()] = None,
    expirationDate: Annotated[Optional[str], Form()] = None,
    category: Annotated[Optional[str], Form()] = None,
    skills: Annotated[Optional[str], Form()] = None,
    credentialId: Annotated[Optional[str], Form()] = None,
    credentialUrl: Annotated[Optional[str], Form()] = None,
    featured: Annotated[Optional[str], Form()] = None,
    images: Annotated[Optional[List[UploadFile]], File()] = None,
):
    fields = submitted(
        title=title,
        description=description,
        issuingOrganization=issuingOrganization,
        issueDate=issueDate,
        expirationDate=expirationDate,
        category=category,
        skills=parse_json_list(skills, "skills"),
        credentialId=credentialId,
        credentialUrl=credentialUrl,
        featured=parse_bool(featured),
    )
    certificate = await certificate_service.create(fields, await read_uploads(images))
    return success_response(certificate, message="Certificate created successfully")


@router.put("/{certificate_id}")
async def update_certificate(
    certificate_id: str,
    user: Annotated[dict, Depends(require_admin)],
    certificate_service: Annotated[CertificateService, Depends(get_certificate_service)],
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    issuingOrganization: Annotated[Optional[str], Form()] = None,
    issueDate: Annotated[Optional[str], Form()] = None,
    expirationDate: Annotated[Optional[str], Form()] = None,
    category: Annotated[Optional[str], Form()] = None,
    skills: Annotated[Optional[str], Form()] = None,
    credentialId: Annotated[Optional[str], Form()] = None,
    credentialUrl: Annotated[Optional[str], Form()] = None,
    featured: Annotated[Optional[str], Form()] = None,
    existingImages: Annotated[Optional[str], Form()] = None,
    images: Annotated[Optional[List[UploadFile]], File()] = None,
):
    fields = submitted(
        title=title,
        description=description,
        issuingOrganization=issuingOrganization,
        issueDate=issueDate,
        expirationDate=expirationDate,
        category=category,
        skills=parse_json_list(skills, "skills"),
        credentialId=credentialId,
        credentialUrl=credentialUrl,
        featured=parse_bool(featured),
        existingImages=parse_json_list(existingImages, "existingImages"),
    )
    certificate = await certificate_service.update(
        certificate_id, fields, await read_uploads(images)
    )
    return success_response(certificate, message="Certificate updated successfully")


@router.delete("/{certificate_id}")
async def delete_certificate(
    certificate_id: str,
    user: Annotated[dict, Depends(require_admin)],
    certificate_service: Annotated[CertificateService, Depends(get_certificate_service)],
):
    await certificate_service.delete(certificate_id)
    return success_response(message="Certificate deleted successfully")
