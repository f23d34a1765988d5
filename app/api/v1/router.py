from fastapi import APIRouter

from app.api.v1.health import router as health_router
from app.api.v1.auth import router as auth_router

from app.api.v1.projects import router as projects_router
from app.api.v1.pending_projects import router as pending_projects_router
from app.api.v1.participants import (
    agency_router,
    executing_agency_router,
    implementing_entity_router,
    delivery_partner_router,
    location_router,
)
from app.api.v1.funding_sources import router as funding_sources_router
from app.api.v1.sdg import router as sdg_router

from app.api.v1.documents import (
    document_repository_router,
    pending_document_repository_router,
)
from app.api.v1.download import router as download_router

from app.api.v1.feedback import router as feedback_router
from app.api.v1.activity import router as activity_router


v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(auth_router, tags=["auth"])

# ------------------------------------------------------------------
# PROJECTS / MODERATION
# ------------------------------------------------------------------
v1_router.include_router(projects_router, tags=["projects"])
v1_router.include_router(pending_projects_router, tags=["pending-projects"])

# ------------------------------------------------------------------
# REFERENCE ENTITIES
# ------------------------------------------------------------------
v1_router.include_router(agency_router, tags=["agencies"])
v1_router.include_router(executing_agency_router, tags=["executing-agencies"])
v1_router.include_router(implementing_entity_router, tags=["implementing-entities"])
v1_router.include_router(delivery_partner_router, tags=["delivery-partners"])
v1_router.include_router(location_router, tags=["locations"])
v1_router.include_router(funding_sources_router, tags=["funding-sources"])
v1_router.include_router(sdg_router, tags=["sdg"])

# ------------------------------------------------------------------
# DOCUMENTS
# ------------------------------------------------------------------
v1_router.include_router(document_repository_router, tags=["documents"])
v1_router.include_router(pending_document_repository_router, tags=["pending-documents"])
v1_router.include_router(download_router, tags=["download"])

# ------------------------------------------------------------------
# FEEDBACK / ACTIVITY
# ------------------------------------------------------------------
v1_router.include_router(feedback_router, tags=["feedback"])
v1_router.include_router(activity_router, tags=["activity"])
