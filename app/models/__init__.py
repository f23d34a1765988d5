# Importing this package registers every table on Base.metadata.
from app.models.admin_user import AdminUser
from app.models.agency import Agency
from app.models.delivery_partner import DeliveryPartner
from app.models.document import DocumentRepository, PendingDocumentRepository
from app.models.executing_agency import ExecutingAgency
from app.models.feedback import Feedback
from app.models.funding_source import FundingSource
from app.models.implementing_entity import ImplementingEntity
from app.models.location import Location
from app.models.pending_project import PendingProject
from app.models.project import Project
from app.models.project_links import (
    ProjectAgency,
    ProjectDeliveryPartner,
    ProjectExecutingAgency,
    ProjectFundingSource,
    ProjectImplementingEntity,
    ProjectLocation,
    ProjectSdg,
)
from app.models.sdg_alignment import SdgAlignment
from app.models.wash_component import WashComponent

__all__ = [
    "AdminUser",
    "Agency",
    "DeliveryPartner",
    "DocumentRepository",
    "ExecutingAgency",
    "Feedback",
    "FundingSource",
    "ImplementingEntity",
    "Location",
    "PendingDocumentRepository",
    "PendingProject",
    "Project",
    "ProjectAgency",
    "ProjectDeliveryPartner",
    "ProjectExecutingAgency",
    "ProjectFundingSource",
    "ProjectImplementingEntity",
    "ProjectLocation",
    "ProjectSdg",
    "SdgAlignment",
    "WashComponent",
]
