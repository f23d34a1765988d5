from app.schemas.projects import ProjectPayload, PendingProjectPayload, WashComponentPayload
from app.schemas.entities import NameIn, LocationIn, FundingSourceIn, FundingSourceUpdate, SdgIn, SdgUpdate
from app.schemas.documents import DocumentPayload, PendingDocumentPayload
from app.schemas.feedback import FeedbackCreate, FeedbackUpdate
from app.schemas.auth import LoginRequest, TokenResponse
