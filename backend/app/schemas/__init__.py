# Post related schemas
from .post import (
    PostsGetRequest,
    PostCreateRequest,
    PostHeadingInfoUpdateRequest,
    PostDetailedInfoUpdateRequest,
    PostGeneralInfoUpdateRequest,
    PostActiveStatusUpdateRequest,
    PostCounterUpdateRequest,
    PostResponse,
    PaginationResponse,
    LocationSchema,
)

# Collaborator schemas
from .clients import (
    BusinessResponse,
    RawRecruiterResponse,
    ProfessionResponse,
    CategoryResponse,
    LevelResponse,
    BenefitResponse,
    PostIndexDocument,
)

__all__ = [
    # Post related
    "PostsGetRequest", "PostCreateRequest",
    "PostHeadingInfoUpdateRequest", "PostDetailedInfoUpdateRequest",
    "PostGeneralInfoUpdateRequest", "PostActiveStatusUpdateRequest",
    "PostCounterUpdateRequest", "PostResponse", "PaginationResponse", "LocationSchema",

    # Collaborators
    "BusinessResponse", "RawRecruiterResponse", "ProfessionResponse",
    "CategoryResponse", "LevelResponse", "BenefitResponse", "PostIndexDocument",
]
