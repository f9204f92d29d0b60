from app.models.post import (
    ActiveStatus,
    Post,
    PostBenefit,
    PostBusiness,
    PostLevel,
    PostLocation,
    PostProfession,
)
