"""Space API boundary."""

from .auth import load_access_token, login_info
from .client import LogStream, MockLogStream, MockSpaceClient, SpaceClient
from .errors import ApiError
from .http import HttpSpaceClient
from .models import (
    PROMOTION_COMPLETE,
    CreatedRelease,
    ProjectInfo,
    ReleasePromotion,
    ReleaseRequest,
    Revision,
)

__all__ = [
    # auth
    "load_access_token",
    "login_info",
    # client
    "LogStream",
    "MockLogStream",
    "MockSpaceClient",
    "SpaceClient",
    "HttpSpaceClient",
    # errors
    "ApiError",
    # models
    "PROMOTION_COMPLETE",
    "CreatedRelease",
    "ProjectInfo",
    "ReleasePromotion",
    "ReleaseRequest",
    "Revision",
]
