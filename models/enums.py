from enum import Enum

class RoleKind(str, Enum):
    """Closed set of account roles on the marketplace"""
    APPLICANT = "applicant"  # students / AI builders
    ORGANIZATION = "organization"  # companies posting opportunities

class ApplicationStatus(str, Enum):
    """Lifecycle of an application to an opportunity"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

class UploadKind(str, Enum):
    """Kinds of files a user can upload to object storage"""
    AVATAR = "avatar"
    CV = "cv"
    PORTFOLIO = "portfolio"
