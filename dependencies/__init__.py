"""
FastAPI dependencies: database handles, repositories, services and the
authenticated user in its role specific flavours.
"""
from .auth import CurrentActiveUser, CompanyUser, ApplicantUser, AuthServiceDep
from .db import DB, ObjectStorage
