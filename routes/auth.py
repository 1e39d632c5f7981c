from fastapi import APIRouter, HTTPException, status, Form

from models.auth_model import Token
from models.users_model import UserCreate, UserResponse
from dependencies.auth import AuthServiceDep, CurrentActiveUser
from mappers.users_mapper import user_db_to_response

router = APIRouter()

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, auth_service: AuthServiceDep):
    """
    Create an applicant or company account
    """
    return await auth_service.register_user(user)

@router.post("/token", response_model=Token)
async def login_for_access_token(
    auth_service: AuthServiceDep,
    username: str = Form(...),
    password: str = Form(...)
):
    """
    Authenticate user and return JWT access token
    The username field carries the account email.
    """
    try:
        return await auth_service.generate_user_token(username, password)
    except HTTPException:
        # Re-raise HTTP exceptions to preserve status code and detail
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Authentication error: {str(e)}"
        )

@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: CurrentActiveUser):
    return user_db_to_response(current_user)
