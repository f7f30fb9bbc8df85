from fastapi import APIRouter, HTTPException, status, Depends, Form
from fairshare.models.user import UserCreate, UserInDB, UserResponse
from fairshare.db.mongo import get_db
from fairshare.repositories.user_repo import UserRepository
from fairshare.core.auth import create_access_token, get_current_user
from fairshare.core.security import verify_password
from fairshare.schemas.auth import TokenResponse, TokenUser

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user: UserInDB) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(str(user.id)),
        user=TokenUser(id=str(user.id), name=user.name, email=user.email)
    )

@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db = Depends(get_db)):
    """Create a new user account."""
    user_repo = UserRepository(db)

    # Check if email already exists
    existing_user = await user_repo.get_user_by_email(user_data.email)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user = await user_repo.create_user(user_data)
    return _token_response(user)

@router.post("/login", response_model=TokenResponse)
async def login(
    email: str = Form(...),
    password: str = Form(...),
    db = Depends(get_db)
):
    """Login with email and password."""
    user_repo = UserRepository(db)

    user = await user_repo.get_user_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    return _token_response(user)

@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user)):
    """Get current user details."""
    return current_user
