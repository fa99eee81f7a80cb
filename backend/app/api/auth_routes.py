# backend/app/api/auth_routes.py

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import Field
from sqlalchemy.orm import Session

from app.api.deps_auth import (
    get_broadcaster,
    get_current_user,
    get_db,
    get_settings_dep,
    require_admin,
)
from app.core.config import Settings
from app.core.security import TokenClaims
from app.schemas import ActivityOut, APIModel, MessageOut, UserCreate, UserOut
from app.services import auth as auth_service
from app.services import users as user_service
from app.services.broadcaster import Broadcaster
from app.services.events import NewActivity, UserAdded

router = APIRouter()


class LoginIn(APIModel):
    email: str
    password: str


class LoginOut(APIModel):
    message: str = "Login successful"
    token: str
    user: UserOut


class RegisterOut(APIModel):
    message: str = "User created successfully"
    user: UserOut


class ChangePasswordIn(APIModel):
    current_password: str
    new_password: str = Field(min_length=6)


@router.post("/login", response_model=LoginOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    token, user = auth_service.login(db, payload.email, payload.password, settings)
    return LoginOut(token=token, user=UserOut.model_validate(user))


# admin-only: there is no self sign-up
@router.post("/register", response_model=RegisterOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
    admin: TokenClaims = Depends(require_admin),
):
    user, activity = user_service.create_user(db, payload, actor=admin.name)
    user_out = UserOut.model_validate(user)

    background_tasks.add_task(
        broadcaster.publish_all,
        UserAdded(data=user_out),
        NewActivity(data=ActivityOut.model_validate(activity)),
    )
    return RegisterOut(user=user_out)


@router.get("/profile", response_model=UserOut)
def profile(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    return auth_service.get_profile(db, current_user.id)


@router.put("/change-password", response_model=MessageOut)
def change_password(
    payload: ChangePasswordIn,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    auth_service.change_password(db, current_user.id, payload.current_password, payload.new_password)
    return MessageOut(message="Password updated successfully")


# tokens are stateless; the client just drops its copy
@router.post("/logout", response_model=MessageOut)
def logout(_user: TokenClaims = Depends(get_current_user)):
    return MessageOut(message="Logout successful")
