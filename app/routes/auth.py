from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from app.config import settings
from app.database import get_session
from app.exceptions import AuthenticationRequired, Conflict
from app.models.profile import Profile
from app.schemas.user_schemas import DiscordTokenRequest, UserRegister, UserLogin, Token, UserResponse
from app.utils.hash import hash_password, verify_password
from app.utils.token import create_access_token
from app.utils.discord_auth import verify_discord_token


router = APIRouter()


def _role_for(email: str) -> str:
    admins = {e.lower() for e in settings.ADMIN_EMAILS}
    return "admin" if email.lower() in admins else "user"


def _issue_token(profile: Profile) -> Token:
    token = create_access_token({"sub": str(profile.id)})
    return Token(access_token=token, token_type="bearer")


# -------- AUTH ROUTES --------

@router.post("/register", response_model=UserResponse)
def register_user(payload: UserRegister, session: Session = Depends(get_session)):
    existing_user = session.exec(select(Profile).where(Profile.email == payload.email)).first()
    if existing_user:
        raise Conflict("Email already registered")

    profile = Profile(
        username=payload.username or payload.email.split("@")[0],
        email=payload.email,
        password_hash=hash_password(payload.password),
        auth_provider="email",
        role=_role_for(payload.email),
    )

    session.add(profile)
    session.commit()
    session.refresh(profile)

    return UserResponse(
        message="Registration successful.",
        user_id=profile.id,
        email=profile.email,
        role=profile.role,
    )


@router.post("/login", response_model=Token)
def login(payload: UserLogin, session: Session = Depends(get_session)):
    profile = session.exec(select(Profile).where(Profile.email == payload.email)).first()

    if not profile or not verify_password(payload.password, profile.password_hash):
        raise AuthenticationRequired("Invalid email or password")

    return _issue_token(profile)


@router.post("/discord", response_model=Token)
def discord_login(request: DiscordTokenRequest, session: Session = Depends(get_session)):
    discord_user = verify_discord_token(request.access_token)
    if not discord_user:
        raise AuthenticationRequired("Invalid Discord token")

    profile = session.exec(
        select(Profile).where(Profile.discord_user_id == discord_user["id"])
    ).first()

    if not profile:
        # Discord accounts without a verified email still need a unique key
        email = discord_user["email"] or f"{discord_user['id']}@users.discord"

        profile = session.exec(select(Profile).where(Profile.email == email)).first()
        if profile:
            profile.discord_user_id = discord_user["id"]
        else:
            profile = Profile(
                username=discord_user["name"],
                email=email,
                auth_provider="discord",
                discord_user_id=discord_user["id"],
                role=_role_for(email),
            )

        session.add(profile)
        session.commit()
        session.refresh(profile)

    return _issue_token(profile)


@router.post("/logout")
def logout():
    return {"message": "Signed out. Discard the access token on the client."}
