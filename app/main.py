import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import create_db_and_tables, session_scope
from app.exceptions import register_exception_handlers
from app.routes import (
    admin_payments,
    ads,
    auth,
    categories_public,
    favorites,
    functions,
    health,
    items_admin,
    items_public,
    payments,
    ratings,
    users,
)
from app.services.category_service import seed_categories

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Run DB creation ONLY in local
    if settings.ENV == "local":
        create_db_and_tables()

    with session_scope() as session:
        seed_categories(session)

    logger.info("%s API started (env=%s)", settings.STORE_NAME, settings.ENV)
    yield


app = FastAPI(title=f"{settings.STORE_NAME} Storefront API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(categories_public.router, prefix="/categories", tags=["Public Categories"])
app.include_router(items_public.router, prefix="/items", tags=["Public Items"])
app.include_router(favorites.router, prefix="/favorites", tags=["Favorites"])
app.include_router(ratings.router, prefix="/ratings", tags=["Ratings"])
app.include_router(payments.router, prefix="/payments", tags=["Payments"])
app.include_router(ads.router, prefix="/ads", tags=["Ads"])
app.include_router(functions.router, prefix="/functions/v1", tags=["Functions"])
app.include_router(items_admin.router, prefix="/admin", tags=["Admin Items"])
app.include_router(admin_payments.router, prefix="/admin/payments", tags=["Admin Payments"])
app.include_router(ads.admin_router, prefix="/admin/ads", tags=["Admin Ads"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "auth_endpoints": [
            "/auth/register", "/auth/login", "/auth/discord", "/auth/logout"
        ],
        "user_endpoints": [
            "/users/me", "/users/me/webhook", "/users/me/downloads", "/users/me/favorites"
        ],
        "catalog": [
            "/categories", "/items", "/items/featured", "/items/{item_id}",
            "/items/{item_id}/access"
        ],
        "engagement": [
            "/favorites/{item_id}/toggle", "/favorites/status/{item_id}",
            "/ratings/{item_id}"
        ],
        "payments": [
            "/payments/status/{item_id}", "/payments/me"
        ],
        "ads": ["/ads"],
        "functions": [
            "/functions/v1/create-payment-session",
            "/functions/v1/get-download-url",
            "/functions/v1/notify-new-release",
            "/functions/v1/send-download-thanks",
            "/functions/v1/send-discord-notification",
            "/functions/v1/cleanup-expired-ads"
        ],
        "admin": [
            "/admin/items", "/admin/items/{item_id}", "/admin/overview",
            "/admin/payments", "/admin/payments/{payment_id}/complete",
            "/admin/payments/{payment_id}/fail",
            "/admin/ads", "/admin/ads/{ad_id}/toggle"
        ]
    }
