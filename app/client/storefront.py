import logging
from typing import Any, List, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from app.client.dismissed_ads import DismissedAds
from app.client.session import SessionContext
from app.schemas.ad_schemas import AdResponse
from app.schemas.download_schemas import DownloadUrlResponse
from app.schemas.item_schemas import ItemAccessResponse, ItemPage, ItemResponse
from app.schemas.payment_schemas import PaymentSessionResponse, PaymentStatusResponse
from app.schemas.review_schemas import FavoriteState, RatingSummary
from app.schemas.user_schemas import ProfileResponse, Token, UserResponse, WebhookSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorefrontClientError(Exception):
    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}")


class StorefrontClient:
    """
    UI action layer over the storefront HTTP API.

    `http` is anything exposing a requests-style
    `request(method, url, json=, headers=, params=)`: a `requests.Session`
    in a real client, FastAPI's `TestClient` in tests. Every response is
    validated into the API's own schema records before it is returned.
    """

    def __init__(
        self,
        http,
        base_url: str = "",
        session_context: Optional[SessionContext] = None,
        dismissed_ads: Optional[DismissedAds] = None,
    ):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.session = session_context or SessionContext().start()
        self.dismissed_ads = dismissed_ads

    # -------------------------
    # transport
    # -------------------------

    def _headers(self) -> dict:
        token = self.session.access_token
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _call(self, method: str, path: str, *, json: Any = None, params: Optional[dict] = None) -> Any:
        response = self.http.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            headers=self._headers(),
            params=params,
        )

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            message = None
            if isinstance(body, dict):
                message = body.get("error") or body.get("detail")
            raise StorefrontClientError(response.status_code, str(message or "Request failed"))

        return body

    def _parse(self, model: Type[T], body: Any) -> T:
        try:
            return TypeAdapter(model).validate_python(body)
        except ValidationError as e:
            logger.error(f"Unexpected response shape for {model}: {body!r}")
            raise StorefrontClientError(502, f"Unexpected response: {e.error_count()} invalid field(s)")

    # -------------------------
    # auth
    # -------------------------

    def sign_up(self, email: str, password: str, username: Optional[str] = None) -> UserResponse:
        body = self._call("POST", "/auth/register", json={
            "email": email,
            "password": password,
            "confirm_password": password,
            "username": username,
        })
        return self._parse(UserResponse, body)

    def _start_session(self, token: Token) -> ProfileResponse:
        self.session.sign_in(token.access_token)
        try:
            profile = self._parse(ProfileResponse, self._call("GET", "/users/me"))
        except StorefrontClientError:
            self.session.sign_out()
            raise
        self.session.update_profile(profile)
        return profile

    def sign_in(self, email: str, password: str) -> ProfileResponse:
        body = self._call("POST", "/auth/login", json={"email": email, "password": password})
        return self._start_session(self._parse(Token, body))

    def sign_in_with_discord(self, discord_access_token: str) -> ProfileResponse:
        body = self._call("POST", "/auth/discord", json={"access_token": discord_access_token})
        return self._start_session(self._parse(Token, body))

    def sign_out(self) -> None:
        try:
            self._call("POST", "/auth/logout")
        finally:
            self.session.sign_out()

    def refresh_profile(self) -> ProfileResponse:
        profile = self._parse(ProfileResponse, self._call("GET", "/users/me"))
        self.session.update_profile(profile)
        return profile

    def update_webhook(self, url: Optional[str]) -> WebhookSettings:
        body = self._call("PUT", "/users/me/webhook", json={"discord_webhook_url": url})
        settings = self._parse(WebhookSettings, body)
        self.refresh_profile()
        return settings

    # -------------------------
    # catalog
    # -------------------------

    def list_items(
        self,
        *,
        category: Optional[str] = None,
        q: Optional[str] = None,
        sort: str = "newest",
        page: int = 1,
        limit: int = 12,
    ) -> ItemPage:
        params = {"sort": sort, "page": page, "limit": limit}
        if category:
            params["category"] = category
        if q:
            params["q"] = q
        return self._parse(ItemPage, self._call("GET", "/items", params=params))

    def get_item(self, item_id: int) -> ItemResponse:
        return self._parse(ItemResponse, self._call("GET", f"/items/{item_id}"))

    def check_access(self, item_id: int) -> ItemAccessResponse:
        return self._parse(ItemAccessResponse, self._call("GET", f"/items/{item_id}/access"))

    # -------------------------
    # engagement
    # -------------------------

    def toggle_favorite(self, item_id: int) -> FavoriteState:
        return self._parse(FavoriteState, self._call("POST", f"/favorites/{item_id}/toggle"))

    def rate(self, item_id: int, rating: int) -> RatingSummary:
        body = self._call("PUT", f"/ratings/{item_id}", json={"rating": rating})
        return self._parse(RatingSummary, body)

    # -------------------------
    # purchase & download
    # -------------------------

    def start_payment(self, item_id: int, amount: float, currency: str = "BNB") -> PaymentSessionResponse:
        body = self._call("POST", "/functions/v1/create-payment-session", json={
            "item_id": item_id,
            "amount": amount,
            "currency": currency,
        })
        return self._parse(PaymentSessionResponse, body)

    def check_payment_status(self, item_id: int) -> PaymentStatusResponse:
        return self._parse(PaymentStatusResponse, self._call("GET", f"/payments/status/{item_id}"))

    def get_download(self, item_id: int) -> DownloadUrlResponse:
        body = self._call("POST", "/functions/v1/get-download-url", json={"item_id": item_id})
        return self._parse(DownloadUrlResponse, body)

    # -------------------------
    # ads
    # -------------------------

    def list_ads(self) -> List[AdResponse]:
        ads = self._parse(List[AdResponse], self._call("GET", "/ads"))
        if self.dismissed_ads is None:
            return ads
        return self.dismissed_ads.visible(ads)

    def dismiss_ad(self, ad_id: int) -> None:
        if self.dismissed_ads is None:
            raise StorefrontClientError(400, "No dismissed ads store configured")
        self.dismissed_ads.dismiss(ad_id)
