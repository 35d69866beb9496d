from pydantic import BaseModel
from typing import Optional, List


class NewReleaseRequest(BaseModel):
    item_name: str


class WebhookResult(BaseModel):
    success: bool
    webhook: str
    error: Optional[str] = None


class NewReleaseResponse(BaseModel):
    success: bool
    message: str
    results: List[WebhookResult] = []


class DownloadThanksRequest(BaseModel):
    user_id: int
    item_name: str
    item_image_url: Optional[str] = None
    auth_provider: Optional[str] = None


class DownloadNoticeRequest(BaseModel):
    item_id: int
    user_id: int


class NotificationAck(BaseModel):
    success: bool
    message: Optional[str] = None
