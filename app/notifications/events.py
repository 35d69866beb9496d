from enum import Enum


class StoreEvent(str, Enum):
    NEW_RELEASE = "new_release"
    DOWNLOAD_COMPLETED = "download_completed"
