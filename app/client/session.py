import logging
from enum import Enum
from typing import Callable, Dict, Optional

from pydantic import BaseModel

from app.schemas.user_schemas import ProfileResponse

logger = logging.getLogger(__name__)


class SessionEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    PROFILE_UPDATED = "PROFILE_UPDATED"


class SessionState(BaseModel):
    access_token: Optional[str] = None
    profile: Optional[ProfileResponse] = None

    @property
    def signed_in(self) -> bool:
        return self.access_token is not None


Listener = Callable[[SessionEvent, SessionState], None]


class SessionContext:
    """
    Observable holder for the signed-in identity.

    Listeners are called synchronously, in subscription order, after every
    change. A failing listener is logged and does not stop the others.
    """

    def __init__(self):
        self._state = SessionState()
        self._listeners: Dict[int, Listener] = {}
        self._next_id = 0
        self._open = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def access_token(self) -> Optional[str]:
        return self._state.access_token

    @property
    def profile(self) -> Optional[ProfileResponse]:
        return self._state.profile

    @property
    def is_open(self) -> bool:
        return self._open

    def start(self) -> "SessionContext":
        self._open = True
        return self

    def close(self) -> None:
        self._listeners.clear()
        self._open = False

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        listener_id = self._next_id
        self._next_id += 1
        self._listeners[listener_id] = listener

        def unsubscribe():
            self._listeners.pop(listener_id, None)

        return unsubscribe

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners.values()):
            try:
                listener(event, self._state)
            except Exception:
                logger.exception("Session listener failed on %s", event.value)

    # mutated only by StorefrontClient auth calls

    def sign_in(self, access_token: str, profile: Optional[ProfileResponse] = None) -> None:
        self._state = SessionState(access_token=access_token, profile=profile)
        self._emit(SessionEvent.SIGNED_IN)

    def update_profile(self, profile: ProfileResponse) -> None:
        self._state = SessionState(access_token=self._state.access_token, profile=profile)
        self._emit(SessionEvent.PROFILE_UPDATED)

    def sign_out(self) -> None:
        self._state = SessionState()
        self._emit(SessionEvent.SIGNED_OUT)

    def __enter__(self):
        return self.start()

    def __exit__(self, *exc):
        self.close()
