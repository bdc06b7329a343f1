"""
Session Registry
Local-mode login: any well-formed e-mail with a non-empty password gets a
bearer token that expires after SESSION_TTL_SECONDS.
"""
import re
import threading
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from loguru import logger

from config import settings

from .errors import AuthenticationError, SessionExpiredError


_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class Session:
    token: str
    email: str
    expires_at: float

    def to_api(self) -> dict:
        return {"token": self.token, "email": self.email, "expiresAt": self.expires_at}


class SessionRegistry:
    """In-memory token store shared by the request threads."""

    def __init__(self, ttl_seconds: int = None, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.SESSION_TTL_SECONDS
        self.clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def login(self, email: str, password: str) -> Session:
        email = (email or "").strip().lower()
        if not _EMAIL.match(email):
            raise AuthenticationError("A valid e-mail is required")
        if not password:
            raise AuthenticationError("Password is required")

        session = Session(
            token=uuid.uuid4().hex,
            email=email,
            expires_at=self.clock() + self.ttl_seconds,
        )
        with self._lock:
            self._sessions[session.token] = session
        logger.info(f"Login for {email}")
        return session

    def resolve(self, token: Optional[str]) -> Session:
        """Return the live session for a token, or raise."""
        if not token:
            raise AuthenticationError("Missing session token")
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                raise AuthenticationError("Unknown session token")
            if session.expires_at <= self.clock():
                logger.warning(f"Session for {session.email} expired")
                raise SessionExpiredError("Session expired, please log in again")
        return session

    def logout(self, token: str) -> bool:
        with self._lock:
            session = self._sessions.pop(token, None)
        if session:
            logger.info(f"Logout for {session.email}")
        return session is not None
