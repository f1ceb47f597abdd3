"""
Dashboard Session
=================

Who is logged in on this machine: email, role and bearer token.

The session is an explicit object. It is loaded once, passed to whatever
needs it, saved after login and cleared on logout or when the API says the
token is no longer good. The store persists it as JSON so the dashboard
survives restarts.

Author: EnergiSense Team
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from energisense.models import Role

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """One logged-in identity."""
    email: str
    role: Role
    token: str

    @property
    def auth_header(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


class SessionStore:
    """
    Keeps a Session in a JSON file.

    HOW TO USE:
    ----------
    store = SessionStore(Path("~/.energisense/session.json").expanduser())

    session = store.load()      # None if nobody is logged in
    store.save(session)         # after login
    store.clear()               # on logout / expired token
    """

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()


    def load(self) -> Optional[Session]:
        """Read the saved session, or None if there isn't a usable one."""
        if not self.path.exists():
            return None

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return Session.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None


    def save(self, session: Session):
        """Write the session (atomic write)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write to temp file first, then rename
        temp_file = self.path.with_suffix('.json.tmp')
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(session.model_dump(mode="json"), f, indent=2)
        temp_file.replace(self.path)
        logger.debug(f"Saved session for {session.email}")


    def clear(self):
        """Forget the session."""
        self.path.unlink(missing_ok=True)
