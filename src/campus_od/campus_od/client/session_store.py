from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..core.exceptions import DomainError
from ..users.model import Account, account_from_dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredSession:
    token: str
    user: Account


class SessionStore:
    """Keeps the signed-in user and token in a small JSON file between runs."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def save(self, token: str, user: Account) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps({"token": token, "user": user.to_dict()}), encoding="utf-8")
        os.replace(tmp, self._path)

    def load(self) -> Optional[StoredSession]:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            token = data["token"]
            if not isinstance(token, str) or not token:
                raise ValueError("empty token")
            return StoredSession(token=token, user=account_from_dict(data["user"]))
        except (ValueError, KeyError, TypeError, DomainError) as e:
            # unreadable data counts as signed out
            logger.warning("ignoring stored session at %s: %s", self._path, e)
            return None

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
