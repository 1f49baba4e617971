"""Credential pair extracted from URL userinfo."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Credentials:
    """Decoded ``user:password`` pair.

    The password never appears in ``repr`` output so the pair can sit inside
    other dataclasses without leaking into logs or tracebacks.
    """

    username: str
    password: str = field(default="", repr=False)

    def as_auth(self) -> Tuple[str, str]:
        """Return the ``(username, password)`` tuple accepted by ``requests``."""
        return (self.username, self.password)


__all__ = ["Credentials"]
