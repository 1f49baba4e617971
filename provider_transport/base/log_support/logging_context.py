"""Per-call context shared by every transport event.

One :class:`LogContext` is built per dispatch and passed to each
``log_event`` call of that dispatch, so the dispatch, response and failure
events of a request carry the same identifying fields. Only the host is
recorded for the target; the full URL may carry userinfo.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Identifying fields of one outbound call."""

    provider: Optional[str] = None
    host: Optional[str] = None
    method: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten ``extra`` into the top level and drop unset fields."""
        fields = asdict(self)
        merged = {k: v for k, v in fields.items() if k != "extra"}
        merged.update(fields["extra"])
        return {k: v for k, v in merged.items() if v is not None}


__all__ = ["LogContext"]
