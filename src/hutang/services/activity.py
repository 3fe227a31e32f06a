"""Bounded, caller-owned log of recent debt activity."""

from __future__ import annotations

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Deque, Optional

from hutang.config import get_settings
from hutang.logging import get_logger
from hutang.models import Activity, ActivityType, Amount

log = get_logger(__name__)


class ActivityLog:
    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is None:
            capacity = get_settings().activity_log_size
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        # newest first; appendleft pushes the oldest out of the right end
        self._activities: Deque[Activity] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._activities.maxlen or 0

    def __len__(self) -> int:
        return len(self._activities)

    def add(
        self,
        activity_type: ActivityType,
        from_user_id: str,
        from_name: str,
        to_user_id: str,
        to_name: str,
        amount: Amount,
        description: str = "",
    ) -> Activity:
        activity = Activity(
            id=f"act-{uuid.uuid4().hex}",
            timestamp=datetime.now(timezone.utc),
            type=ActivityType(activity_type),
            from_user_id=from_user_id,
            from_name=from_name,
            to_user_id=to_user_id,
            to_name=to_name,
            amount=amount,
            description=description,
        )
        self._activities.appendleft(activity)
        log.debug("activity.add", activity_id=activity.id, type=activity.type.value)
        return activity

    def recent(self, limit: int = 10) -> list[Activity]:
        return list(self._activities)[:limit]

    def for_user(self, user_id: str, limit: int = 10) -> list[Activity]:
        matches = [a for a in self._activities if a.from_user_id == user_id or a.to_user_id == user_id]
        return matches[:limit]

    def clear(self) -> None:
        self._activities.clear()
