"""
Awaitable wrapper around PlannerService.

The scheduling logic is synchronous; this facade runs each trigger in a worker
thread with ``asyncio.to_thread`` so async callers (web handlers, bots) can
await it. Calls sharing one facade share one database session and are
therefore serialized.
"""
import asyncio
from typing import Any

from planner.service import PlannerService


class AsyncPlannerService:
    """Async versions of the PlannerService operations"""

    def __init__(self, service: PlannerService):
        self._service = service
        self._lock = asyncio.Lock()

    async def _run(self, method: str, *args: Any, **kwargs: Any) -> Any:
        async with self._lock:
            return await asyncio.to_thread(getattr(self._service, method), *args, **kwargs)

    async def register_user(self, *args, **kwargs):
        return await self._run("register_user", *args, **kwargs)

    async def complete_onboarding(self, *args, **kwargs):
        return await self._run("complete_onboarding", *args, **kwargs)

    async def add_subject(self, *args, **kwargs):
        return await self._run("add_subject", *args, **kwargs)

    async def delete_subject(self, *args, **kwargs):
        return await self._run("delete_subject", *args, **kwargs)

    async def add_content_with_reviews(self, *args, **kwargs):
        return await self._run("add_content_with_reviews", *args, **kwargs)

    async def update_content(self, *args, **kwargs):
        return await self._run("update_content", *args, **kwargs)

    async def delete_content(self, *args, **kwargs):
        return await self._run("delete_content", *args, **kwargs)

    async def complete_review(self, *args, **kwargs):
        return await self._run("complete_review", *args, **kwargs)

    async def skip_review(self, *args, **kwargs):
        return await self._run("skip_review", *args, **kwargs)

    async def adjust_schedule(self, *args, **kwargs):
        return await self._run("adjust_schedule", *args, **kwargs)

    async def add_day_exception(self, *args, **kwargs):
        return await self._run("add_day_exception", *args, **kwargs)

    async def set_tomorrow_heavy(self, *args, **kwargs):
        return await self._run("set_tomorrow_heavy", *args, **kwargs)

    async def set_pace(self, *args, **kwargs):
        return await self._run("set_pace", *args, **kwargs)

    async def set_daily_limit(self, *args, **kwargs):
        return await self._run("set_daily_limit", *args, **kwargs)

    async def set_heavy_days(self, *args, **kwargs):
        return await self._run("set_heavy_days", *args, **kwargs)

    async def set_review_intervals(self, *args, **kwargs):
        return await self._run("set_review_intervals", *args, **kwargs)

    async def rebalance(self, *args, **kwargs):
        return await self._run("rebalance", *args, **kwargs)

    async def handle_overdue_recovery(self, *args, **kwargs):
        return await self._run("handle_overdue_recovery", *args, **kwargs)

    async def next_action(self, *args, **kwargs):
        return await self._run("next_action", *args, **kwargs)

    async def day_load(self, *args, **kwargs):
        return await self._run("day_load", *args, **kwargs)

    async def suggest_subjects(self, *args, **kwargs):
        return await self._run("suggest_subjects", *args, **kwargs)

    async def list_reviews(self, *args, **kwargs):
        return await self._run("list_reviews", *args, **kwargs)
