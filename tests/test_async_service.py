import pytest

from planner.async_service import AsyncPlannerService
from planner.enums import Difficulty, PaceMode
from planner.exceptions import UserNotFound


@pytest.fixture()
def async_service(service):
    return AsyncPlannerService(service)


@pytest.mark.asyncio
async def test_async_flow(async_service, repository, today):
    user = await async_service.register_user("bo@example.com", "Bo")
    subject = await async_service.add_subject(user.id, "History")
    content, reviews = await async_service.add_content_with_reviews(
        user.id, subject.id, "Treaty of Westphalia", today, Difficulty.EASY
    )

    assert len(reviews) == 2
    assert (await async_service.next_action(user.id)).key == "all_good"

    result = await async_service.set_pace(user.id, PaceMode.FASTER)
    assert result.moved_count == 0
    assert repository.get_settings(user.id).pace_mode == PaceMode.FASTER


@pytest.mark.asyncio
async def test_async_errors_propagate(async_service):
    with pytest.raises(UserNotFound):
        await async_service.rebalance("missing")
