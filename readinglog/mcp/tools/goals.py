from datetime import date

from readinglog.mcp.client import ReadingLogClient


def _this_month(year: int | None, month: int | None) -> tuple[int, int]:
    today = date.today()
    return year or today.year, month or today.month


async def set_goal(
    client: ReadingLogClient,
    target: int,
    year: int | None = None,
    month: int | None = None,
) -> dict:
    year, month = _this_month(year, month)
    return await client.call("setReadingGoal", {"year": year, "month": month, "target": target})


async def goal_progress(client: ReadingLogClient, year: int | None = None, month: int | None = None) -> dict:
    year, month = _this_month(year, month)
    result = await client.call("getReadingGoalProgress", {"year": year, "month": month})
    if isinstance(result, dict) and not result.get("error"):
        result = {"year": year, "month": month, **result}
    return result
