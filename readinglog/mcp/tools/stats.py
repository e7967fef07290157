from readinglog.mcp.client import ReadingLogClient


async def reading_stats(client: ReadingLogClient) -> dict:
    summary = await client.call("getCompletedBooksStats")
    if isinstance(summary, dict) and summary.get("error"):
        return summary
    detailed = await client.call("getDetailedStats")
    if isinstance(detailed, dict) and detailed.get("error"):
        return detailed
    return {
        **summary,
        "monthly": detailed["monthlyData"],
        "ratings": detailed["ratingData"],
        "top_tags": detailed["tagData"][:10],
    }
