from httpx import AsyncClient, Response


class ReadingLogClient:
    """Thin wrapper around httpx.AsyncClient that posts action envelopes and
    unwraps the response envelope into values suitable for MCP tool returns."""

    def __init__(self, http: AsyncClient, path: str = "/api") -> None:
        self.http = http
        self.path = path

    async def call(self, action: str, payload: dict | None = None) -> dict | list:
        resp = await self.http.post(self.path, json={"action": action, "payload": payload or {}})
        return self._handle(resp)

    def _handle(self, resp: Response) -> dict | list:
        try:
            body = resp.json()
        except ValueError:
            return {"error": True, "status": resp.status_code, "detail": resp.text}
        if not isinstance(body, dict):
            return {"error": True, "status": resp.status_code, "detail": resp.text}
        if resp.status_code >= 400 or not body.get("success"):
            return {"error": True, "status": resp.status_code, "detail": body.get("error", resp.text)}
        return body.get("data")
