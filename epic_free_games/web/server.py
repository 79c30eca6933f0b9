# ===== IMPORTS & DEPENDENCIES =====
import functools
import json
import logging
from typing import Any, Dict, Optional

from aiohttp import web

from epic_free_games.config import parse_bool
from epic_free_games.core.base_client import EpicFreeGamesError
from epic_free_games.core.pipeline import GamePipeline

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

PIPELINE_KEY = web.AppKey("pipeline", GamePipeline)

_dumps = functools.partial(json.dumps, indent=2, ensure_ascii=False)

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Epic Games Free Games API</title>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; margin: 0 auto; max-width: 800px; padding: 20px; }
        h1 { color: #0078f2; }
        pre { background-color: #f5f5f5; border-radius: 5px; padding: 15px; overflow-x: auto; }
        code { font-family: monospace; }
    </style>
</head>
<body>
    <h1>Epic Games Free Games API</h1>
    <p>Use this API to get information about free games available on the Epic Games Store.</p>

    <h2>Endpoints</h2>
    <h3>GET /api/free-games</h3>
    <p>Returns all free games currently available and upcoming free games.</p>

    <h4>Query Parameters</h4>
    <ul>
        <li><code>upcoming</code> - Include upcoming free games (true/false, default: true)</li>
        <li><code>notify</code> - Also send a Discord notification (true/false, default: true when a webhook is configured)</li>
        <li><code>country</code> - Country code for the store (default: PH)</li>
        <li><code>locale</code> - Locale for text formatting (default: en-PH)</li>
        <li><code>timezone</code> - Timezone for dates (default: Asia/Manila). Use standard IANA timezone names like "America/New_York", "Europe/London", or UTC offsets like "UTC+1"</li>
    </ul>

    <h4>Example Request</h4>
    <pre><code>GET /api/free-games?upcoming=false&amp;timezone=America/New_York</code></pre>

    <h4>Example Response</h4>
    <pre><code>{
  "success": true,
  "count": 1,
  "data": [
    {
      "title": "Game Title",
      "description": "Game description",
      "image_url": "https://example.com/image.jpg",
      "url": "https://store.epicgames.com/en-US/p/game-slug",
      "status": "free",
      "start_date": "2025-04-04 15:00:00 PST",
      "end_date": "2025-04-11 15:00:00 PST",
      "date_precision": "exact",
      "publisher": "Publisher Name"
    }
  ]
}</code></pre>

    <h3>GET /notify</h3>
    <p>Fetches the current and upcoming free games and posts them to the configured Discord webhook.</p>

    <h4>Date Fields</h4>
    <p>The <code>start_date</code> and <code>end_date</code> fields show when a game is or will be available for free. Times are displayed in the requested timezone, or in UTC+8 when the timezone cannot be recognized.</p>

    <h4>Date Precision Field</h4>
    <p>The <code>date_precision</code> field indicates how accurate the start and end dates are:</p>
    <ul>
        <li><strong>exact</strong>: Dates are directly from Epic Games' API</li>
        <li><strong>estimated</strong>: Dates are estimated based on typical free game periods</li>
        <li><strong>unknown</strong>: Unable to determine accurate dates</li>
    </ul>
</body>
</html>
"""


# ===== UTILITY FUNCTIONS =====
def _query_bool(request: web.Request, name: str) -> Optional[bool]:
    """Returns the parsed boolean query parameter, or None when absent or unparseable."""
    value = request.query.get(name)
    if not value:
        return None
    try:
        return parse_bool(value)
    except ValueError:
        return None


def _api_response(success: bool, data: Any, message: str = "", status: int = 200) -> web.Response:
    body: Dict[str, Any] = {"success": success}
    if message:
        body["message"] = message
    body["count"] = len(data) if data else 0
    body["data"] = data
    response = web.json_response(body, status=status, dumps=_dumps)
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


# ===== ROUTE HANDLERS =====
async def index_handler(request: web.Request) -> web.Response:
    return web.Response(text=INDEX_HTML, content_type="text/html", charset="utf-8")


async def free_games_handler(request: web.Request) -> web.Response:
    """GET /api/free-games: fetches, normalizes and optionally notifies."""
    pipeline = request.app[PIPELINE_KEY]

    upcoming = _query_bool(request, "upcoming")
    include_upcoming = True if upcoming is None else upcoming

    if "notify" in request.query and request.query["notify"]:
        notify = _query_bool(request, "notify")
        send_notification = bool(notify) and pipeline.can_notify
    else:
        send_notification = pipeline.can_notify

    try:
        games = await pipeline.fetch_games(
            include_upcoming=include_upcoming,
            country=request.query.get("country") or None,
            locale=request.query.get("locale") or None,
            timezone_name=request.query.get("timezone") or None
        )
    except EpicFreeGamesError as e:
        logger.error(f"❌ [free_games_handler] Error fetching games: {e}")
        return _api_response(False, None, message=f"Error fetching games: {e}", status=500)

    if send_notification:
        await pipeline.notify_quietly(games)

    return _api_response(True, games)


async def notify_handler(request: web.Request) -> web.Response:
    """GET|POST /notify: fetches with upcoming games included and posts them to Discord."""
    pipeline = request.app[PIPELINE_KEY]
    if not pipeline.can_notify:
        return web.Response(status=500, text="Discord webhook URL not configured")

    try:
        games = await pipeline.fetch_games(include_upcoming=True)
    except EpicFreeGamesError as e:
        return web.Response(status=500, text=f"Error fetching games: {e}")

    try:
        await pipeline.notify(games)
    except EpicFreeGamesError as e:
        return web.Response(status=500, text=f"Error sending Discord notification: {e}")

    return web.json_response(
        {"success": True, "message": f"Notification sent for {len(games)} games"},
        dumps=_dumps
    )


# ===== INITIALIZATION & STARTUP =====
def create_app(pipeline: GamePipeline) -> web.Application:
    app = web.Application()
    app[PIPELINE_KEY] = pipeline
    app.router.add_get("/", index_handler)
    app.router.add_get("/api/free-games", free_games_handler)
    app.router.add_route("*", "/notify", notify_handler)
    return app
