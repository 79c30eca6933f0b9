# ===== IMPORTS & DEPENDENCIES =====
import argparse
import asyncio
import logging
from typing import List, Optional

import aiohttp
from aiohttp import web

# --- Configuration ---
from epic_free_games.config import (
    COUNTRY_CODE, CRON_SCHEDULE, DISCORD_WEBHOOK_URL, ENABLE_CRON,
    EPIC_USE_BROWSER, LOCALE, LOG_LEVEL, PORT, TIMEZONE
)

# --- Core Components ---
from epic_free_games.core.discord_notifier import DiscordNotifier
from epic_free_games.core.pipeline import GamePipeline
from epic_free_games.core.scheduler import CronScheduler

# --- Data Sources ---
from epic_free_games.sources.epic_games import EpicGamesSource

# --- HTTP Server ---
from epic_free_games.web.server import create_app

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Command-line flags; each one defaults to its environment variable."""
    parser = argparse.ArgumentParser(description="Epic Games Store free games API")
    parser.add_argument("--port", type=int, default=PORT, help="Port for the API server to listen on")
    parser.add_argument("--discord-webhook", default=DISCORD_WEBHOOK_URL, help="Discord webhook URL for notifications")
    parser.add_argument("--country", default=COUNTRY_CODE, help="Country code for Epic Games Store")
    parser.add_argument("--locale", default=LOCALE, help="Locale for Epic Games Store")
    parser.add_argument("--timezone", default=TIMEZONE, help="Timezone for date/time formatting")
    parser.add_argument("--enable-cron", action=argparse.BooleanOptionalAction, default=ENABLE_CRON,
                        help="Enable built-in cron job to check for free games")
    parser.add_argument("--cron-schedule", default=CRON_SCHEDULE, help="Cron schedule expression for checking free games")
    parser.add_argument("--use-browser", action=argparse.BooleanOptionalAction, default=EPIC_USE_BROWSER,
                        help="Query the store from a headless browser (Playwright) instead of plain HTTP")
    return parser.parse_args(argv)


def setup_scheduler(pipeline: GamePipeline, schedule: str) -> Optional[CronScheduler]:
    """Starts the cron job, or logs why it could not be started."""
    if not pipeline.can_notify:
        logger.warning("Discord webhook URL not configured. Cron job will run but no notifications will be sent.")

    logger.info(f"Setting up cron job with schedule: {schedule}")
    try:
        scheduler = CronScheduler(schedule, pipeline.run_scheduled)
    except ValueError as e:
        logger.error(f"❌ Error setting up cron job: {e}")
        return None

    scheduler.start()
    return scheduler


# ===== INITIALIZATION & STARTUP =====
async def main(args: argparse.Namespace) -> None:
    """Builds the pipeline, starts the optional scheduler and serves the API until cancelled."""
    async with aiohttp.ClientSession() as session:
        notifier = DiscordNotifier(args.discord_webhook, session) if args.discord_webhook else None
        pipeline = GamePipeline(
            source=EpicGamesSource(session, use_browser=args.use_browser),
            notifier=notifier,
            country=args.country,
            locale=args.locale,
            timezone_name=args.timezone
        )

        scheduler = setup_scheduler(pipeline, args.cron_schedule) if args.enable_cron else None

        runner = web.AppRunner(create_app(pipeline))
        await runner.setup()
        site = web.TCPSite(runner, "0.0.0.0", args.port)
        await site.start()
        logger.info(f"🚀 Epic Games API server listening on port {args.port}...")

        try:
            await asyncio.Event().wait()
        finally:
            if scheduler:
                await scheduler.stop()
            await runner.cleanup()


def run() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    args = parse_args()
    try:
        asyncio.run(main(args))
    except KeyboardInterrupt:
        logger.info("🏁 Server stopped.")


if __name__ == "__main__":
    run()
