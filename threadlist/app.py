import asyncio
import contextlib
import logging
import signal
import traceback

import discord
from discord import app_commands
from dotenv import load_dotenv

from threadlist.config.settings import Settings
from threadlist.handlers.commands import register_commands
from threadlist.handlers.event_handlers import register_handlers
from threadlist.services.aggregation import AggregationOrchestrator
from threadlist.services.discord_service import DiscordService
from threadlist.services.tracked_threads import TrackedThreadStore
from threadlist.utils.logging import configure_logging

logger = logging.getLogger(__name__)

# Global shutdown event
shutdown_event = asyncio.Event()


class ThreadListClient(discord.Client):
    """Discord client owning the slash command tree"""

    def __init__(self, settings: Settings, *, intents: discord.Intents):
        super().__init__(intents=intents)
        self.settings = settings
        self.tree = app_commands.CommandTree(self)

    async def setup_hook(self) -> None:
        if not self.settings.discord.sync_commands:
            return

        guild_id = self.settings.discord.guild_id
        if guild_id:
            guild = discord.Object(id=guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info(f"Synced {len(synced)} commands to guild {guild_id}")
        else:
            synced = await self.tree.sync()
            logger.info(f"Synced {len(synced)} global commands")


def build_intents() -> discord.Intents:
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    return intents


def create_app(settings: Settings | None = None):
    """Create the Discord client and wire the services into it"""
    settings = settings or Settings()

    client = ThreadListClient(settings, intents=build_intents())
    discord_service = DiscordService(client)
    orchestrator = AggregationOrchestrator(discord_service, settings.thread_list)

    store = None
    if settings.database.enabled:
        store = TrackedThreadStore(settings.database.url)

    register_handlers(client, discord_service, orchestrator)
    register_commands(client.tree, discord_service, orchestrator, store)

    return client, orchestrator, store


def signal_handler(signum, _):
    """Handle shutdown signals"""
    logger.info(f"Received signal {signum}, initiating graceful shutdown...")
    shutdown_event.set()


async def run():
    """Start the bot and run until a shutdown signal arrives"""
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    client = None
    store = None

    try:
        settings = Settings()
        token = settings.discord.token.get_secret_value()
        if not token:
            raise RuntimeError("DISCORD_TOKEN is not set")

        client, _orchestrator, store = create_app(settings)

        if store:
            await store.initialize()

        logger.info("Starting thread list bot...")
        client_task = asyncio.create_task(client.start(token))

        shutdown_task = asyncio.create_task(shutdown_event.wait())
        done, _ = await asyncio.wait(
            {client_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED
        )
        if client_task in done:
            # Surface login or gateway failures
            shutdown_task.cancel()
            client_task.result()
        else:
            logger.info("Shutdown signal received, cleaning up...")
            client_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await client_task

    except Exception as e:
        logger.error(f"Error in main application: {e}")
        logger.error(f"Application error traceback: {traceback.format_exc()}")
        raise
    finally:
        logger.info("Cleaning up resources...")

        if client and not client.is_closed():
            try:
                await client.close()
            except Exception as e:
                logger.error(f"Error closing Discord client: {e}")

        if store:
            try:
                await store.close()
            except Exception as e:
                logger.error(f"Error closing tracked thread store: {e}")

        logger.info("Shutdown complete")


def main():
    """Main entry point"""
    load_dotenv()
    configure_logging()
    asyncio.run(run())


if __name__ == "__main__":
    main()
