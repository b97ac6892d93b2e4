import logging

from threadlist.models.discord import MessageCreated, SessionReady, ThreadCreated
from threadlist.services.aggregation import AggregationOrchestrator
from threadlist.services.discord_service import DiscordService

logger = logging.getLogger(__name__)


async def build_session_ready(discord_service: DiscordService) -> SessionReady:
    """Snapshot every known category into a session-ready event"""
    categories = await discord_service.list_categories()
    return SessionReady(categories=tuple(categories))


def build_message_created(message, discord_service: DiscordService) -> MessageCreated:
    return MessageCreated(
        channel=discord_service.to_channel_ref(message.channel),
        author_id=message.author.id if message.author else None,
    )


def build_thread_created(thread, discord_service: DiscordService) -> ThreadCreated:
    return ThreadCreated(thread=discord_service.to_thread_ref(thread))


def register_handlers(
    client, discord_service: DiscordService, orchestrator: AggregationOrchestrator
):
    """Register gateway listeners that forward triggering events to the orchestrator"""
    startup_done = False

    @client.event
    async def on_ready():
        """Refresh every category once per process, not on every reconnect"""
        nonlocal startup_done
        user = client.user
        logger.info(f"Logged in as {user} ({user.id if user else 'unknown'})")
        if startup_done:
            logger.info("Session resumed, skipping startup refresh")
            return
        startup_done = True

        try:
            event = await build_session_ready(discord_service)
        except Exception as e:
            logger.error(f"Could not list categories on startup: {e}")
            return
        logger.info(f"Refreshing {len(event.categories)} categories on startup")
        await orchestrator.handle(event)

    @client.event
    async def on_message(message):
        """Refresh the owning category when a message lands in a thread"""
        try:
            event = build_message_created(message, discord_service)
        except Exception as e:
            logger.error(f"Error reading message event: {e}")
            return
        logger.debug(
            f"Message event: channel={event.channel.id}, kind={event.channel.kind}"
        )
        await orchestrator.handle(event)

    @client.event
    async def on_thread_create(thread):
        try:
            event = build_thread_created(thread, discord_service)
        except Exception as e:
            logger.error(f"Error reading thread event: {e}")
            return
        await orchestrator.handle(event)
