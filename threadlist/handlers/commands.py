"""Slash commands: /opt-in, /opt-out and /list.

Each command body is a plain coroutine taking the interaction and the services
it needs; ``register_commands`` only binds them to the command tree.
"""

import logging

import discord
from discord import app_commands

from threadlist.models.discord import ChannelKind
from threadlist.services.aggregation import AggregationOrchestrator
from threadlist.services.discord_service import DiscordService
from threadlist.services.tracked_threads import TrackedThreadStore

logger = logging.getLogger(__name__)

# Discord message content limit
MAX_REPLY_LENGTH = 2000

THREAD_ONLY = "This command is only available in a thread"
CATEGORY_ONLY = "This command is only available inside a category"
TRACKING_UNAVAILABLE = "Thread tracking is not available right now"
COMMAND_FAILED = "There was an error while executing this command!"


async def reply_and_log(
    interaction: discord.Interaction,
    message: str,
    level: int = logging.INFO,
    ephemeral: bool = False,
) -> None:
    """Reply to the interaction and log the same text with guild context"""
    await interaction.response.send_message(message, ephemeral=ephemeral)
    guild = interaction.guild
    logger.log(
        level,
        f"{guild.name} ({guild.id}): {message}" if guild else message,
        extra={"guild_id": guild.id if guild else None},
    )


def _thread_of(interaction: discord.Interaction, discord_service: DiscordService):
    channel = interaction.channel
    if channel is None:
        return None
    if discord_service.to_channel_ref(channel).kind is not ChannelKind.THREAD:
        return None
    return channel


async def handle_opt_in(
    interaction: discord.Interaction,
    discord_service: DiscordService,
    store: TrackedThreadStore | None,
) -> None:
    thread = _thread_of(interaction, discord_service)
    if thread is None:
        await interaction.response.send_message(THREAD_ONLY, ephemeral=True)
        return
    if store is None:
        await interaction.response.send_message(TRACKING_UNAVAILABLE, ephemeral=True)
        return

    ref = discord_service.to_thread_ref(thread)
    last_post = (
        discord.utils.snowflake_time(thread.last_message_id)
        if thread.last_message_id
        else None
    )
    tracked = store.opt_in(
        ref.id,
        author_id=ref.owner_id,
        server_id=ref.guild_id,
        category_id=ref.category_id,
        last_post=last_post,
    )
    if not tracked:
        await reply_and_log(interaction, "This thread is already opted-in to tracking")
        return

    await interaction.response.send_message(f"{ref.mention} is now being tracked")
    logger.info(
        f"Thread {ref.name}<@{ref.id}> is now being tracked",
        extra={"guild_id": ref.guild_id, "thread_id": ref.id},
    )


async def handle_opt_out(
    interaction: discord.Interaction,
    discord_service: DiscordService,
    store: TrackedThreadStore | None,
) -> None:
    thread = _thread_of(interaction, discord_service)
    if thread is None:
        await interaction.response.send_message(THREAD_ONLY, ephemeral=True)
        return
    if store is None:
        await interaction.response.send_message(TRACKING_UNAVAILABLE, ephemeral=True)
        return

    ref = discord_service.to_thread_ref(thread)
    if not store.opt_out(ref.id):
        await reply_and_log(interaction, "This thread is not being tracked")
        return

    await interaction.response.send_message(
        f"{ref.mention} removed from thread tracking"
    )
    logger.info(
        f"Thread {ref.name}<@{ref.id}> removed from thread tracking",
        extra={"guild_id": ref.guild_id, "thread_id": ref.id},
    )


async def handle_list(
    interaction: discord.Interaction,
    discord_service: DiscordService,
    orchestrator: AggregationOrchestrator,
) -> None:
    """Reply privately with the current thread list of this channel's category"""
    channel = interaction.channel
    category_id = (
        discord_service.to_channel_ref(channel).category_id if channel else None
    )
    category = (
        await discord_service.get_category(category_id) if category_id else None
    )
    if category is None:
        await interaction.response.send_message(CATEGORY_ONLY, ephemeral=True)
        return
    if orchestrator.is_ignored(category):
        await interaction.response.send_message(
            f"Threads in {category.name} are not listed", ephemeral=True
        )
        return

    # Probing every thread can outlast the 3s interaction deadline
    await interaction.response.defer(ephemeral=True, thinking=True)
    artifact = await orchestrator.build_summary(category)
    text = artifact.to_text()
    if len(text) > MAX_REPLY_LENGTH:
        text = text[: MAX_REPLY_LENGTH - 1] + "…"
    await interaction.followup.send(text, ephemeral=True)


async def handle_command_error(
    interaction: discord.Interaction, error: app_commands.AppCommandError
) -> None:
    command = interaction.command.name if interaction.command else "unknown"
    logger.error(f"Error executing /{command}: {error}", exc_info=error)
    if interaction.response.is_done():
        await interaction.followup.send(COMMAND_FAILED, ephemeral=True)
    else:
        await interaction.response.send_message(COMMAND_FAILED, ephemeral=True)


def register_commands(
    tree: app_commands.CommandTree,
    discord_service: DiscordService,
    orchestrator: AggregationOrchestrator,
    store: TrackedThreadStore | None = None,
) -> None:
    """Bind the slash commands to the command tree"""

    @tree.command(
        name="opt-in",
        description="Opt this thread in to being tracked for recent activity",
    )
    async def opt_in(interaction: discord.Interaction):
        await handle_opt_in(interaction, discord_service, store)

    @tree.command(
        name="opt-out",
        description="Opt this thread out of being tracked for recent activity",
    )
    async def opt_out(interaction: discord.Interaction):
        await handle_opt_out(interaction, discord_service, store)

    @tree.command(name="list", description="List active threads")
    async def list_threads(interaction: discord.Interaction):
        await handle_list(interaction, discord_service, orchestrator)

    @tree.error
    async def on_command_error(
        interaction: discord.Interaction, error: app_commands.AppCommandError
    ):
        await handle_command_error(interaction, error)
