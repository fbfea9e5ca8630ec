# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 15.08.2024                    #
# ========================================= #

import discord
from utils.logging import get_logger

logger = get_logger(__name__)


async def sync_commands(bot, guild_id=None):
    # Guild syncs show up instantly, global syncs can take up to an hour
    if guild_id:
        guild = discord.Object(id=guild_id)
        bot.tree.copy_global_to(guild=guild)
        synced = await bot.tree.sync(guild=guild)
        logger.info(f"Synced {len(synced)} command(s) to guild {guild_id}.")
    else:
        synced = await bot.tree.sync()
        logger.info(f"Synced {len(synced)} command(s) globally.")
    return synced
