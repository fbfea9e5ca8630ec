# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 14.01.2025                    #
# ========================================= #

# One-shot registration of the slash commands, run after changing them:
#   python deploy_commands.py

import asyncio
import logging
import sys

from config import load_config
from main import BugBot
from utils.errors import ConfigError
from utils.logging import setup_logging
from utils.sync_utils import sync_commands


async def deploy():
    try:
        config = load_config()
    except ConfigError as e:
        setup_logging()
        logging.error(str(e))
        sys.exit(1)

    setup_logging(config.log_level)
    if not config.guild_id:
        logging.warning("DISCORD_GUILD_ID is not set, commands will be registered globally.")

    bot = BugBot(config, sync_on_startup=False)
    async with bot:
        # login() runs setup_hook, which loads the cogs and their commands
        await bot.login(config.discord_token)
        synced = await sync_commands(bot, config.guild_id)
        logging.info(f"✅ Deployed {', '.join('/' + command.name for command in synced)}")


if __name__ == '__main__':
    asyncio.run(deploy())
