# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 21.04.2024                    #
# ========================================= #

import asyncio
import logging
import sys

import discord
from discord.ext import commands

from config import BotConfig, load_config
from services.github_service import GitHubService
from utils.errors import ConfigError
from utils.logging import setup_logging, get_logger
from utils.report_store import PendingReportStore
from utils.sync_utils import sync_commands

EXTENSIONS = [
    'cogs.bugreport',
]


class BugBot(commands.Bot):
    def __init__(self, config: BotConfig, sync_on_startup: bool = True, **kwargs):
        intents = discord.Intents.default()
        super().__init__(command_prefix=commands.when_mentioned, intents=intents, **kwargs)
        self.config = config
        self.sync_on_startup = sync_on_startup
        self.logger = get_logger(__name__)
        self.github = GitHubService(config.github_token, config.github_owner, config.github_repo)
        self.pending_reports = PendingReportStore(
            max_entries=config.report_max_pending,
            ttl=config.report_ttl_seconds,
        )

    async def setup_hook(self):
        await self.github.start()

        for extension in EXTENSIONS:
            await self.load_extension(extension)

        if self.sync_on_startup and self.config.guild_id:
            await sync_commands(self, self.config.guild_id)

    async def close(self):
        await self.github.close()
        await super().close()

    async def on_ready(self):
        self.logger.info(f'Logged in as {self.user} and ready!')


async def main():
    try:
        config = load_config()
    except ConfigError as e:
        setup_logging()
        logging.error(str(e))
        sys.exit(1)

    setup_logging(config.log_level)
    bot = BugBot(config)
    async with bot:
        await bot.start(config.discord_token)


def run():
    asyncio.run(main())


if __name__ == '__main__':
    run()
