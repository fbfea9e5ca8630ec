# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 02.12.2024                    #
# ========================================= #

import discord
from discord.ext import commands
from discord import app_commands, Interaction
from services.bugreport_service import BugReportService
from utils.logging import get_logger


class BugReportCog(commands.Cog):
    def __init__(self, bot):
        self.bot = bot
        self.service = BugReportService(bot, bot.config, bot.github, bot.pending_reports)
        self.logger = get_logger(__name__)

    @app_commands.command(name="setup-bugpanel", description="Post the bug report button panel in this channel.")
    @app_commands.guild_only()
    @app_commands.default_permissions(manage_guild=True)
    async def setup_bugpanel(self, interaction: Interaction):
        await self.service.setup_panel(interaction)

    @setup_bugpanel.error
    async def setup_bugpanel_error(self, interaction: Interaction, error: app_commands.AppCommandError):
        self.logger.error(f"Error in command 'setup-bugpanel': {error}", exc_info=error)
        await self.service.send_generic_error(interaction)

    @commands.Cog.listener()
    async def on_interaction(self, interaction: discord.Interaction):
        # Buttons and the report modal are routed by custom id so they keep working after a restart
        await self.service.dispatch(interaction)

    async def cog_unload(self):
        self.service.cancel_pending_closures()


async def setup(bot):
    await bot.add_cog(BugReportCog(bot))
