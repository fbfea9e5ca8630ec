# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 15.08.2024                    #
# ========================================= #

import discord
import logging
from discord import Interaction


def has_manage_guild(interaction: Interaction) -> bool:
    # Checks if the invoking member may manage the server
    permissions = interaction.permissions
    if permissions is None:
        return False
    return permissions.manage_guild or permissions.administrator


async def can_manage_guild(interaction: Interaction) -> bool:
    # Replies privately and returns False when the member lacks Manage Server
    if has_manage_guild(interaction):
        return True

    logging.debug(f'Manage Server check failed for {interaction.user} in guild {interaction.guild_id}')
    await interaction.response.send_message("You need **Manage Server** to run this.", ephemeral=True)
    return False


def is_staff(member, staff_role_id: int) -> bool:
    # Checks if a member holds the configured staff role
    if not isinstance(member, discord.Member):
        return False
    return any(role.id == staff_role_id for role in member.roles)
