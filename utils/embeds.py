# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 15.08.2024                    #
# ========================================= #

import discord
from utils.formatters import truncate

BUG_COLOR = discord.Color.red()


def create_basic_embed(title: str, description: str, color: discord.Color = discord.Color.from_rgb(255, 202, 40)) -> discord.Embed:
    # Creates a basic embed with a title, description and color, clipped to Discord's limits
    embed = discord.Embed(title=truncate(title, 256), description=truncate(description, 4096), color=color)
    return embed


def create_bug_embed(report, user) -> discord.Embed:
    # Summary of a filed report, shared between the staff log and the ticket channel
    embed = create_basic_embed(f"🐛 Bug {report.report_id}: {report.title}",
                               report.description or "(no description)", BUG_COLOR)
    embed.add_field(name="Reporter", value=f"{user.mention} ({user.id})", inline=False)
    embed.add_field(name="GitHub Issue", value=report.issue_url, inline=False)

    if report.steps:
        embed.add_field(name="Steps to Reproduce", value=truncate(report.steps, 1024), inline=False)
    if report.expected:
        embed.add_field(name="Expected", value=truncate(report.expected, 1024), inline=False)
    if report.actual:
        embed.add_field(name="Actual", value=truncate(report.actual, 1024), inline=False)

    embed.timestamp = discord.utils.utcnow()
    return embed
