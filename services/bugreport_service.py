# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 14.01.2025                    #
# ========================================= #

import asyncio
import functools

import discord
from discord import Interaction, InteractionType

from utils.buttons import (
    BugPanelView, BugReportModal, ReportFollowUpView, TicketView, PANEL_MESSAGE, OPEN_MODAL_ID, MODAL_SUBMIT_ID,
    CHAT_START_PREFIX, CHAT_DISMISS_PREFIX, CLOSE_TICKET_ID, split_custom_id, modal_values
)
from utils.embeds import create_bug_embed
from utils.formatters import new_report_id, format_issue_title, format_issue_body, make_channel_name
from utils.interaction_checks import can_manage_guild, is_staff
from utils.logging import get_logger
from utils.report_store import Report
from utils.retry import RetryPolicy, retry_async, is_transient_discord_error

GENERIC_ERROR = "Something went wrong. Please try again later or contact staff."
EXPIRED_MESSAGE = "That session expired. If you still need a chat, please contact staff directly."
NOT_SUBMITTER_MESSAGE = "Only the person who submitted this report can {action}."
STAFF_ONLY_MESSAGE = "❌ Only staff can close this ticket."


class BugReportService:
    """Routes bug report interactions and runs each step of the report flow.

    A report goes from the modal submit (GitHub issue created, staff log
    posted, report parked in the pending store) to either a private ticket
    channel or a plain dismissal. Both of those consume the pending entry.
    """

    def __init__(self, bot, config, github, reports, retry_policy: RetryPolicy = RetryPolicy()):
        self.bot = bot
        self.config = config
        self.github = github
        self.reports = reports
        self.retry_policy = retry_policy
        self.logger = get_logger(__name__)
        self._close_tasks = set()

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def resolve(self, interaction: Interaction):
        # Returns the handler for an interaction, or None when it is not ours
        custom_id = (interaction.data or {}).get('custom_id') or ''

        if interaction.type == InteractionType.modal_submit:
            return self.submit_report if custom_id == MODAL_SUBMIT_ID else None

        if interaction.type != InteractionType.component:
            return None

        if custom_id == OPEN_MODAL_ID:
            return self.open_report_modal
        if custom_id == CLOSE_TICKET_ID:
            return self.close_ticket

        prefix, report_id = split_custom_id(custom_id)
        if report_id is None:
            return None
        if prefix == CHAT_START_PREFIX:
            return functools.partial(self.start_chat, report_id=report_id)
        if prefix == CHAT_DISMISS_PREFIX:
            return functools.partial(self.dismiss_report, report_id=report_id)
        return None

    async def dispatch(self, interaction: Interaction) -> bool:
        handler = self.resolve(interaction)
        if handler is None:
            return False

        try:
            await handler(interaction)
        except Exception:
            self.logger.exception(f"Error handling interaction {interaction.data.get('custom_id')} "
                                  f"from {interaction.user}")
            await self.send_generic_error(interaction)
        return True

    async def send_generic_error(self, interaction: Interaction):
        try:
            if not interaction.response.is_done():
                await interaction.response.send_message(GENERIC_ERROR, ephemeral=True)
            else:
                await interaction.followup.send(GENERIC_ERROR, ephemeral=True)
        except discord.DiscordException as e:
            self.logger.debug(f"Could not send error message to {interaction.user}: {e}")

    # ------------------------------------------------------------------ #
    # Panel and modal
    # ------------------------------------------------------------------ #

    async def setup_panel(self, interaction: Interaction):
        if not await can_manage_guild(interaction):
            self.logger.warning(f"User {interaction.user} tried to post the bug panel without Manage Server.")
            return

        view = BugPanelView()
        await interaction.channel.send(PANEL_MESSAGE, view=view)
        # Clicks are routed by custom id, so the library must not keep the view alive
        view.stop()
        await interaction.response.send_message("✅ Bug panel posted.", ephemeral=True)
        self.logger.info(f"Bug panel posted in #{interaction.channel} by {interaction.user}.")

    async def open_report_modal(self, interaction: Interaction):
        await interaction.response.send_modal(BugReportModal())

    async def submit_report(self, interaction: Interaction):
        values = modal_values(interaction.data)
        report = Report(
            report_id=new_report_id(self.reports.ids()),
            user_id=interaction.user.id,
            title=values.get('title', ''),
            description=values.get('description', ''),
            steps=values.get('steps', ''),
            expected=values.get('expected', ''),
            actual=values.get('actual', ''),
        )
        self.logger.info(f"Report {report.report_id} submitted by {interaction.user}: {report.title}")

        # Creating the issue can take longer than the three seconds Discord gives us
        await interaction.response.defer(ephemeral=True, thinking=True)

        issue = await self.github.create_issue(
            format_issue_title(report.title),
            format_issue_body(report, str(interaction.user)),
            [self.config.github_label],
        )
        report.issue_url = issue['html_url']
        report.embed = create_bug_embed(report, interaction.user)

        await self.post_to_log_channel(report.embed)
        self.reports.put(report)

        view = ReportFollowUpView(report.report_id)
        await interaction.followup.send(
            "✅ **Bug Report Submitted!**\n"
            f"Your report has been logged and a GitHub issue has been created: {report.issue_url}\n\n"
            "If you have screenshots or want to speak directly with a developer to better explain the issue, "
            "click below:",
            view=view,
            ephemeral=True,
        )
        view.stop()

    async def post_to_log_channel(self, embed: discord.Embed) -> bool:
        # Best effort, a missing log channel must not break the report flow
        channel_id = self.config.bug_log_channel_id
        channel = self.bot.get_channel(channel_id)
        if channel is None:
            try:
                channel = await self.bot.fetch_channel(channel_id)
            except discord.HTTPException as e:
                self.logger.warning(f"Bug log channel {channel_id} is unavailable, skipping log post: {e}")
                return False

        try:
            await channel.send(embed=embed)
        except discord.HTTPException as e:
            self.logger.warning(f"Could not post to bug log channel {channel_id}, skipping log post: {e}")
            return False
        return True

    # ------------------------------------------------------------------ #
    # Follow-up choices
    # ------------------------------------------------------------------ #

    async def claim_report(self, interaction: Interaction, report_id: str, action: str):
        """Takes a pending report out of the store for its submitter.

        Answers the interaction and returns None when the report is gone or
        belongs to somebody else. A second click on the same button therefore
        sees an expired session.
        """
        report = self.reports.get(report_id)
        if report is None:
            self.logger.warning(f"{interaction.user} clicked on expired report {report_id}.")
            await interaction.response.send_message(EXPIRED_MESSAGE, ephemeral=True)
            return None

        if interaction.user.id != report.user_id:
            self.logger.warning(f"{interaction.user} tried to act on report {report_id} "
                                f"submitted by {report.user_id}.")
            await interaction.response.send_message(NOT_SUBMITTER_MESSAGE.format(action=action), ephemeral=True)
            return None

        return self.reports.pop(report_id)

    async def start_chat(self, interaction: Interaction, report_id: str):
        report = await self.claim_report(interaction, report_id, "open a chat")
        if report is None:
            return

        await interaction.response.defer()
        try:
            ticket = await retry_async(
                lambda: self.create_ticket_channel(interaction, report),
                self.retry_policy,
                retry_on=is_transient_discord_error,
                description=f"Ticket channel create for {report.report_id}",
            )
        except Exception:
            # Give the user another go at the button
            self.reports.put(report)
            raise

        view = TicketView()
        await ticket.send(
            f"Thanks! We've saved your report and created a GitHub issue: {report.issue_url}\n"
            "You can drop screenshots or extra details here.",
            embed=report.embed,
            view=view,
        )
        view.stop()
        await interaction.edit_original_response(
            content=f"✅ **A private chat has been opened for you here:** {ticket.mention}",
            view=None,
        )
        self.logger.info(f"Opened ticket #{ticket.name} for report {report.report_id}.")

    async def create_ticket_channel(self, interaction: Interaction, report: Report):
        guild = interaction.guild
        category = await self.get_ticket_category(guild)

        overwrites = {
            guild.default_role: discord.PermissionOverwrite(view_channel=False),
            guild.me: discord.PermissionOverwrite(
                view_channel=True, send_messages=True, read_message_history=True, embed_links=True,
                attach_files=True
            ),
            interaction.user: discord.PermissionOverwrite(
                view_channel=True, send_messages=True, read_message_history=True
            ),
        }
        staff_role = guild.get_role(self.config.staff_role_id)
        if staff_role is not None:
            overwrites[staff_role] = discord.PermissionOverwrite(
                view_channel=True, send_messages=True, read_message_history=True, manage_channels=True
            )
        else:
            self.logger.warning(f"Staff role {self.config.staff_role_id} not found in guild {guild.id}.")

        return await guild.create_text_channel(
            name=make_channel_name(report.title, report.report_id),
            category=category,
            topic=f"Report ID: {report.report_id} | User: {report.user_id}",
            overwrites=overwrites,
            reason=f"Bug report {report.report_id}",
        )

    async def get_ticket_category(self, guild: discord.Guild):
        category_id = self.config.ticket_category_id
        category = guild.get_channel(category_id)
        if category is None:
            try:
                category = await guild.fetch_channel(category_id)
            except discord.HTTPException as e:
                self.logger.warning(f"Ticket category {category_id} is unavailable: {e}")
                return None

        if not isinstance(category, discord.CategoryChannel):
            self.logger.warning(f"Channel {category_id} is not a category, creating ticket at top level.")
            return None
        return category

    async def dismiss_report(self, interaction: Interaction, report_id: str):
        report = await self.claim_report(interaction, report_id, "dismiss it")
        if report is None:
            return

        await interaction.response.edit_message(
            content=f"✅ **Report {report.report_id} is filed.** You can follow it here: {report.issue_url}\n"
                    "Thanks for helping us improve!",
            view=None,
        )
        self.logger.info(f"Report {report.report_id} closed without a chat.")

    # ------------------------------------------------------------------ #
    # Tickets
    # ------------------------------------------------------------------ #

    async def close_ticket(self, interaction: Interaction):
        if not is_staff(interaction.user, self.config.staff_role_id):
            self.logger.warning(f"Non-staff user {interaction.user} tried to close #{interaction.channel}.")
            await interaction.response.send_message(STAFF_ONLY_MESSAGE, ephemeral=True)
            return

        delay = self.config.ticket_close_delay
        await interaction.response.send_message(f"Closing ticket in {delay:g} seconds...")
        self.schedule_channel_deletion(interaction.channel, delay, closed_by=interaction.user)

    def schedule_channel_deletion(self, channel, delay: float, closed_by=None) -> asyncio.Task:
        task = asyncio.create_task(self._delete_channel_later(channel, delay, closed_by))
        self._close_tasks.add(task)
        task.add_done_callback(self._close_tasks.discard)
        return task

    async def _delete_channel_later(self, channel, delay: float, closed_by):
        await asyncio.sleep(delay)
        try:
            await channel.delete(reason=f"Ticket closed by {closed_by}")
            self.logger.info(f"Ticket #{channel} closed by {closed_by}.")
        except discord.HTTPException as e:
            self.logger.warning(f"Failed to delete ticket channel #{channel}: {e}")

    def cancel_pending_closures(self):
        for task in list(self._close_tasks):
            task.cancel()
