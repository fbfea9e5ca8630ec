# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 14.08.2024                    #
# ========================================= #

import discord
from discord import ui, ButtonStyle

OPEN_MODAL_ID = 'bug_open_modal'
MODAL_SUBMIT_ID = 'bug_modal_submit'
CHAT_START_PREFIX = 'bug_chat_start'
CHAT_DISMISS_PREFIX = 'bug_chat_dismiss'
CLOSE_TICKET_ID = 'bug_close_ticket'
ID_SEPARATOR = ':'

PANEL_MESSAGE = (
    "## 🛡️ Bug Reporting Center\n"
    "Help us improve by reporting issues you encounter. Your reports are handled privately by our staff.\n\n"
    "**How it works:**\n"
    "1. Click **Report a Bug** below.\n"
    "2. Fill out the form with as much detail as possible.\n"
    "3. After submitting, you can optionally chat with devs to provide more info."
)


def with_report_id(prefix: str, report_id: str) -> str:
    return f"{prefix}{ID_SEPARATOR}{report_id}"


def split_custom_id(custom_id: str):
    # 'bug_chat_start:BUG-1234' -> ('bug_chat_start', 'BUG-1234')
    prefix, _, suffix = custom_id.partition(ID_SEPARATOR)
    return prefix, suffix or None


# The views below only lay out components, the dispatcher routes on custom ids
class BugPanelView(ui.View):
    def __init__(self):
        super().__init__(timeout=None)
        self.add_item(ui.Button(label='Report a Bug', emoji='🐛', style=ButtonStyle.danger,
                                custom_id=OPEN_MODAL_ID))


class ReportFollowUpView(ui.View):
    def __init__(self, report_id: str):
        super().__init__(timeout=None)
        self.add_item(ui.Button(label='💬 Speak with Developers', style=ButtonStyle.primary,
                                custom_id=with_report_id(CHAT_START_PREFIX, report_id)))
        self.add_item(ui.Button(label='No thanks', style=ButtonStyle.secondary,
                                custom_id=with_report_id(CHAT_DISMISS_PREFIX, report_id)))


class TicketView(ui.View):
    def __init__(self):
        super().__init__(timeout=None)
        self.add_item(ui.Button(label='Close Ticket', emoji='🔒', style=ButtonStyle.danger,
                                custom_id=CLOSE_TICKET_ID))


class BugReportModal(ui.Modal):
    # Discord caps a modal at five inputs
    bug_title = ui.TextInput(
        label="Short title",
        style=discord.TextStyle.short,
        custom_id="title",
        required=True,
        max_length=200,
    )
    description = ui.TextInput(
        label="What happened?",
        style=discord.TextStyle.long,
        custom_id="description",
        required=True,
    )
    steps = ui.TextInput(
        label="Steps to reproduce (optional)",
        style=discord.TextStyle.long,
        custom_id="steps",
        required=False,
    )
    expected = ui.TextInput(
        label="Expected result (optional)",
        style=discord.TextStyle.long,
        custom_id="expected",
        required=False,
    )
    actual = ui.TextInput(
        label="Actual result (optional)",
        style=discord.TextStyle.long,
        custom_id="actual",
        required=False,
    )

    def __init__(self):
        super().__init__(title="Report a Bug", custom_id=MODAL_SUBMIT_ID, timeout=900)


def modal_values(data: dict) -> dict:
    """Flattens the component payload of a modal submit into {custom_id: value}."""
    values = {}
    for row in data.get('components', []):
        # Action rows carry a list, newer label wrappers a single component
        children = row.get('components') or ([row['component']] if 'component' in row else [])
        for component in children:
            custom_id = component.get('custom_id')
            if custom_id:
                values[custom_id] = component.get('value') or ''
    return values
