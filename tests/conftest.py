import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

# The bot uses a flat layout, make the repository root importable
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from config import BotConfig  # noqa: E402
from services.bugreport_service import BugReportService  # noqa: E402
from utils.report_store import PendingReportStore  # noqa: E402
from utils.retry import RetryPolicy  # noqa: E402

STAFF_ROLE_ID = 5555
LOG_CHANNEL_ID = 7777
CATEGORY_ID = 8888
SUBMITTER_ID = 1001


class FakeGitHub:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    async def create_issue(self, title, body, labels):
        self.calls.append({'title': title, 'body': body, 'labels': list(labels)})
        if self.error is not None:
            raise self.error
        number = len(self.calls)
        return {'number': number, 'html_url': f'https://github.com/acme/app/issues/{number}'}


def make_member(user_id=SUBMITTER_ID, name='tester', role_ids=()):
    member = MagicMock(spec=discord.Member)
    member.id = user_id
    member.mention = f'<@{user_id}>'
    member.__str__.return_value = name
    roles = []
    for role_id in role_ids:
        role = MagicMock(spec=discord.Role)
        role.id = role_id
        roles.append(role)
    member.roles = roles
    return member


def make_guild():
    guild = MagicMock(spec=discord.Guild)
    guild.id = 4242
    guild.default_role = MagicMock(name='everyone')
    guild.me = MagicMock(name='bot_member')

    staff_role = MagicMock(spec=discord.Role)
    staff_role.id = STAFF_ROLE_ID
    guild.get_role.side_effect = lambda role_id: staff_role if role_id == STAFF_ROLE_ID else None

    category = MagicMock(spec=discord.CategoryChannel)
    category.id = CATEGORY_ID
    guild.get_channel.side_effect = lambda channel_id: category if channel_id == CATEGORY_ID else None
    guild.fetch_channel = AsyncMock()

    ticket = MagicMock(spec=discord.TextChannel)
    ticket.name = 'bug-ticket'
    ticket.mention = '<#9999>'
    ticket.send = AsyncMock()
    guild.create_text_channel = AsyncMock(return_value=ticket)

    guild.staff_role = staff_role
    guild.category = category
    guild.ticket = ticket
    return guild


def make_interaction(interaction_type=discord.InteractionType.component, custom_id=None, user=None,
                     data=None, guild=None, done=False):
    interaction = MagicMock()
    interaction.type = interaction_type
    interaction.data = data if data is not None else {'custom_id': custom_id}
    interaction.user = user or make_member()
    interaction.guild = guild or make_guild()
    interaction.guild_id = interaction.guild.id
    interaction.permissions = discord.Permissions.none()

    interaction.response.is_done = MagicMock(return_value=done)
    interaction.response.send_message = AsyncMock()
    interaction.response.send_modal = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.response.edit_message = AsyncMock()
    interaction.followup.send = AsyncMock()
    interaction.edit_original_response = AsyncMock()

    interaction.channel.send = AsyncMock()
    interaction.channel.delete = AsyncMock()
    return interaction


def modal_data(**values):
    return {
        'custom_id': 'bug_modal_submit',
        'components': [
            {'type': 1, 'components': [{'type': 4, 'custom_id': key, 'value': value}]}
            for key, value in values.items()
        ],
    }


@pytest.fixture
def config():
    return BotConfig(
        discord_token='token',
        bug_log_channel_id=LOG_CHANNEL_ID,
        ticket_category_id=CATEGORY_ID,
        staff_role_id=STAFF_ROLE_ID,
        github_token='gh-token',
        github_owner='acme',
        github_repo='app',
        ticket_close_delay=0,
    )


@pytest.fixture
def log_channel():
    channel = MagicMock(spec=discord.TextChannel)
    channel.send = AsyncMock()
    return channel


@pytest.fixture
def bot(log_channel):
    bot = MagicMock()
    bot.get_channel.side_effect = lambda channel_id: log_channel if channel_id == LOG_CHANNEL_ID else None
    bot.fetch_channel = AsyncMock()
    return bot


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def store():
    return PendingReportStore(max_entries=10, ttl=600)


@pytest.fixture
def service(bot, config, github, store):
    return BugReportService(bot, config, github, store, retry_policy=RetryPolicy(attempts=2, base_delay=0))
