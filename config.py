# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 21.04.2024                    #
# ========================================= #

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from utils.errors import ConfigError

REQUIRED_VARIABLES = (
    'DISCORD_TOKEN',
    'BUG_LOG_CHANNEL_ID',
    'TICKET_CATEGORY_ID',
    'STAFF_ROLE_ID',
    'GITHUB_TOKEN',
    'GITHUB_OWNER',
    'GITHUB_REPO',
)


@dataclass(frozen=True)
class BotConfig:
    # Discord
    discord_token: str
    bug_log_channel_id: int
    ticket_category_id: int
    staff_role_id: int
    guild_id: Optional[int] = None

    # GitHub
    github_token: str = ''
    github_owner: str = ''
    github_repo: str = ''
    github_label: str = 'bug'

    # Behaviour
    log_level: str = 'INFO'
    ticket_close_delay: float = 5.0
    report_ttl_seconds: float = 3600.0
    report_max_pending: int = 500


def _parse(environ, name, cast, default=None):
    raw = environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigError(f"Environment variable {name} must be a {cast.__name__}, got {raw!r}") from None


def load_config(environ=None, dotenv_path: Optional[str] = None) -> BotConfig:
    """Builds the bot configuration from the environment.

    A ``.env`` file is loaded first when reading the real process environment.
    Every missing required variable is reported at once.
    """
    if environ is None:
        load_dotenv(dotenv_path)
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not (environ.get(name) or '').strip()]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    return BotConfig(
        discord_token=environ['DISCORD_TOKEN'].strip(),
        bug_log_channel_id=_parse(environ, 'BUG_LOG_CHANNEL_ID', int),
        ticket_category_id=_parse(environ, 'TICKET_CATEGORY_ID', int),
        staff_role_id=_parse(environ, 'STAFF_ROLE_ID', int),
        guild_id=_parse(environ, 'DISCORD_GUILD_ID', int),
        github_token=environ['GITHUB_TOKEN'].strip(),
        github_owner=environ['GITHUB_OWNER'].strip(),
        github_repo=environ['GITHUB_REPO'].strip(),
        github_label=_parse(environ, 'GITHUB_LABEL', str, 'bug'),
        log_level=_parse(environ, 'LOG_LEVEL', str, 'INFO'),
        ticket_close_delay=_parse(environ, 'TICKET_CLOSE_DELAY', float, 5.0),
        report_ttl_seconds=_parse(environ, 'REPORT_TTL_SECONDS', float, 3600.0),
        report_max_pending=_parse(environ, 'REPORT_MAX_PENDING', int, 500),
    )
