# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 14.01.2025                    #
# ========================================= #

import asyncio
from dataclasses import dataclass

import discord

from utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 8.0

    def delay_for(self, attempt: int) -> float:
        # attempt is zero based, 1s, 2s, 4s ... capped at max_delay
        return min(self.max_delay, self.base_delay * (2 ** attempt))


def is_transient_discord_error(error: BaseException) -> bool:
    return isinstance(error, discord.HTTPException) and error.status >= 500


async def retry_async(func, policy: RetryPolicy, retry_on=lambda error: False, description: str = 'call',
                      sleep=asyncio.sleep):
    """Awaits ``func()`` until it succeeds or the policy runs out of attempts.

    Only exceptions accepted by ``retry_on`` are retried, anything else is
    raised straight away. The last exception is re-raised once every attempt
    has been used.
    """
    attempt = 0
    while True:
        try:
            return await func()
        except Exception as e:
            attempt += 1
            if attempt >= policy.attempts or not retry_on(e):
                raise
            delay = policy.delay_for(attempt - 1)
            logger.warning(f"{description} failed ({e}), retrying in {delay:.1f}s "
                           f"(attempt {attempt + 1}/{policy.attempts}).")
            await sleep(delay)
