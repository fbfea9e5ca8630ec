# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 15.08.2024                    #
# ========================================= #

import logging

NOISY_LOGGERS = ('discord.http', 'discord.gateway')


def setup_logging(log_level=logging.INFO):
    # Sets up logging for the bot with the specified log level
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=log_level
    )

    # discord.py is chatty about every request and heartbeat
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logging.info(f"Logging is set up at level {logging.getLevelName(log_level)}.")


def get_logger(name: str) -> logging.Logger:
    # Retrieves a logger by name
    return logging.getLogger(name)
