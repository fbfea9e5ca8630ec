# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 14.01.2025                    #
# ========================================= #


class BugBotError(Exception):
    # Base class for errors raised by the bot itself
    pass


class ConfigError(BugBotError):
    # Raised at startup when the environment is incomplete or malformed
    pass


class GitHubError(BugBotError):
    def __init__(self, status: int, text: str):
        self.status = status
        self.text = text
        super().__init__(f"GitHub issue create failed: {status} {text}")

    @property
    def retryable(self) -> bool:
        # 429 means the request was rejected before anything was created
        return self.status == 429
