# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 14.01.2025                    #
# ========================================= #

import aiohttp

from utils.errors import GitHubError
from utils.logging import get_logger
from utils.retry import RetryPolicy, retry_async

GITHUB_API_URL = 'https://api.github.com'
GITHUB_API_VERSION = '2022-11-28'


def is_retryable(error: BaseException) -> bool:
    # Creating an issue is not idempotent, only retry when GitHub cannot have acted on the request.
    # Timeouts and dropped connections may hide an issue that was already filed.
    if isinstance(error, GitHubError):
        return error.retryable
    return isinstance(error, aiohttp.ClientConnectorError)


class GitHubService:
    def __init__(self, token: str, owner: str, repo: str, retry_policy: RetryPolicy = RetryPolicy(),
                 timeout: float = 15):
        self.token = token
        self.owner = owner
        self.repo = repo
        self.retry_policy = retry_policy
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session = None
        self.logger = get_logger(__name__)

    @property
    def issues_url(self) -> str:
        return f"{GITHUB_API_URL}/repos/{self.owner}/{self.repo}/issues"

    @property
    def headers(self) -> dict:
        return {
            'Accept': 'application/vnd.github+json',
            'Authorization': f'Bearer {self.token}',
            'X-GitHub-Api-Version': GITHUB_API_VERSION,
        }

    async def start(self):
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(headers=self.headers, timeout=self.timeout)

    async def close(self):
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    async def create_issue(self, title: str, body: str, labels) -> dict:
        """Opens an issue in the configured repository and returns GitHub's JSON.

        Rate limits and failures to connect are retried under the service's
        retry policy. Any other non-2xx response or lost response raises.
        """
        await self.start()
        payload = {'title': title, 'body': body, 'labels': list(labels)}

        issue = await retry_async(
            lambda: self._post_issue(payload),
            self.retry_policy,
            retry_on=is_retryable,
            description=f"GitHub issue create for {self.owner}/{self.repo}",
        )
        self.logger.info(f"Created GitHub issue #{issue.get('number')}: {issue.get('html_url')}")
        return issue

    async def _post_issue(self, payload: dict) -> dict:
        async with self.session.post(self.issues_url, json=payload) as response:
            if not 200 <= response.status < 300:
                text = await response.text()
                raise GitHubError(response.status, text)
            issue = await response.json()

        if not issue.get('html_url'):
            raise GitHubError(response.status, "response did not include an html_url")
        return issue
