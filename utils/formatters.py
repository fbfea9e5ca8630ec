# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 15.08.2024                    #
# ========================================= #

import random
import re

REPORT_ID_PREFIX = 'BUG'
REPORT_ID_PATTERN = re.compile(r'^BUG-\d{4}$')
NOT_PROVIDED = '(not provided)'

# Discord allows 100 characters, we stay well below that
MAX_SLUG_LENGTH = 60
MAX_CHANNEL_NAME_LENGTH = 90


def new_report_id(taken=()) -> str:
    # Generates a short report id that is not already in use
    while True:
        report_id = f"{REPORT_ID_PREFIX}-{random.randint(1000, 9999)}"
        if report_id not in taken:
            return report_id


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit]


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH, fallback: str = 'bug') -> str:
    # Lowercase alphanumerics separated by single hyphens, never starting or ending with one
    slug = re.sub(r'[^a-z0-9]+', '-', text.lower()).strip('-')
    slug = slug[:max_length].strip('-')
    return slug or fallback


def make_channel_name(title: str, report_id: str) -> str:
    name = f"bug-{slugify(title)}-{report_id.lower()}"
    name = re.sub(r'-+', '-', name)
    return name[:MAX_CHANNEL_NAME_LENGTH].strip('-')


def format_issue_title(title: str) -> str:
    return f"[Bug] {title}"


def format_issue_body(report, reporter_tag: str) -> str:
    """Renders the markdown body of the GitHub issue for a report.

    Every section header is always present, empty optional sections are
    filled with a placeholder so triagers can tell they were left blank.
    """
    return (
        f"**Report ID:** {report.report_id}\n"
        f"**Reporter:** {reporter_tag} ({report.user_id})\n\n"
        f"## What happened?\n{report.description}\n\n"
        f"## Steps to reproduce\n{report.steps or NOT_PROVIDED}\n\n"
        f"## Expected\n{report.expected or NOT_PROVIDED}\n\n"
        f"## Actual\n{report.actual or NOT_PROVIDED}\n"
    )
