# ========================================= #
# Author: Noah S. Kipp                      #
# Collaborator: Samuel Jaden Garcia Munoz   #
# Created on: 14.01.2025                    #
# ========================================= #

import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional

import discord

from utils.logging import get_logger


@dataclass
class Report:
    report_id: str
    user_id: int
    title: str
    description: str
    steps: str = ''
    expected: str = ''
    actual: str = ''
    issue_url: Optional[str] = None
    embed: Optional[discord.Embed] = None
    created_at: float = field(default_factory=time.monotonic)


class PendingReportStore:
    """Holds submitted reports until the submitter picks a follow-up.

    Entries expire after ``ttl`` seconds and the oldest entry is evicted once
    ``max_entries`` is reached, so abandoned reports do not pile up. None of
    the methods await, which makes ``pop`` an atomic take under asyncio.
    """

    def __init__(self, max_entries: int = 500, ttl: float = 3600, clock=time.monotonic):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl = ttl
        self._clock = clock
        self._reports: "OrderedDict[str, Report]" = OrderedDict()
        self.logger = get_logger(__name__)

    def __len__(self):
        self._purge_expired()
        return len(self._reports)

    def __contains__(self, report_id):
        return self.get(report_id) is not None

    def put(self, report: Report):
        self._purge_expired()
        report.created_at = self._clock()
        self._reports.pop(report.report_id, None)
        while len(self._reports) >= self.max_entries:
            evicted_id, _ = self._reports.popitem(last=False)
            self.logger.warning(f"Pending report store full, evicted {evicted_id}.")
        self._reports[report.report_id] = report

    def get(self, report_id: str) -> Optional[Report]:
        self._purge_expired()
        return self._reports.get(report_id)

    def pop(self, report_id: str) -> Optional[Report]:
        self._purge_expired()
        return self._reports.pop(report_id, None)

    def delete(self, report_id: str) -> bool:
        return self.pop(report_id) is not None

    def ids(self):
        self._purge_expired()
        return set(self._reports)

    def _purge_expired(self):
        cutoff = self._clock() - self.ttl
        # Insertion order is creation order, so stop at the first live entry
        while self._reports:
            report_id, report = next(iter(self._reports.items()))
            if report.created_at > cutoff:
                break
            del self._reports[report_id]
            self.logger.debug(f"Pending report {report_id} expired.")
