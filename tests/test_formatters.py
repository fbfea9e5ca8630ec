import re

import pytest

from utils.formatters import (
    REPORT_ID_PATTERN, NOT_PROVIDED, MAX_CHANNEL_NAME_LENGTH, new_report_id, slugify, make_channel_name,
    format_issue_title, format_issue_body, truncate
)
from utils.report_store import Report

CHANNEL_NAME_RE = re.compile(r'^[a-z0-9]+(-[a-z0-9]+)*$')


def test_new_report_id_matches_format():
    for _ in range(50):
        assert REPORT_ID_PATTERN.match(new_report_id())


def test_new_report_id_skips_taken_ids():
    taken = {f'BUG-{n}' for n in range(1000, 10000) if n != 4321}
    assert new_report_id(taken) == 'BUG-4321'


@pytest.mark.parametrize('title', [
    'Login crashes',
    '  --Weird   TITLE!!--  ',
    'ÜberBug: ünïcödé',
    '!!!',
    '',
    'a' * 300,
    'x-' * 80,
    'Crash when tapping "Save" (v2.1.0) -> app freezes',
])
def test_channel_names_are_safe(title):
    name = make_channel_name(title, 'BUG-1234')
    assert CHANNEL_NAME_RE.match(name), name
    assert '--' not in name
    assert len(name) <= MAX_CHANNEL_NAME_LENGTH
    assert name.startswith('bug-')
    assert name.endswith('bug-1234')


def test_channel_name_from_title():
    assert make_channel_name('Login crashes', 'BUG-1234') == 'bug-login-crashes-bug-1234'


def test_slugify_falls_back_when_empty():
    assert slugify('???') == 'bug'
    assert slugify('Hello, World') == 'hello-world'


def test_slugify_does_not_end_on_hyphen_after_truncation():
    slug = slugify('abcd efgh', max_length=5)
    assert slug == 'abcd'


def test_issue_title():
    assert format_issue_title('Login crashes') == '[Bug] Login crashes'


def test_issue_body_substitutes_missing_sections():
    report = Report(report_id='BUG-1234', user_id=42, title='t', description='App crashes on login',
                    steps='open app, tap login', expected='', actual='Crash screen')
    body = format_issue_body(report, 'tester')

    assert body.startswith('**Report ID:** BUG-1234\n**Reporter:** tester (42)\n\n')
    for header in ('## What happened?', '## Steps to reproduce', '## Expected', '## Actual'):
        assert header in body
    assert f'## Expected\n{NOT_PROVIDED}\n' in body
    assert '## Steps to reproduce\nopen app, tap login\n' in body
    assert '## Actual\nCrash screen\n' in body


def test_issue_body_with_all_optional_sections_empty():
    report = Report(report_id='BUG-1000', user_id=1, title='t', description='d')
    assert format_issue_body(report, 'someone').count(NOT_PROVIDED) == 3


def test_truncate():
    assert truncate('abc', 5) == 'abc'
    assert truncate('abcdef', 4) == 'abcd'
