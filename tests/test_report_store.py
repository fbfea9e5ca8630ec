import pytest

from utils.report_store import PendingReportStore, Report


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def make_report(report_id, user_id=1):
    return Report(report_id=report_id, user_id=user_id, title='title', description='description')


def test_put_get_and_pop():
    store = PendingReportStore()
    report = make_report('BUG-1111')
    store.put(report)

    assert store.get('BUG-1111') is report
    assert 'BUG-1111' in store
    assert store.pop('BUG-1111') is report
    assert store.pop('BUG-1111') is None
    assert len(store) == 0


def test_delete_reports_whether_something_was_removed():
    store = PendingReportStore()
    store.put(make_report('BUG-1111'))
    assert store.delete('BUG-1111') is True
    assert store.delete('BUG-1111') is False


def test_entries_expire_after_ttl():
    clock = FakeClock()
    store = PendingReportStore(ttl=60, clock=clock)
    store.put(make_report('BUG-1111'))

    clock.now += 59
    store.put(make_report('BUG-2222'))
    assert store.get('BUG-1111') is not None

    clock.now += 1
    assert store.get('BUG-1111') is None
    assert store.get('BUG-2222') is not None
    assert store.ids() == {'BUG-2222'}


def test_oldest_entry_is_evicted_at_capacity():
    store = PendingReportStore(max_entries=2)
    for report_id in ('BUG-1111', 'BUG-2222', 'BUG-3333'):
        store.put(make_report(report_id))

    assert len(store) == 2
    assert 'BUG-1111' not in store
    assert store.ids() == {'BUG-2222', 'BUG-3333'}


def test_putting_again_refreshes_the_entry():
    clock = FakeClock()
    store = PendingReportStore(ttl=60, clock=clock)
    report = make_report('BUG-1111')
    store.put(report)

    clock.now += 50
    store.pop('BUG-1111')
    store.put(report)

    clock.now += 50
    assert store.get('BUG-1111') is report


def test_rejects_zero_capacity():
    with pytest.raises(ValueError):
        PendingReportStore(max_entries=0)
