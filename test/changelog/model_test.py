import datetime

import dacite
import pytest

import changelog.model as cm


def test_issue_from_dict():
    issue = cm.Issue.from_dict({
        'number': 42,
        'title': 'Support for foo',
        'html_url': 'https://github.com/acme/foo/pull/42',
        'closed_at': '2020-01-15T10:00:00Z',
        'labels': [{'name': 'feature'}, {'name': 'Docs'}, {}],
        'pull_request': {'url': 'https://api.github.com/repos/acme/foo/pulls/42'},
    })

    assert issue.number == 42
    assert issue.labels == ('feature', 'Docs')
    assert issue.pull_request
    assert issue.closed_at == datetime.datetime(2020, 1, 15, 10, tzinfo=datetime.timezone.utc)
    assert issue.events is None


def test_issue_from_dict_missing_optionals():
    issue = cm.Issue.from_dict({
        'number': 1,
        'title': 'foo',
        'html_url': 'https://github.com/acme/foo/issues/1',
        'labels': None,
        'events': [{'event': 'closed'}],
    })

    assert issue.labels == ()
    assert not issue.pull_request
    assert issue.closed_at is None
    assert issue.events == (cm.IssueEvent(event='closed', commit_id=None),)


def test_release_from_dict():
    release = cm.Release.from_dict({
        'tag_name': 'v1.0',
        'published_at': '2020-01-01T00:00:00Z',
        'html_url': 'https://github.com/acme/foo/releases/tag/v1.0',
        'draft': False,
    })

    assert release.tag_name == 'v1.0'
    assert release.published_at.date() == datetime.date(2020, 1, 1)
    assert release.issues == {}
    assert not release.has_issues


def test_release_from_dict_malformed_date():
    with pytest.raises(ValueError):
        cm.Release.from_dict({
            'tag_name': 'v1.0',
            'published_at': 'yesterday-ish',
            'html_url': 'https://github.com/acme/foo/releases/tag/v1.0',
        })

    with pytest.raises(dacite.DaciteError):
        cm.Release.from_dict({
            'tag_name': 'v1.0',
            'published_at': None,
            'html_url': 'https://github.com/acme/foo/releases/tag/v1.0',
        })


def test_change_type_unknown_is_falsy():
    assert not cm.ChangeType.UNKNOWN
    assert cm.ChangeType.FIXED == 'type_fixed'


def test_issue_pool_claim(issue):
    pool = cm.IssuePool([
        issue(1, closed_at='2020-01-10'),
        issue(2, closed_at='2020-02-10'),
        issue(3, closed_at='2020-01-20'),
        issue(4, closed_at=None),
    ])
    lower_bound = datetime.datetime(2020, 1, 15, tzinfo=datetime.timezone.utc)

    claimed = pool.claim(lower_bound)
    assert [i.number for i in claimed] == [2, 3, 4]
    assert [i.number for i in pool] == [1]

    # claimed issues are gone for good
    assert pool.claim(lower_bound) == []

    claimed = pool.claim(None)
    assert [i.number for i in claimed] == [1]
    assert len(pool) == 0


def test_issue_pool_lower_bound_is_exclusive(issue):
    pool = cm.IssuePool([issue(1, closed_at='2020-01-15')])

    assert pool.claim(datetime.datetime(2020, 1, 15, tzinfo=datetime.timezone.utc)) == []
    assert len(pool) == 1
