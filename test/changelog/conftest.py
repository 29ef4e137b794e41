import pytest

import changelog.model as cm

from test.changelog.default_util import ts


@pytest.fixture
def release():
    def create_release(tag_name: str, published_at: str) -> cm.Release:
        return cm.Release(
            tag_name=tag_name,
            published_at=ts(published_at),
            html_url=f'https://github.com/acme/foo/releases/tag/{tag_name}',
        )
    return create_release


@pytest.fixture
def issue():
    def create_issue(
        number: int,
        closed_at: str | None='2020-01-15',
        labels: tuple[str, ...]=(),
        pull_request: bool=False,
        title: str | None=None,
        commit_id: str | None='abc',
        events: tuple[cm.IssueEvent, ...] | None=None,
    ) -> cm.Issue:
        if events is None:
            events = (cm.IssueEvent(event='closed', commit_id=commit_id),)
        return cm.Issue(
            number=number,
            title=title or f'issue {number}',
            html_url=f'https://github.com/acme/foo/issues/{number}',
            closed_at=ts(closed_at) if closed_at else None,
            labels=tuple(labels),
            pull_request=pull_request,
            events=events,
        )
    return create_issue
