import collections.abc
import dataclasses
import datetime
import enum
import typing

import dacite
import dateutil.parser


class NoReleasesFound(RuntimeError):
    pass


class ChangeType(enum.StrEnum):
    ADDED = 'type_added'
    CHANGED = 'type_changed'
    DEPRECATED = 'type_deprecated'
    REMOVED = 'type_removed'
    FIXED = 'type_fixed'
    SECURITY = 'type_security'
    PULL_REQUEST = 'type_pr'
    UNKNOWN = ''


def _parse_datetime_if_present(date: str | datetime.datetime | None):
    if not date:
        return None
    if isinstance(date, datetime.datetime):
        return date
    return dateutil.parser.isoparse(date)


_dacite_cfg = dacite.Config(
    type_hooks={
        datetime.datetime: _parse_datetime_if_present,
    },
)


@dataclasses.dataclass(frozen=True)
class IssueEvent:
    event: str
    commit_id: str | None = None

    @staticmethod
    def from_dict(raw: dict):
        return dacite.from_dict(
            data_class=IssueEvent,
            data={
                'event': raw.get('event') or '',
                'commit_id': raw.get('commit_id'),
            },
            config=_dacite_cfg,
        )


@dataclasses.dataclass(frozen=True)
class Issue:
    '''
    a closed issue (or pull-request, which the hosting-API lists as issues, too)

    `events` is `None` if lifecycle-events were not retrieved, yet; in this case, they are
    looked-up lazily (and only for issues that turn out to be relevant).
    '''
    number: int
    title: str
    html_url: str
    closed_at: datetime.datetime | None = None
    labels: tuple[str, ...] = ()
    pull_request: bool = False
    events: tuple[IssueEvent, ...] | None = None

    @staticmethod
    def from_dict(raw: dict):
        '''
        creates an issue from a raw issue-document as returned by GitHub's REST-API. label-objects
        are reduced to their names, presence of `pull_request` marks pull-requests.
        '''
        labels = tuple(
            label.get('name', '') if isinstance(label, dict) else label
            for label in raw.get('labels') or ()
        )
        if (events := raw.get('events')) is not None:
            events = tuple(IssueEvent.from_dict(event) for event in events)

        return dacite.from_dict(
            data_class=Issue,
            data={
                'number': raw['number'],
                'title': raw['title'],
                'html_url': raw['html_url'],
                'closed_at': raw.get('closed_at'),
                'labels': tuple(l for l in labels if l),
                'pull_request': bool(raw.get('pull_request')),
                'events': events,
            },
            config=_dacite_cfg,
        )


@dataclasses.dataclass
class Release:
    tag_name: str
    published_at: datetime.datetime
    html_url: str
    # change-type -> issues; filled by changelog.classify
    issues: dict[str, list[Issue]] = dataclasses.field(default_factory=dict)

    @staticmethod
    def from_dict(raw: dict):
        return dacite.from_dict(
            data_class=Release,
            data={
                'tag_name': raw['tag_name'],
                'published_at': raw['published_at'],
                'html_url': raw['html_url'],
            },
            config=_dacite_cfg,
        )

    @property
    def has_issues(self) -> bool:
        return any(self.issues.values())


class IssuePool:
    '''
    the closed issues of one changelog-generation, each of which may be claimed exactly once.

    the pool is meant to be passed through the classification of all releases, starting with the
    most recent one. Issues claimed for a release are removed, so they will not be attributed to
    any older release.
    '''
    def __init__(self, issues: collections.abc.Iterable[Issue]=()):
        self._issues: list[Issue] = list(issues)

    def claim(
        self,
        lower_bound: datetime.datetime | None,
    ) -> list[Issue]:
        '''
        removes and returns all issues closed after `lower_bound` (exclusive), retaining their
        order. If `lower_bound` is `None`, all remaining issues are claimed. Issues lacking a
        closing-date are regarded as closed just now, i.e. they are claimed by the first call.
        '''
        if lower_bound is None:
            claimed, self._issues = self._issues, []
            return claimed

        claimed = []
        remaining = []
        for issue in self._issues:
            if not issue.closed_at or issue.closed_at > lower_bound:
                claimed.append(issue)
            else:
                remaining.append(issue)

        self._issues = remaining
        return claimed

    def __len__(self):
        return len(self._issues)

    def __iter__(self):
        return iter(self._issues)


class ReleaseSource(typing.Protocol):
    '''
    the hosting-service the changelog is generated from. Transport, pagination and authentication
    are up to implementations (see changelog.github).
    '''
    def releases(self) -> collections.abc.Iterable[Release]:
        '''
        all releases, most recent first
        '''
        ...

    def closed_issues(self) -> collections.abc.Iterable[Issue]:
        ...

    def issue_events(self, issue_number: int) -> collections.abc.Iterable[IssueEvent]:
        ...
