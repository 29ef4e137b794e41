import collections
import collections.abc
import datetime
import logging

import changelog.model as cm

logger = logging.getLogger(__name__)


# events indicating an issue was resolved by (or at least linked to) a commit
SUPPORTED_EVENTS = frozenset((
    'merged',
    'referenced',
    'closed',
    'reopened',
))

IssueEventsLookup = collections.abc.Callable[[int], collections.abc.Iterable[cm.IssueEvent]]
LabelMapping = collections.abc.Mapping[str, collections.abc.Sequence[str]]


def determine_change_type(
    issue: cm.Issue,
    label_mapping: LabelMapping,
) -> str:
    '''
    determines the change-type of the given issue from its labels.

    change-types are checked in order of `label_mapping`, the first one having a label matching
    (case-insensitively) one of the issue's labels wins. Unlabeled pull-requests are categorised
    as `ChangeType.PULL_REQUEST`. If no change-type can be determined, `ChangeType.UNKNOWN` is
    returned (which is falsy).
    '''
    issue_labels = [label.lower() for label in issue.labels]

    for change_type, type_labels in label_mapping.items():
        if isinstance(type_labels, str):
            type_labels = (type_labels,)
        for type_label in type_labels:
            if type_label.lower() in issue_labels:
                return change_type

    if issue.pull_request:
        return cm.ChangeType.PULL_REQUEST

    return cm.ChangeType.UNKNOWN


def references_commit(events: collections.abc.Iterable[cm.IssueEvent]) -> bool:
    for event in events:
        if event.event in SUPPORTED_EVENTS and event.commit_id:
            return True
    return False


def _bucket_order(label_mapping: LabelMapping) -> list[str]:
    order = list(label_mapping.keys())
    if cm.ChangeType.PULL_REQUEST not in order:
        order.append(cm.ChangeType.PULL_REQUEST)
    return order


def collect_issues(
    pool: cm.IssuePool,
    lower_bound: datetime.datetime | None,
    label_mapping: LabelMapping,
    issue_events: IssueEventsLookup,
) -> dict[str, list[cm.Issue]]:
    '''
    claims all issues from `pool` closed after `lower_bound` and groups them by change-type.

    claimed issues are removed from the pool, regardless of whether they end up in the returned
    mapping. Issues of unknown change-type, and issues none of whose lifecycle-events refer to a
    commit, are dropped. Events are taken from the issue if present, else retrieved using
    `issue_events`.

    the returned mapping is ordered by `label_mapping`, followed by pull-requests. It contains
    only non-empty lists.
    '''
    claimed = pool.claim(lower_bound)
    logger.debug(f'claimed {len(claimed)} issues closed after {lower_bound=}')

    issues_by_type: dict[str, list[cm.Issue]] = collections.defaultdict(list)

    for issue in claimed:
        change_type = determine_change_type(
            issue=issue,
            label_mapping=label_mapping,
        )
        if not change_type:
            logger.debug(f'#{issue.number}: could not determine change-type - skipping')
            continue

        if issue.events is not None:
            events = issue.events
        else:
            events = issue_events(issue.number)

        if not references_commit(events):
            logger.debug(f'#{issue.number}: no commit-referencing event found - skipping')
            continue

        logger.debug(f'#{issue.number}: {change_type=}')
        issues_by_type[change_type].append(issue)

    return {
        change_type: issues_by_type[change_type]
        for change_type in _bucket_order(label_mapping)
        if change_type in issues_by_type
    }
