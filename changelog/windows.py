import collections.abc
import datetime
import logging

import changelog.model as cm

logger = logging.getLogger(__name__)


ReleaseWindow = tuple[cm.Release, datetime.datetime | None]


def release_windows(
    releases: collections.abc.Sequence[cm.Release],
    start_date: datetime.datetime | None=None,
) -> list[ReleaseWindow]:
    '''
    returns a list of (release, lower_bound) tuples, retaining order of the passed releases (which
    is expected to be "most recent first").

    lower_bound is the publishing-date of the next older release, which is the (exclusive) lower
    boundary of closing-dates of issues to be attributed to a release. For the oldest release,
    lower_bound is `None` (-> unbounded).

    if `start_date` is passed, releases published at or before it are omitted (they still serve as
    lower boundary for their successor, though).
    '''
    if not releases:
        raise cm.NoReleasesFound('No releases found for this repository')

    windows = []
    for idx, release in enumerate(releases):
        if start_date and release.published_at <= start_date:
            logger.debug(f'{release.tag_name} was published before {start_date=} - skipping')
            continue

        if idx + 1 < len(releases):
            lower_bound = releases[idx + 1].published_at
        else:
            lower_bound = None

        logger.debug(f'{release.tag_name}: issues closed after {lower_bound=}')
        windows.append((release, lower_bound))

    return windows
