import collections.abc
import datetime
import logging

import changelog.classify as ccl
import changelog.config as cc
import changelog.markdown as cmd
import changelog.model as cm
import changelog.windows as cw

logger = logging.getLogger(__name__)


class ChangelogGenerator:
    def __init__(
        self,
        source: cm.ReleaseSource,
        issue_mappings: collections.abc.Mapping[str, collections.abc.Iterable[str]] | None=None,
        type_headings: collections.abc.Mapping[str, str] | None=None,
        start_date: datetime.date | str | None=None,
    ):
        '''
        :param source: the hosting-service to retrieve releases and issues from
        :param issue_mappings: change-type -> issue-labels (merged over defaults)
        :param type_headings: change-type -> heading (merged over defaults)
        :param start_date: if given, releases published at or before are omitted (UTC if naive)
        '''
        self.source = source
        self.label_mapping = cc.label_mapping(issue_mappings)
        self.type_headings = cc.type_headings(type_headings)
        self.start_date = cc.parse_start_date(start_date)

    @staticmethod
    def from_cfg(
        source: cm.ReleaseSource,
        cfg: cc.ChangelogCfg,
    ):
        return ChangelogGenerator(
            source=source,
            issue_mappings=cfg.label_mapping,
            type_headings=cfg.type_headings,
            start_date=cfg.start_date,
        )

    def collect_release_issues(self) -> list[cm.Release]:
        '''
        returns releases (most recent first), with issues attributed to them by closing-date
        '''
        releases = list(self.source.releases())
        logger.info(f'found {len(releases)} releases')

        windows = cw.release_windows(
            releases=releases,
            start_date=self.start_date,
        )

        pool = cm.IssuePool(self.source.closed_issues())
        logger.info(f'found {len(pool)} closed issues')

        releases_with_issues = []
        for release, lower_bound in windows:
            release.issues = ccl.collect_issues(
                pool=pool,
                lower_bound=lower_bound,
                label_mapping=self.label_mapping,
                issue_events=self.source.issue_events,
            )
            logger.info(
                f'{release.tag_name}: '
                f'{sum(len(issues) for issues in release.issues.values())} issues'
            )
            releases_with_issues.append(release)

        if len(pool):
            logger.info(f'{len(pool)} issues were not attributed to any release')

        return releases_with_issues

    def generate(self) -> str:
        releases = self.collect_release_issues()

        return cmd.render(
            releases=releases,
            type_headings=self.type_headings,
        )
