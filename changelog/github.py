'''
ReleaseSource backed by github3.py. Transport, pagination and authentication are left to
github3.py.
'''

import collections.abc
import logging
import urllib.parse

import github3
import github3.exceptions
import github3.issues.issue
import github3.repos
import github3.repos.release

import changelog.model as cm

logger = logging.getLogger(__name__)


def github_api(
    github_url: str='https://github.com',
    token: str | None=None,
    verify_ssl: bool=True,
) -> github3.GitHub:
    '''returns the appropriate github3 api object for the given github URL

    In case github_url does not refer to github.com, a GitHubEnterprise api object is returned.
    '''
    parsed = urllib.parse.urlparse(github_url)
    if not parsed.scheme or not parsed.hostname:
        raise ValueError('failed to parse url: ' + str(github_url))

    if parsed.hostname.lower() == 'github.com':
        return github3.GitHub(token=token)

    return github3.GitHubEnterprise(
        url=f'{parsed.scheme}://{parsed.hostname}',
        token=token,
        verify=verify_ssl,
    )


def _to_release(release: github3.repos.release.Release) -> cm.Release:
    return cm.Release(
        tag_name=release.tag_name,
        published_at=release.published_at,
        html_url=release.html_url,
    )


def _to_issue(issue: github3.issues.issue.ShortIssue) -> cm.Issue:
    return cm.Issue(
        number=issue.number,
        title=issue.title,
        html_url=issue.html_url,
        closed_at=issue.closed_at,
        labels=tuple(label.name for label in issue.original_labels or () if label.name),
        pull_request=bool(issue.pull_request_urls),
    )


class GithubReleaseSource:
    def __init__(
        self,
        repository: github3.repos.Repository,
    ):
        self.repository = repository

    @staticmethod
    def from_url(
        repo_url: str,
        token: str | None=None,
        verify_ssl: bool=True,
    ):
        '''
        :param repo_url: repository url, e.g. https://github.com/<owner>/<name>
        '''
        parsed = urllib.parse.urlparse(repo_url)
        path_parts = [p for p in parsed.path.split('/') if p]
        if len(path_parts) != 2:
            raise ValueError(f'expected <owner>/<name> in {repo_url=}')
        owner, name = path_parts
        name = name.removesuffix('.git')

        api = github_api(
            github_url=f'{parsed.scheme}://{parsed.hostname}',
            token=token,
            verify_ssl=verify_ssl,
        )

        try:
            repository = api.repository(owner=owner, repository=name)
        except github3.exceptions.NotFoundError as nfe:
            raise RuntimeError(f'failed to retrieve repository {owner}/{name}', nfe)

        return GithubReleaseSource(repository=repository)

    def releases(self) -> collections.abc.Generator[cm.Release, None, None]:
        for release in self.repository.releases():
            # draft-releases do not (yet) have a publishing-date
            if release.draft:
                logger.debug(f'skipping draft-release {release.name}')
                continue
            yield _to_release(release)

    def closed_issues(self) -> collections.abc.Generator[cm.Issue, None, None]:
        for issue in self.repository.issues(state='closed'):
            yield _to_issue(issue)

    def issue_events(
        self,
        issue_number: int,
    ) -> collections.abc.Generator[cm.IssueEvent, None, None]:
        issue = self.repository.issue(issue_number)
        for event in issue.events():
            yield cm.IssueEvent(
                event=event.event,
                commit_id=event.commit_id,
            )
