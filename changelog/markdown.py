import collections.abc
import logging

import changelog.model as cm

logger = logging.getLogger(__name__)


HEADER = (
    '# Changelog\n'
    '> This project adheres to [Semantic Versioning](http://semver.org/).\n'
    '\n'
)


def derive_heading(change_type: str) -> str:
    '''
    fabricates a heading from the change-type's name (e.g. `type_docs` -> `### Docs`)
    '''
    title = change_type.removeprefix('type_')
    return f'### {title[:1].upper()}{title[1:]}'


def heading_for_type(
    change_type: str,
    type_headings: collections.abc.Mapping[str, str],
) -> str:
    if (heading := type_headings.get(change_type)) is not None:
        return heading
    return derive_heading(change_type)


def release_heading(release: cm.Release) -> str:
    publish_date = release.published_at.strftime('%Y-%m-%d')
    return f'## [{release.tag_name}]({release.html_url}) - {publish_date}'


def issue_line(issue: cm.Issue) -> str:
    return f'- {issue.title} [#{issue.number}]({issue.html_url})'


def render(
    releases: collections.abc.Iterable[cm.Release],
    type_headings: collections.abc.Mapping[str, str],
) -> str:
    lines = [HEADER]

    for release in releases:
        if not release.has_issues:
            logger.debug(f'{release.tag_name} has no issues - omitting')
            continue

        lines.append(release_heading(release) + '\n')

        for change_type, issues in release.issues.items():
            if not issues:
                continue

            lines.append(heading_for_type(change_type, type_headings) + '\n')
            lines.extend(issue_line(issue) + '\n' for issue in issues)
            lines.append('\n')

    return ''.join(lines)
