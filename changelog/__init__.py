'''
Changelog Generator

Generates a Markdown changelog from a repository's releases, closed issues and pull-requests.

Closed issues are attributed to releases by closing-date: an issue belongs to the most recent
release whose predecessor was published before the issue was closed. Each issue is categorised
into a change-type (added, changed, fixed, ..) based on its labels; unlabeled pull-requests are
listed separately. Only issues that were resolved by (or at least refer to) a commit are
included.
'''
