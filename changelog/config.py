'''
Configuration of change-types, i.e. which issue-labels map to which change-type, and how
change-types are titled in the rendered changelog.

Example (YAML):

    label_mapping:
      type_added: [feature]
      type_security: [security, cve]
    type_headings:
      type_security: '### Security fixes'
    start_date: '2020-01-01T00:00:00Z'

Passed mappings are merged over the defaults; caller-defined keys take precedence. Keys that
are also present in the defaults retain their position, new ones are appended (thus declaration
order, which defines both matching-priority and rendering-order, remains stable).
'''

import collections.abc
import dataclasses
import datetime
import logging
import os

import dacite
import dateutil.parser
import yaml

import changelog.model as cm

logger = logging.getLogger(__name__)


DEFAULT_LABEL_MAPPING: dict[str, list[str]] = {
    cm.ChangeType.ADDED: ['feature'],
    cm.ChangeType.CHANGED: ['enhancement'],
    cm.ChangeType.FIXED: ['bug'],
}

DEFAULT_TYPE_HEADINGS: dict[str, str] = {
    cm.ChangeType.ADDED: '### Added',
    cm.ChangeType.CHANGED: '### Changed:',
    cm.ChangeType.DEPRECATED: '### Deprecated',
    cm.ChangeType.REMOVED: '### Removed',
    cm.ChangeType.FIXED: '### Fixed',
    cm.ChangeType.SECURITY: '### Security',
    cm.ChangeType.PULL_REQUEST: '### Merged pull requests:',
}


def merge_mappings(
    defaults: collections.abc.Mapping,
    overrides: collections.abc.Mapping | None,
) -> dict:
    merged = dict(defaults)
    if overrides:
        merged.update(overrides)
    return merged


def _as_label_list(labels: str | collections.abc.Iterable[str] | None) -> list[str]:
    if not labels:
        return []
    if isinstance(labels, str):
        return [labels]
    return list(labels)


def label_mapping(
    overrides: collections.abc.Mapping[str, str | collections.abc.Iterable[str]] | None=None,
) -> dict[str, list[str]]:
    return {
        change_type: _as_label_list(labels)
        for change_type, labels in merge_mappings(DEFAULT_LABEL_MAPPING, overrides).items()
    }


def type_headings(
    overrides: collections.abc.Mapping[str, str] | None=None,
) -> dict[str, str]:
    return merge_mappings(DEFAULT_TYPE_HEADINGS, overrides)


def parse_start_date(date: str | datetime.date | None):
    '''
    publishing-dates reported by GitHub are always in UTC; dates without timezone are
    interpreted as UTC, too, so they can be compared to those.
    '''
    if not date:
        return None
    if isinstance(date, datetime.datetime):
        pass
    elif isinstance(date, datetime.date):
        date = datetime.datetime.combine(date, datetime.time.min)
    else:
        date = dateutil.parser.isoparse(date)

    if not date.tzinfo:
        date = date.replace(tzinfo=datetime.timezone.utc)
    return date


@dataclasses.dataclass
class ChangelogCfg:
    label_mapping: dict[str, list[str]] = dataclasses.field(default_factory=dict)
    type_headings: dict[str, str] = dataclasses.field(default_factory=dict)
    start_date: datetime.datetime | None = None

    @staticmethod
    def from_dict(raw: dict | None):
        raw = dict(raw or {})
        if not isinstance(raw.get('label_mapping') or {}, dict):
            raise ValueError(f'label_mapping must be a mapping: {raw["label_mapping"]=}')

        raw['label_mapping'] = {
            str(change_type): _as_label_list(labels)
            for change_type, labels in (raw.get('label_mapping') or {}).items()
        }
        raw['type_headings'] = raw.get('type_headings') or {}

        try:
            return dacite.from_dict(
                data_class=ChangelogCfg,
                data=raw,
                config=dacite.Config(
                    type_hooks={
                        datetime.datetime: parse_start_date,
                    },
                    strict=True,
                ),
            )
        except dacite.DaciteError as de:
            raise ValueError(f'invalid changelog-configuration: {de}') from de


def load_cfg(path: str) -> ChangelogCfg:
    if not os.path.isfile(path):
        raise ValueError(f'not an existing file: {path=}')

    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f'expected a mapping in {path=}, found {type(raw)}')

    logger.info(f'loaded changelog-configuration from {path}')
    return ChangelogCfg.from_dict(raw)
