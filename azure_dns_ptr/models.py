#
#
#

import re
from collections.abc import Mapping

from octodns.equality import EqualityTupleMixin
from octodns.idna import IdnaError, idna_encode

from .exceptions import ParseError, ValidationError

PROVIDER_NAMESPACE = 'Microsoft.Network'
ZONE_KEY = 'dnszones'
RECORD_KEY = 'PTR'

# Letters, digits, hyphens and underscores, no leading or trailing hyphen
_LABEL_RE = re.compile(r'^[a-z0-9_](?:[a-z0-9_-]{0,61}[a-z0-9_])?$')


class ResourceId(EqualityTupleMixin):
    '''Composite key of a PTR record set, parsed from its Azure resource id.

    Azure ids have the form::

        /subscriptions/<sub>/resourceGroups/<rg>/providers/Microsoft.Network
            /dnszones/<zone>/PTR/<name>
    '''

    def __init__(
        self, resource_group, zone_name, record_name, subscription_id=None
    ):
        self.resource_group = resource_group
        self.zone_name = zone_name
        self.record_name = record_name
        self.subscription_id = subscription_id

    @classmethod
    def parse(cls, opaque):
        if not isinstance(opaque, str) or not opaque.strip('/'):
            raise ParseError(f'Cannot parse Azure ID {opaque!r}: empty')

        components = opaque.strip('/').split('/')
        if len(components) % 2 != 0:
            raise ParseError(
                f'Cannot parse Azure ID {opaque!r}: the number of path '
                'segments is not divisible by 2'
            )

        subscription_id = None
        resource_group = None
        path = {}
        for key, value in zip(components[::2], components[1::2]):
            if not key or not value:
                raise ParseError(
                    f'Cannot parse Azure ID {opaque!r}: empty path segment'
                )
            lowered = key.lower()
            if lowered == 'subscriptions':
                subscription_id = value
            elif lowered == 'resourcegroups':
                resource_group = value
            elif lowered == 'providers':
                continue
            else:
                path[lowered] = value

        if resource_group is None:
            raise ParseError(
                f'Cannot parse Azure ID {opaque!r}: no resource group name '
                'found'
            )
        zone_name = path.get(ZONE_KEY)
        record_name = path.get(RECORD_KEY.lower())
        if zone_name is None or record_name is None:
            raise ParseError(
                f'Cannot parse Azure ID {opaque!r}: expected {ZONE_KEY} and '
                f'{RECORD_KEY} path components'
            )

        return cls(resource_group, zone_name, record_name, subscription_id)

    def __str__(self):
        prefix = ''
        if self.subscription_id:
            prefix = f'/subscriptions/{self.subscription_id}'
        return (
            f'{prefix}/resourceGroups/{self.resource_group}'
            f'/providers/{PROVIDER_NAMESPACE}'
            f'/{ZONE_KEY}/{self.zone_name}/{RECORD_KEY}/{self.record_name}'
        )

    def __repr__(self):
        return (
            f'ResourceId<{self.resource_group}, {self.zone_name}, '
            f'{self.record_name}>'
        )

    def _equality_tuple(self):
        return (
            self.subscription_id or '',
            self.resource_group,
            self.zone_name,
            self.record_name,
        )


def expand_records(records):
    '''Converts a set of target hostnames into the PTRRecords list shape.

    Every hostname is checked for hostname syntax, internationalized names
    included; single labels and a trailing dot are allowed. Raises
    ValidationError listing all offending values.
    '''
    if isinstance(records, str) or records is None:
        raise ValidationError(
            f'records must be a set of hostnames, got {records!r}'
        )

    reasons = []
    for record in records:
        if not isinstance(record, str) or not _is_hostname(record):
            reasons.append(f'PTR value {record!r} is not a valid hostname')
    if reasons:
        raise ValidationError(', '.join(reasons))

    return [{'ptrdname': record} for record in sorted(set(records))]


def _is_hostname(value):
    try:
        encoded = idna_encode(value)
    except IdnaError:
        return False
    if encoded.endswith('.'):
        encoded = encoded[:-1]
    if not encoded or len(encoded) > 253:
        return False
    return all(_LABEL_RE.match(label) for label in encoded.split('.'))


def flatten_records(ptr_records):
    return frozenset(r['ptrdname'] for r in ptr_records or [] if r)


def _require(data, key):
    value = data.get(key)
    if value is None or value == '':
        raise ValidationError(f'missing required field {key!r}')
    return value


class _PtrRecordBase(EqualityTupleMixin):
    def __init__(
        self,
        name,
        resource_group,
        zone_name,
        ttl,
        records,
        tags=None,
        etag='',
    ):
        self.name = name
        self.resource_group = resource_group
        self.zone_name = zone_name
        self.ttl = ttl
        self.records = frozenset(records)
        self.tags = dict(tags or {})
        self.etag = etag or ''

    def _equality_tuple(self):
        return (
            self.resource_group,
            self.zone_name,
            self.name,
            self.ttl,
            tuple(sorted(self.records)),
            tuple(sorted(self.tags.items())),
        )


class PtrRecordDesired(_PtrRecordBase):
    '''Desired state of a PTR record set, as described by configuration.'''

    @classmethod
    def from_dict(cls, data):
        records = data.get('records')
        if records is None:
            raise ValidationError("missing required field 'records'")
        if not isinstance(records, (list, tuple, set, frozenset)):
            raise ValidationError(
                f'records must be a set of hostnames, got {records!r}'
            )
        try:
            records = frozenset(records)
        except TypeError as e:
            raise ValidationError(
                f'records must be a set of hostnames, got {records!r}'
            ) from e
        tags = data.get('tags')
        if tags is not None and not isinstance(tags, Mapping):
            raise ValidationError(f'tags must be a mapping, got {tags!r}')
        return cls(
            name=_require(data, 'name'),
            resource_group=_require(data, 'resource_group_name'),
            zone_name=_require(data, 'zone_name'),
            ttl=_require(data, 'ttl'),
            records=records,
            tags=tags,
            etag=data.get('etag'),
        )

    def validate(self):
        reasons = []
        for key in ('name', 'resource_group', 'zone_name'):
            value = getattr(self, key)
            if not isinstance(value, str) or not value:
                reasons.append(f'{key} must be a non-empty string')
        if (
            not isinstance(self.ttl, int)
            or isinstance(self.ttl, bool)
            or self.ttl < 0
        ):
            reasons.append(
                f'ttl must be a non-negative integer, got {self.ttl!r}'
            )
        for key, value in self.tags.items():
            if not isinstance(key, str) or not isinstance(value, str):
                reasons.append(f'tag {key!r}={value!r} must map str to str')
        if not isinstance(self.etag, str):
            reasons.append('etag must be a string')
        if reasons:
            raise ValidationError(', '.join(reasons))

    def __repr__(self):
        return (
            f'PtrRecordDesired<{self.resource_group}, {self.zone_name}, '
            f'{self.name}, {self.ttl}, {sorted(self.records)}>'
        )


class PtrRecordRemote(_PtrRecordBase):
    '''A PTR record set as last read back from the DNS service.'''

    def __init__(self, id, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.id = id

    @classmethod
    def from_record_set(cls, resource_id, record_set):
        properties = record_set.get('properties') or {}
        return cls(
            id=record_set.get('id') or str(resource_id),
            name=resource_id.record_name,
            resource_group=resource_id.resource_group,
            zone_name=resource_id.zone_name,
            ttl=properties.get('TTL'),
            records=flatten_records(properties.get('PTRRecords')),
            tags=properties.get('metadata'),
            etag=record_set.get('etag'),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'resource_group_name': self.resource_group,
            'zone_name': self.zone_name,
            'ttl': self.ttl,
            'records': sorted(self.records),
            'tags': dict(self.tags),
            'etag': self.etag,
        }

    def __repr__(self):
        return (
            f'PtrRecordRemote<{self.id}, {self.ttl}, '
            f'{sorted(self.records)}, {self.etag}>'
        )


class ResourceState(object):
    '''Last-known identity and remote record of a single resource.'''

    def __init__(self, id=None, record=None):
        self.id = id
        self.record = record

    @property
    def exists(self):
        return bool(self.id)

    def set_id(self, id):
        self.id = id

    def clear(self):
        self.id = None
        self.record = None
