#
#
#

import logging

from requests import RequestException

from .clients import RECORD_TYPE_PTR
from .exceptions import (
    AzureDnsClientException,
    AzureDnsNotFound,
    AzureDnsPtrException,
    AzureDnsUnauthorized,
    ParseError,
    ProtocolError,
    RemoteError,
    ValidationError,
)
from .models import (
    PtrRecordDesired,
    PtrRecordRemote,
    ResourceId,
    ResourceState,
    expand_records,
)

__version__ = '1.0.0'

__all__ = [
    'AzureDnsClientException',
    'AzureDnsNotFound',
    'AzureDnsPtrException',
    'AzureDnsUnauthorized',
    'ParseError',
    'ProtocolError',
    'PtrRecordAdapter',
    'PtrRecordDesired',
    'PtrRecordRemote',
    'RemoteError',
    'ResourceId',
    'ResourceState',
    'ValidationError',
]

# Failures a DNS client may surface for a single call
_REMOTE_FAILURES = (AzureDnsClientException, RequestException)


def _status_code(e):
    status_code = getattr(e, 'status_code', None)
    if status_code is None:
        response = getattr(e, 'response', None)
        status_code = getattr(response, 'status_code', None)
    return status_code


def _is_ok(status_code):
    return isinstance(status_code, int) and 200 <= status_code < 300


class PtrRecordAdapter(object):
    '''Create, read, update, delete and import Azure DNS PTR record sets.

    The engine drives every call; each one performs at most two remote
    requests and keeps no state of its own beyond the injected client.

    ptr:
        class: azure_dns_ptr.PtrRecordAdapter
        # Either 'rest' (default) or 'sdk'
        backend: rest
        subscription_id: 00000000-0000-0000-0000-000000000000
        # rest backend, an Azure Resource Manager bearer token
        token: env/AZURE_TOKEN
        # sdk backend, an azure-core TokenCredential instead of a token
        # credential: ...
    '''

    def __init__(self, id, client=None, backend='rest', **config):
        self.id = id
        self.log = logging.getLogger(f'PtrRecordAdapter[{id}]')
        self.log.debug(
            '__init__: id=%s, client=%s, backend=%s, config=%s',
            id,
            client,
            backend,
            sorted(config.keys()),
        )
        self._backend = backend
        if client is None:
            client = self._create_client(backend, **config)
        self._client = client

    def _create_client(self, backend, **config):
        """Factory method for client creation with lazy imports.

        Args:
            backend: Backend type ('rest' or 'sdk')
            config: Keyword arguments for the backend's client

        Returns:
            DNS client instance

        Raises:
            ValueError: If backend is invalid
        """
        if backend == 'sdk':
            from .sdk_adapter import AzureSdkDnsClient

            return AzureSdkDnsClient(**config)
        elif backend == 'rest':
            from .rest_client import AzureDnsClient

            return AzureDnsClient(**config)
        else:
            raise ValueError(
                f"Invalid backend '{backend}'. Must be 'rest' or 'sdk'"
            )

    def _resource_id(self, resource_id):
        if isinstance(resource_id, ResourceId):
            return resource_id
        return ResourceId.parse(resource_id)

    def create_or_update(self, desired, state=None):
        if not isinstance(desired, PtrRecordDesired):
            desired = PtrRecordDesired.from_dict(desired)
        self.log.debug('create_or_update: desired=%s', desired)
        desired.validate()

        properties = {
            'metadata': dict(desired.tags),
            'TTL': desired.ttl,
            'PTRRecords': expand_records(desired.records),
        }

        # if_none_match is left empty so the record set can be updated
        # after creation, '*' would make it write-once
        try:
            resp = self._client.record_set_create_or_update(
                desired.resource_group,
                desired.zone_name,
                desired.name,
                RECORD_TYPE_PTR,
                properties,
                if_match=desired.etag,
                if_none_match='',
            )
        except _REMOTE_FAILURES as e:
            raise RemoteError(
                f'Error creating or updating DNS PTR record {desired.name} '
                f'(resource group {desired.resource_group}): {e}',
                desired.name,
                _status_code(e),
            ) from e

        opaque = (resp or {}).get('id')
        if not opaque:
            raise ProtocolError(
                f'Cannot read DNS PTR record {desired.name} '
                f'(resource group {desired.resource_group}) ID'
            )
        try:
            resource_id = ResourceId.parse(opaque)
        except ParseError as e:
            raise ProtocolError(
                f'DNS PTR record {desired.name} (resource group '
                f'{desired.resource_group}) returned an unusable ID: {e}'
            ) from e
        if state is not None:
            state.set_id(opaque)
        self.log.info(
            'create_or_update: %s, %d records', opaque, len(desired.records)
        )

        if self.read(resource_id, state) is None:
            self.log.warning(
                'create_or_update: %s not found right after being written',
                opaque,
            )
        return resource_id

    def read(self, resource_id, state=None):
        resource_id = self._resource_id(resource_id)
        self.log.debug('read: resource_id=%s', resource_id)
        name = resource_id.record_name

        try:
            record_set = self._client.record_set_get(
                resource_id.resource_group,
                resource_id.zone_name,
                name,
                RECORD_TYPE_PTR,
            )
        except AzureDnsNotFound:
            self.log.debug('read:   %s not found', resource_id)
            if state is not None:
                state.clear()
            return None
        except _REMOTE_FAILURES as e:
            raise RemoteError(
                f'Error reading DNS PTR record {name}: {e}',
                name,
                _status_code(e),
            ) from e

        record = PtrRecordRemote.from_record_set(resource_id, record_set)
        if state is not None:
            state.record = record
        return record

    def delete(self, resource_id):
        resource_id = self._resource_id(resource_id)
        self.log.debug('delete: resource_id=%s', resource_id)
        name = resource_id.record_name

        cause = None
        try:
            status_code = self._client.record_set_delete(
                resource_id.resource_group,
                resource_id.zone_name,
                name,
                RECORD_TYPE_PTR,
                if_match='',
            )
        except _REMOTE_FAILURES as e:
            cause = e
            status_code = _status_code(e)

        if cause is not None or not _is_ok(status_code):
            msg = f'Error deleting DNS PTR record {name}: status={status_code}'
            if cause is not None:
                msg = f'{msg}, {cause}'
            raise RemoteError(msg, name, status_code) from cause

        self.log.info('delete: %s, status=%s', resource_id, status_code)

    def import_resource(self, opaque_id, state=None):
        self.log.debug('import_resource: opaque_id=%s', opaque_id)
        resource_id = ResourceId.parse(opaque_id)
        if state is not None:
            state.set_id(opaque_id)
        return resource_id
