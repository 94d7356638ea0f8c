"""
Adapter for Azure DNS record sets through azure-mgmt-dns.

This adapter exposes the same record-set interface as AzureDnsClient so the
PTR adapter can switch backend without changes to its record flow.

Notes
- SDK models are normalised to the ARM JSON dict shape used by the REST
  client ('id', 'name', 'etag', 'properties' with 'TTL', 'metadata' and
  'PTRRecords').
- azure-core errors are translated into this package's client exceptions;
  a missing record set always surfaces as AzureDnsNotFound.
"""

from contextlib import contextmanager
from logging import getLogger
from typing import Any, Dict, Optional

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
)
from azure.core.pipeline.policies import RetryPolicy
from azure.mgmt.dns import DnsManagementClient
from azure.mgmt.dns.models import PtrRecord, RecordSet

from .exceptions import (
    AzureDnsClientException,
    AzureDnsNotFound,
    AzureDnsUnauthorized,
)

DEFAULT_BASE_URL = 'https://management.azure.com'


def _status_code_of(pipeline_response, deserialized, headers):
    return pipeline_response.http_response.status_code


@contextmanager
def _translate_errors(log):
    try:
        yield
    except ResourceNotFoundError as e:
        raise AzureDnsNotFound() from e
    except ClientAuthenticationError as e:
        raise AzureDnsUnauthorized() from e
    except HttpResponseError as e:
        log.debug('_translate_errors: status=%s, error=%s', e.status_code, e)
        raise AzureDnsClientException(str(e), e.status_code) from e
    except AzureError as e:
        log.debug('_translate_errors: error=%s', e)
        raise AzureDnsClientException(str(e)) from e


class AzureSdkDnsClient:
    """Thin wrapper around azure-mgmt-dns's record_sets operations."""

    def __init__(
        self,
        subscription_id: str,
        credential: Any,
        base_url: Optional[str] = None,
        client_total_retries: int = 10,
        client_status_retries: int = 3,
    ):
        self.log = getLogger('AzureSdkDnsClient')
        self.log.debug(
            '__init__: subscription_id=%s, credential=***, base_url=%s, '
            'client_total_retries=%d, client_status_retries=%d',
            subscription_id,
            base_url,
            client_total_retries,
            client_status_retries,
        )
        retry_policy = RetryPolicy(
            retry_total=client_total_retries,
            retry_status=client_status_retries,
        )
        self._dns_client = DnsManagementClient(
            credential=credential,
            subscription_id=subscription_id,
            retry_policy=retry_policy,
            base_url=base_url or DEFAULT_BASE_URL,
        )
        self._record_sets = self._dns_client.record_sets

    # --- Record set operations ---------------------------------------------

    def record_set_create_or_update(
        self,
        resource_group: str,
        zone_name: str,
        name: str,
        record_type: str,
        properties: Dict,
        if_match: str = '',
        if_none_match: str = '',
    ) -> Dict:
        parameters = RecordSet(
            ttl=properties.get('TTL'),
            metadata=properties.get('metadata'),
            ptr_records=[
                PtrRecord(ptrdname=r['ptrdname'])
                for r in properties.get('PTRRecords', [])
            ],
        )
        with _translate_errors(self.log):
            record_set = self._record_sets.create_or_update(
                resource_group_name=resource_group,
                zone_name=zone_name,
                relative_record_set_name=name,
                record_type=record_type,
                parameters=parameters,
                if_match=if_match or None,
                if_none_match=if_none_match or None,
            )
        return self._record_set_to_dict(record_set)

    def record_set_get(
        self, resource_group: str, zone_name: str, name: str, record_type: str
    ) -> Dict:
        with _translate_errors(self.log):
            record_set = self._record_sets.get(
                resource_group_name=resource_group,
                zone_name=zone_name,
                relative_record_set_name=name,
                record_type=record_type,
            )
        return self._record_set_to_dict(record_set)

    def record_set_delete(
        self,
        resource_group: str,
        zone_name: str,
        name: str,
        record_type: str,
        if_match: str = '',
    ) -> int:
        # The generated operation returns None; `cls` hands back the raw
        # pipeline response so the status can be reported
        with _translate_errors(self.log):
            return self._record_sets.delete(
                resource_group_name=resource_group,
                zone_name=zone_name,
                relative_record_set_name=name,
                record_type=record_type,
                if_match=if_match or None,
                cls=_status_code_of,
            )

    # --- Helpers -----------------------------------------------------------

    def _record_set_to_dict(self, record_set: Any) -> Dict:
        ptr_records = getattr(record_set, 'ptr_records', None)
        return {
            'id': getattr(record_set, 'id', None),
            'name': getattr(record_set, 'name', None),
            'etag': getattr(record_set, 'etag', None),
            'properties': {
                'TTL': getattr(record_set, 'ttl', None),
                'metadata': getattr(record_set, 'metadata', None),
                'PTRRecords': [
                    {'ptrdname': r.ptrdname} for r in ptr_records or []
                ],
            },
        }

