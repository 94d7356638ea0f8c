#
#
#

from logging import getLogger
from urllib.parse import quote

from requests import Session

from octodns import __VERSION__ as octodns_version

from . import __version__ as package_version
from .exceptions import AzureDnsNotFound, AzureDnsUnauthorized


class AzureDnsClient(object):
    BASE_URL = 'https://management.azure.com'
    API_VERSION = '2018-05-01'

    def __init__(
        self, subscription_id, token, base_url=None, api_version=None
    ):
        self.log = getLogger('AzureDnsClient')
        session = Session()
        session.headers.update(
            {
                'Authorization': f'Bearer {token}',
                'User-Agent': f'octodns/{octodns_version} azure-dns-ptr/{package_version}',
            }
        )
        self._session = session
        self._subscription_id = subscription_id
        self._base_url = (base_url or self.BASE_URL).rstrip('/')
        self._api_version = api_version or self.API_VERSION

    def _do(self, method, path, data=None, headers=None):
        url = f'{self._base_url}{path}'
        params = {'api-version': self._api_version}
        self.log.debug('_do: method=%s, path=%s', method, path)
        response = self._session.request(
            method, url, params=params, json=data, headers=headers
        )
        if response.status_code == 401:
            raise AzureDnsUnauthorized()
        if response.status_code == 404:
            raise AzureDnsNotFound()
        response.raise_for_status()
        return response

    def _record_set_path(self, resource_group, zone_name, name, record_type):
        return (
            f'/subscriptions/{quote(self._subscription_id, safe="")}'
            f'/resourceGroups/{quote(resource_group, safe="")}'
            '/providers/Microsoft.Network'
            f'/dnsZones/{quote(zone_name, safe="")}'
            f'/{record_type}/{quote(name, safe="")}'
        )

    def record_set_create_or_update(
        self,
        resource_group,
        zone_name,
        name,
        record_type,
        properties,
        if_match='',
        if_none_match='',
    ):
        path = self._record_set_path(
            resource_group, zone_name, name, record_type
        )
        headers = {}
        # Empty tokens are omitted, not sent as empty headers
        if if_match:
            headers['If-Match'] = if_match
        if if_none_match:
            headers['If-None-Match'] = if_none_match
        data = {'properties': properties}
        return self._do('PUT', path, data=data, headers=headers).json()

    def record_set_get(self, resource_group, zone_name, name, record_type):
        path = self._record_set_path(
            resource_group, zone_name, name, record_type
        )
        return self._do('GET', path).json()

    def record_set_delete(
        self, resource_group, zone_name, name, record_type, if_match=''
    ):
        path = self._record_set_path(
            resource_group, zone_name, name, record_type
        )
        headers = {'If-Match': if_match} if if_match else {}
        return self._do('DELETE', path, headers=headers).status_code
