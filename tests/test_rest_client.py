#
# Tests for the requests based Azure DNS REST client
#

from unittest import TestCase
from unittest.mock import Mock

from requests import HTTPError, Response

from azure_dns_ptr import __version__ as package_version
from azure_dns_ptr.exceptions import AzureDnsNotFound, AzureDnsUnauthorized
from azure_dns_ptr.rest_client import AzureDnsClient

RECORD_SET_URL = (
    'https://management.azure.com/subscriptions/sub1/resourceGroups/rg1'
    '/providers/Microsoft.Network/dnsZones/zone1/PTR/ptr1'
)


def _response(status_code, body=None):
    response = Response()
    response.status_code = status_code
    response.json = Mock(return_value=body)
    return response


class TestAzureDnsClient(TestCase):
    def setUp(self):
        self.client = AzureDnsClient('sub1', 'secret-token')
        self.request = Mock()
        self.client._session.request = self.request

    def test_session_headers(self):
        client = AzureDnsClient('sub1', 'secret-token')
        headers = client._session.headers
        self.assertEqual('Bearer secret-token', headers['Authorization'])
        self.assertIn(
            f'azure-dns-ptr/{package_version}', headers['User-Agent']
        )

    def test_create_or_update(self):
        body = {'id': '/x', 'etag': 'e1'}
        self.request.return_value = _response(200, body)
        properties = {
            'metadata': {},
            'TTL': 300,
            'PTRRecords': [{'ptrdname': 'h.example.com'}],
        }

        ret = self.client.record_set_create_or_update(
            'rg1', 'zone1', 'ptr1', 'PTR', properties
        )
        self.assertEqual(body, ret)
        self.request.assert_called_once_with(
            'PUT',
            RECORD_SET_URL,
            params={'api-version': '2018-05-01'},
            json={'properties': properties},
            headers={},
        )

    def test_create_or_update_conditional_headers(self):
        self.request.return_value = _response(201, {'id': '/x'})
        self.client.record_set_create_or_update(
            'rg1', 'zone1', 'ptr1', 'PTR', {}, if_match='e1', if_none_match='*'
        )
        _, kwargs = self.request.call_args
        self.assertEqual(
            {'If-Match': 'e1', 'If-None-Match': '*'}, kwargs['headers']
        )

    def test_get(self):
        body = {'id': '/x', 'properties': {'TTL': 60}}
        self.request.return_value = _response(200, body)
        self.assertEqual(
            body, self.client.record_set_get('rg1', 'zone1', 'ptr1', 'PTR')
        )
        self.request.assert_called_once_with(
            'GET',
            RECORD_SET_URL,
            params={'api-version': '2018-05-01'},
            json=None,
            headers=None,
        )

    def test_get_quotes_names(self):
        self.request.return_value = _response(200, {})
        self.client.record_set_get('rg 1', 'zone1', 'a/b', 'PTR')
        args, _ = self.request.call_args
        self.assertTrue(
            args[1].endswith(
                '/resourceGroups/rg%201/providers/Microsoft.Network'
                '/dnsZones/zone1/PTR/a%2Fb'
            )
        )

    def test_delete(self):
        self.request.return_value = _response(204)
        self.assertEqual(
            204, self.client.record_set_delete('rg1', 'zone1', 'ptr1', 'PTR')
        )
        self.request.assert_called_once_with(
            'DELETE',
            RECORD_SET_URL,
            params={'api-version': '2018-05-01'},
            json=None,
            headers={},
        )

    def test_errors(self):
        self.request.return_value = _response(404)
        with self.assertRaises(AzureDnsNotFound) as ctx:
            self.client.record_set_get('rg1', 'zone1', 'ptr1', 'PTR')
        self.assertEqual(404, ctx.exception.status_code)

        self.request.return_value = _response(401)
        with self.assertRaises(AzureDnsUnauthorized) as ctx:
            self.client.record_set_delete('rg1', 'zone1', 'ptr1', 'PTR')
        self.assertEqual(401, ctx.exception.status_code)

        self.request.return_value = _response(412)
        with self.assertRaises(HTTPError) as ctx:
            self.client.record_set_create_or_update(
                'rg1', 'zone1', 'ptr1', 'PTR', {}, if_match='stale'
            )
        self.assertEqual(412, ctx.exception.response.status_code)

    def test_base_url_and_api_version(self):
        client = AzureDnsClient(
            'sub1',
            'token',
            base_url='https://management.usgovcloudapi.net/',
            api_version='2023-07-01-preview',
        )
        client._session.request = request = Mock()
        request.return_value = _response(200, {})
        client.record_set_get('rg1', 'zone1', 'ptr1', 'PTR')
        args, kwargs = request.call_args
        self.assertTrue(
            args[1].startswith(
                'https://management.usgovcloudapi.net/subscriptions/sub1/'
            )
        )
        self.assertEqual(
            {'api-version': '2023-07-01-preview'}, kwargs['params']
        )
