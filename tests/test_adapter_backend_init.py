#
# Ensure adapter __init__ backend selection builds the right client
#

from unittest import TestCase
from unittest.mock import Mock, patch

from azure_dns_ptr import PtrRecordAdapter
from azure_dns_ptr.rest_client import AzureDnsClient
from azure_dns_ptr.sdk_adapter import AzureSdkDnsClient


class TestAdapterBackendInit(TestCase):
    def test_default_rest_backend(self):
        adapter = PtrRecordAdapter(
            'init-test', subscription_id='sub1', token='token'
        )
        self.assertEqual('rest', adapter._backend)
        self.assertIsInstance(adapter._client, AzureDnsClient)
        self.assertEqual('sub1', adapter._client._subscription_id)

    @patch('azure_dns_ptr.sdk_adapter.DnsManagementClient')
    def test_sdk_backend(self, DnsManagementClient):
        credential = Mock()
        adapter = PtrRecordAdapter(
            'init-test',
            backend='sdk',
            subscription_id='sub1',
            credential=credential,
            client_total_retries=2,
        )
        self.assertIsInstance(adapter._client, AzureSdkDnsClient)
        _, kwargs = DnsManagementClient.call_args
        self.assertIs(credential, kwargs['credential'])
        self.assertEqual(2, kwargs['retry_policy'].total_retries)

    def test_injected_client(self):
        client = Mock()
        adapter = PtrRecordAdapter('init-test', client=client, backend='sdk')
        self.assertIs(client, adapter._client)

    def test_init_invalid_backend(self):
        """Test that invalid backend raises ValueError with helpful message"""
        with self.assertRaises(ValueError) as ctx:
            PtrRecordAdapter('init-test', backend='invalid')
        self.assertIn("Invalid backend 'invalid'", str(ctx.exception))
        self.assertIn("Must be 'rest' or 'sdk'", str(ctx.exception))
