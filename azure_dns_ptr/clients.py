#
#
#

"""Protocol definitions for DNS record-set client interfaces.

This module defines structural typing (PEP 544) for DNS clients,
allowing type checking without requiring explicit inheritance.
"""

from typing import Dict, Protocol

RECORD_TYPE_PTR = 'PTR'


class DNSService(Protocol):
    """Protocol defining the expected interface for record-set clients.

    Both AzureDnsClient (rest) and AzureSdkDnsClient (sdk) conform to this
    interface. Record sets are exchanged as dicts in the Azure Resource
    Manager JSON shape::

        {
            'id': '/subscriptions/.../dnszones/<zone>/PTR/<name>',
            'name': '<name>',
            'etag': '<etag>',
            'properties': {
                'TTL': 300,
                'metadata': {'env': 'prod'},
                'PTRRecords': [{'ptrdname': 'host1.example.com'}],
            },
        }
    """

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
        """Create or replace a record set.

        Args:
            resource_group: Resource group holding the zone
            zone_name: DNS zone name
            name: Relative record set name
            record_type: Record type discriminator (PTR)
            properties: Record set properties (TTL, metadata, records)
            if_match: Etag the record set must currently have, empty to
                overwrite unconditionally
            if_none_match: '*' to refuse overwriting an existing record set,
                empty to allow it

        Returns:
            Record set dict, with at least an 'id'
        """
        ...

    def record_set_get(
        self, resource_group: str, zone_name: str, name: str, record_type: str
    ) -> Dict:
        """Get a record set.

        Raises:
            AzureDnsNotFound: If the record set does not exist
        """
        ...

    def record_set_delete(
        self,
        resource_group: str,
        zone_name: str,
        name: str,
        record_type: str,
        if_match: str = '',
    ) -> int:
        """Delete a record set.

        Returns:
            HTTP status code reported by the service
        """
        ...
