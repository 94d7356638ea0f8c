#
#
#

from octodns.provider import ProviderException


class AzureDnsPtrException(ProviderException):
    pass


class AzureDnsClientException(AzureDnsPtrException):
    def __init__(self, msg, status_code=None):
        super().__init__(msg)
        self.status_code = status_code


class AzureDnsNotFound(AzureDnsClientException):
    def __init__(self):
        super().__init__('Not Found', 404)


class AzureDnsUnauthorized(AzureDnsClientException):
    def __init__(self):
        super().__init__('Unauthorized', 401)


class ValidationError(AzureDnsPtrException):
    pass


class ParseError(AzureDnsPtrException):
    pass


class ProtocolError(AzureDnsPtrException):
    pass


class RemoteError(AzureDnsPtrException):
    '''A non-success status or transport failure from the DNS service.

    The underlying exception, when there is one, is chained as
    ``__cause__`` by the raiser.
    '''

    def __init__(self, msg, name, status_code=None):
        super().__init__(msg)
        self.name = name
        self.status_code = status_code
