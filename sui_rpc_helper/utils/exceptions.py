import json


class RPCException(Exception):
    """
    Raised when a JSON-RPC request to a Sui node fails.

    Covers transport errors, non-200 HTTP responses and JSON-RPC ``error``
    members alike.
    """

    def __init__(self, request, response, underlying_exception, extra_info):
        self.request = request
        self.response = response
        self.underlying_exception: Exception = underlying_exception
        self.extra_info = extra_info

    def __str__(self):
        ret = {
            'request': self.request,
            'response': self.response,
            'extra_info': self.extra_info,
            'exception': None,
        }
        if isinstance(self.underlying_exception, Exception):
            ret.update({'exception': str(self.underlying_exception)})
        elif self.underlying_exception is not None:
            ret.update({'exception': self.underlying_exception})
        return json.dumps(ret, default=str)

    def __repr__(self):
        return self.__str__()


class InsufficientCoinsError(ValueError):
    """Raised when an owner holds no coins of the requested type."""

    def __init__(self, owner_address: str, coin_type: str):
        self.owner_address = owner_address
        self.coin_type = coin_type
        super().__init__(f'{owner_address} owns no coins of type {coin_type}')


class DevInspectError(ValueError):
    """Raised when a dev-inspect response has an error or no results."""

    def __init__(self, message: str, response):
        self.response = response
        super().__init__(f'{message}: {json.dumps(response, indent=2, default=str)}')
