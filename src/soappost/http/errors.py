class TransportSetupError(ValueError):
    """
    The request could not even be attempted: malformed URL, unsupported
    scheme, or a payload that cannot be written as a request body.

    Raised to the caller, never folded into a ``PostResult``.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url
