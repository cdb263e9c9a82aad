"""Application-level exceptions."""


class DataAccessError(Exception):
    """
    Raised by service functions when a database round trip fails.

    Covers connectivity problems, malformed queries and constraint
    violations alike. Routers log it and answer with a generic failure
    payload; the original exception is kept as ``__cause__``.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
