"""Exception types raised by pqverify.

Signature rejection is never an exception: verifiers return False.
These types cover inputs that cannot be processed at all and backends
that break their contract.
"""


class PQVerifyError(Exception):
    """Base class for pqverify errors"""


class MalformedInputError(PQVerifyError, ValueError):
    """An operand has the wrong length or an out-of-range coefficient"""


class BackendError(PQVerifyError, RuntimeError):
    """The polynomial backend returned something outside its contract"""
