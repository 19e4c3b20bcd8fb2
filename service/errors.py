"""
Error taxonomy for the roster core.

Families:
- RosterError            base for everything raised by the core
  - ConfigurationError   bad/missing file path at startup (fatal)
  - StorageError         I/O failure while loading or persisting
  - DomainError          expected, caller-recoverable conditions
    - ValidationError    malformed caller input
    - ConflictError      duplicate key on add
    - NotFoundError      missing key on remove/adjust/expel
    - AuthorizationError role check failed on a gated mutation

Front ends catch DomainError and keep running; StorageError and
ConfigurationError bubble up.
"""

from __future__ import annotations


class RosterError(Exception):
    pass


class ConfigurationError(RosterError):
    pass


class StorageError(RosterError):
    pass


class DomainError(RosterError):
    pass


class ValidationError(DomainError):
    pass


class ConflictError(DomainError):
    pass


class NotFoundError(DomainError):
    pass


class AuthorizationError(DomainError):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
