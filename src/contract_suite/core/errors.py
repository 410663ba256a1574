# core/errors.py

"""Exceptions raised by the engine.

Expected absence (no rules, unresolved operations, missing responses) is never
an error; these types cover unreadable input and broken invariants only.
"""


class ContractSuiteError(Exception):
    """Base error for the engine."""


class ConfigError(ContractSuiteError):
    """The suite configuration could not be read or validated."""


class DocumentLoadError(ContractSuiteError):
    """An OpenAPI document or Postman collection could not be loaded."""


class InvalidSettingsError(ContractSuiteError):
    """An operation filter received a settings object it cannot read."""


class CloneIdentifierCollisionError(ContractSuiteError):
    """A cloned request was assigned an identifier that is already in use."""
