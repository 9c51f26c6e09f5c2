# strawdecor/registry/exceptions.py
"""Registry exceptions"""
from strawdecor.exceptions import StrawdecorError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(StrawdecorError): ...


class RegistryLookupError(RegistryError, LookupError): ...


class RegistryFrozenError(RuntimeError, RegistryError): ...
