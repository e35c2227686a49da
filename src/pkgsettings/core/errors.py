"""Exception types raised by pkgsettings."""


class PkgSettingsError(Exception):
    """Base class for pkgsettings errors."""


class PersistenceError(PkgSettingsError):
    """The settings document could not be read from or written to disk."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class DocumentFormatError(PersistenceError):
    """The settings document exists but its content cannot be parsed."""


class SecretCodecError(PkgSettingsError):
    """A stored secret could not be decrypted, or the key material is unusable."""


class RequestError(PkgSettingsError):
    """A settings request is missing something its action needs."""
