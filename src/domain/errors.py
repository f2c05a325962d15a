"""Error types raised by the searchables domain.

"Not configured" and "malformed action key" are not errors: a component
without a usable declaration parses to ``None`` and an unusable action key
is simply dropped. The exceptions below are the failures that cross a
boundary.
"""


class SearchablesError(Exception):
    """Base class for all searchables errors."""


class MetadataUnavailableError(SearchablesError):
    """The package inspector cannot supply metadata for a component.

    Raised by inspectors when a component disappears mid-scan or its
    metadata cannot be read. The registry skips the component and continues.
    """

    def __init__(self, component, reason: str = "") -> None:
        self.component = component
        self.reason = reason
        message = f"Metadata unavailable for {component}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ProviderResolutionError(SearchablesError):
    """A suggestion authority does not resolve to an installed provider."""

    def __init__(self, authority: str) -> None:
        self.authority = authority
        super().__init__(f"No provider installed for authority {authority!r}")


class SerializationMismatchError(SearchablesError):
    """A serialized record disagrees with the expected wire format.

    Fatal for the single deserialization call. Indicates a wire-format or
    version mismatch between writer and reader.
    """


class UnknownSearchableError(SearchablesError, KeyError):
    """The requested component is not present in the registry."""

    def __init__(self, component) -> None:
        self.component = component
        super().__init__(f"{component} is not a registered searchable")

    def __str__(self) -> str:
        return str(self.args[0])
