"""Exceptions raised by the synthesis engine."""


class SynthesisError(Exception):
    """Base class for failures while synthesizing a value."""

    pass


class UnsupportedCollectionError(SynthesisError):
    """Raised when a collection type does not have exactly one element type.

    Mappings and fixed-length tuples are not synthesized automatically; register
    an explicit strategy for them instead.
    """

    def __init__(self, collection_type: object):
        self.collection_type = collection_type
        super().__init__(
            f"Cannot synthesize {collection_type!r}: only collections with a single "
            "element type are supported"
        )


class ConstructionError(SynthesisError):
    """Raised in strict mode when no constructor candidate produced an instance."""

    def __init__(self, target: object, reason: str | None = None):
        self.target = target
        self.reason = reason
        super().__init__(f"Could not construct {target!r}: {reason or 'no candidates'}")


class UnknownOptionError(ValueError):
    """Raised when an enumerated option has a value outside its known members."""

    def __init__(self, value: object, enum_type: type | None = None):
        self.value = value
        self.enum_type = enum_type
        if enum_type is not None:
            message = f"{value!r} is not a member of {enum_type.__name__}"
        else:
            message = f"The specified option value doesn't exist: {value!r}"
        super().__init__(message)
