"""Exceptions raised by collection loading and mutation."""


class CollectionLoadError(ValueError):
    """Snapshot rejected by load; the collection keeps its previous state.

    `code` identifies the failed check: MISSING_ICONS, INVALID_JSON,
    INVALID_ICONS, INVALID_ALIASES, PREFIX_UNDETECTED, PREFIX_MISMATCH,
    DUPLICATE_NAME, FILE_NOT_FOUND.
    """

    def __init__(self, message: str, code: str = "INVALID"):
        super().__init__(message)
        self.code = code


class IconDataError(ValueError):
    """Icon or alias rejected by add_icon / add_alias; nothing was stored."""
