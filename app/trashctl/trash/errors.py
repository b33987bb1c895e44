"""Exception hierarchy for the trash domain.

Configuration and discovery errors are fatal and raised before any
entry is touched. Per-entry problems never raise out of the catalog;
they become orphans, unknown sizes, or failed action results.
"""


class TrashError(Exception):
    """Base exception for all trash errors."""


class ConfigError(TrashError):
    """Raised for invalid query options (bad pattern, size string, conflicts)."""


class DiscoveryError(TrashError):
    """Raised when the mount table cannot be read."""


class TrashInfoError(TrashError):
    """Raised when a .trashinfo sidecar cannot be decoded."""


class TrashOperationError(TrashError):
    """Raised when one or more per-entry mutations failed.

    Attributes:
        failures: Mapping of entry path to error message.
    """

    def __init__(self, failures: dict[str, str]) -> None:
        self.failures = failures
        lines = [f"{path}: {error}" for path, error in failures.items()]
        super().__init__(f"{len(failures)} operation(s) failed:\n" + "\n".join(lines))
