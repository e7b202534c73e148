"""Exception hierarchy for whichcard.

The reward engine itself never raises; these cover the collaborators
around it (settings editing and storage, text parsing, usage logging).
"""


class WhichCardError(Exception):
    """Base exception for all whichcard errors."""


class SettingsValidationError(WhichCardError):
    """Raised when an edited settings bundle breaks an editor rule."""


class SettingsStoreError(WhichCardError):
    """Raised when persisted settings cannot be written or removed."""


class PurchaseParseError(WhichCardError):
    """Raised when a text command cannot be turned into a purchase."""


class UsageLogError(WhichCardError):
    """Raised by a usage sink when a record could not be delivered."""
