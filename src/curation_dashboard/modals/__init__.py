"""Modal dialogs for the curation dashboard.

Import modals from this package: ``from curation_dashboard.modals import ConfirmModal``
"""

# common.py: general-purpose dialogs
from curation_dashboard.modals.common import ConfirmModal, HelpScreen

# credentials.py: publishing keys form
from curation_dashboard.modals.credentials import CredentialsModal

__all__ = [
    "ConfirmModal",
    "CredentialsModal",
    "HelpScreen",
]
