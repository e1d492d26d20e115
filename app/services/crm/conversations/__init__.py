"""CRM Conversations submodule.

Handles communications and follow-up activities attached to CRM documents.
"""

from app.services.crm.conversations.service import (
    Activities,
    Communications,
    activities,
    communications,
)

__all__ = [
    "Activities",
    "Communications",
    "activities",
    "communications",
]
