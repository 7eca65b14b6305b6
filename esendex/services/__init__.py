"""
Esendex Services Layer.

Façades composing resource resolution, transport and serialisation.
"""

from esendex.services.sent_service import SentService, SentServiceFactory

__all__ = [
    "SentService",
    "SentServiceFactory",
]
