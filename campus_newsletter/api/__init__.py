"""Remote API package exports."""
from campus_newsletter.api.client import CampusLifeClient

__all__ = [
    'CampusLifeClient'
]
