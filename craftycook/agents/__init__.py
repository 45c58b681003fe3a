from .organizer_agent import OrganizerAgent
from .publish_agent import PublishAgent

__all__ = ["OrganizerAgent", "PublishAgent"]
