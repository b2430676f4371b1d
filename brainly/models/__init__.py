from brainly.models.user import User
from brainly.models.content import Content
from brainly.models.share_link import ShareLink

__all__ = ["User", "Content", "ShareLink"]
