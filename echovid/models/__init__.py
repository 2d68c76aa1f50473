from echovid.models.user import User, UserRole
from echovid.models.video import Video
from echovid.models.comment import Comment
from echovid.models.rating import Rating

__all__ = ["User", "UserRole", "Video", "Comment", "Rating"]
