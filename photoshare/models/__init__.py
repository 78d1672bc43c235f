from .user import User
from .photo import Photo
from .comment import Comment
from .like import Like
from .follow import Follow
from .ban import Ban

__all__ = ["User", "Photo", "Comment", "Like", "Follow", "Ban"]
