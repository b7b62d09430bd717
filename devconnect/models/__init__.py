# Import every model so Base.metadata knows all tables (Alembic, create_all)
from devconnect.models.user import User
from devconnect.models.profile import Profile
from devconnect.models.post import Post

__all__ = ["User", "Profile", "Post"]
