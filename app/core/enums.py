from enum import Enum
from typing import Dict, FrozenSet, Optional

class Role(str, Enum):
    """Caller roles carried in the access token"""
    ADMIN = "admin"
    USER = "user"

class Permission(str, Enum):
    """Capabilities checked by write routes"""
    MOVIES_READ = "movies:read"
    MOVIES_WRITE = "movies:write"

class MovieSource(str, Enum):
    """How a movie record entered the catalog"""
    DIRECT = "direct"
    IMDB = "imdb"

ROLE_PERMISSIONS: Dict[Role, FrozenSet[Permission]] = {
    Role.ADMIN: frozenset({Permission.MOVIES_READ, Permission.MOVIES_WRITE}),
    Role.USER: frozenset({Permission.MOVIES_READ}),
}

def permissions_for(role: Optional[str]) -> FrozenSet[Permission]:
    """Permissions granted to a role name; unknown or missing roles get none"""
    try:
        return ROLE_PERMISSIONS[Role(role)]
    except ValueError:
        return frozenset()
