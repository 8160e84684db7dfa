from core.constants import UserRole
from core.models import Profile


def has_manage_permission(user):
    """
    Check if user can administer the team (staff or admin role).
    """
    if not user.is_authenticated:
        return False
    if user.is_staff or user.is_superuser:
        return True
    try:
        return user.profile.role == UserRole.ADMIN
    except Profile.DoesNotExist:
        return False
