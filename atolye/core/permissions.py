"""Company scoping helpers shared by every tenant-data view"""
from rest_framework.permissions import BasePermission

NO_COMPANY_MESSAGE = 'Devam etmek için bir şirket oluşturun veya bir şirkete katılın.'


def get_user_profile(user):
    if not user or not user.is_authenticated:
        return None
    return getattr(user, 'profile', None)


def get_user_company(user):
    """Return the company the user belongs to, or None"""
    profile = get_user_profile(user)
    if profile is None:
        return None
    return profile.company


class HasCompany(BasePermission):
    """Allows access only to users who created or joined a company"""
    message = NO_COMPANY_MESSAGE

    def has_permission(self, request, view):
        return get_user_company(request.user) is not None
