"""Fixtures shared by the test modules of all apps."""

from core.accounts.models import UserAccount
from core.authorization import UserRole
from core.institutions.models import Institution

API = "/admin-api/v1"
PASSWORD = "Seb-Server-Test-2024!"


def create_institution(name: str = "ETH Zurich", url_suffix: str = "", active: bool = True, **kwargs) -> Institution:
    return Institution.objects.create(name=name, url_suffix=url_suffix, active=active, **kwargs)


def create_user(username: str, institution: Institution, *roles: UserRole, **kwargs) -> UserAccount:
    user = UserAccount.objects.create_user(
        username=username,
        password=kwargs.pop("password", PASSWORD),
        email=kwargs.pop("email", f"{username}@example.org"),
        institution=institution,
        **kwargs,
    )
    user.set_roles([str(role) for role in roles])
    # reload to drop cached role assignments
    return UserAccount.objects.get(pk=user.pk)
