"""Rol bazlı firma görünürlüğü.

ADMIN ve SECRETARY tüm firmaları, USER yalnızca yetkili olduğu firmaları görür.
"Kullanıcı gibi görüntüle" modunda görünürlük taklit edilen kullanıcıya göre belirlenir.
"""

from __future__ import annotations

from typing import Iterable, Optional

from isg_takip.models.isg import Firm, User, UserRole


def active_user(current: Optional[User], impersonated: Optional[User] = None) -> Optional[User]:
    return impersonated or current


def can_view_all_firms(user: Optional[User]) -> bool:
    return user is not None and user.role in (UserRole.ADMIN, UserRole.SECRETARY)


def visible_firm_ids(
    current: Optional[User],
    firms: Iterable[Firm],
    impersonated: Optional[User] = None,
) -> set[str]:
    user = active_user(current, impersonated)
    if user is None:
        return set()
    firm_ids = {f.id for f in firms}
    if can_view_all_firms(user):
        return firm_ids
    return firm_ids & set(user.allowed_firm_ids)


def is_read_only(impersonated: Optional[User]) -> bool:
    return impersonated is not None


def can_manage_firms(current: Optional[User], impersonated: Optional[User] = None) -> bool:
    return current is not None and current.role == UserRole.ADMIN and impersonated is None


def can_approve(user: Optional[User], firm_id: str) -> bool:
    """Onay yetkisi: ADMIN her zaman, SECRETARY hiçbir zaman, USER yetkili firmada."""
    if user is None:
        return False
    if user.role == UserRole.ADMIN:
        return True
    if user.role == UserRole.SECRETARY:
        return False
    return firm_id in user.allowed_firm_ids
