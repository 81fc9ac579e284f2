# core/policy.py
"""
Declarative authorization policy.

Every protected operation is listed once in ``POLICIES``; the auth guard in
``core.deps`` consults this table instead of routes checking roles inline.
"""
from dataclasses import dataclass
from enum import Enum

from db_models.user import UserRole


class Operation(str, Enum):
    VIEW_PROFILE = "view_profile"

    # Buyer
    PLACE_ORDER = "place_order"
    LIST_OWN_ORDERS = "list_own_orders"
    VIEW_TRACKING = "view_tracking"

    # Manager
    CREATE_PRODUCT = "create_product"
    UPDATE_PRODUCT = "update_product"
    DELETE_PRODUCT = "delete_product"
    LIST_PENDING_ORDERS = "list_pending_orders"
    APPROVE_ORDER = "approve_order"
    REJECT_ORDER = "reject_order"
    APPEND_TRACKING = "append_tracking"

    # Admin
    LIST_ALL_ORDERS = "list_all_orders"
    LIST_USERS = "list_users"
    VIEW_USER = "view_user"
    UPDATE_USER = "update_user"
    SUSPEND_USER = "suspend_user"


ALL_ROLES = frozenset(UserRole)


@dataclass(frozen=True)
class Policy:
    """
    roles: roles allowed to perform the operation.
    require_active: re-read the account at request time and refuse suspended
        accounts, regardless of what the token says.
    """
    roles: frozenset[UserRole]
    require_active: bool = False

    def allows_role(self, role: str) -> bool:
        return role in {r.value for r in self.roles}


_BUYER = frozenset({UserRole.BUYER})
_MANAGER = frozenset({UserRole.MANAGER})
_ADMIN = frozenset({UserRole.ADMIN})


POLICIES: dict[Operation, Policy] = {
    Operation.VIEW_PROFILE: Policy(ALL_ROLES),

    Operation.PLACE_ORDER: Policy(_BUYER, require_active=True),
    Operation.LIST_OWN_ORDERS: Policy(_BUYER),
    # Buyers are further limited to their own orders by the order manager
    Operation.VIEW_TRACKING: Policy(ALL_ROLES),

    Operation.CREATE_PRODUCT: Policy(_MANAGER, require_active=True),
    Operation.UPDATE_PRODUCT: Policy(_MANAGER),
    Operation.DELETE_PRODUCT: Policy(_MANAGER),
    Operation.LIST_PENDING_ORDERS: Policy(_MANAGER),
    Operation.APPROVE_ORDER: Policy(_MANAGER),
    Operation.REJECT_ORDER: Policy(_MANAGER),
    Operation.APPEND_TRACKING: Policy(_MANAGER),

    Operation.LIST_ALL_ORDERS: Policy(_ADMIN),
    Operation.LIST_USERS: Policy(_ADMIN),
    Operation.VIEW_USER: Policy(_ADMIN),
    Operation.UPDATE_USER: Policy(_ADMIN),
    Operation.SUSPEND_USER: Policy(_ADMIN),
}


def policy_for(operation: Operation) -> Policy:
    return POLICIES[operation]
