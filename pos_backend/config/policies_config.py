"""
Row-Level Policy Configuration
Defines, per protected table, which column carries the tenant id and which
membership roles may read or write its rows. Consumed by the policy engine
in core/policy.py on every store call.
"""

ANY_MEMBER = "any_member"
PUBLIC = "public"
NOBODY = "nobody"

ORG_ADMIN_ROLES = ("owner", "admin")
ORG_OPERATOR_ROLES = ("owner", "admin", "manager")

# read: PUBLIC | ANY_MEMBER | tuple of roles
# write: NOBODY | ANY_MEMBER | tuple of roles
# org_column: column holding the organization id (None for non-tenant tables)
TABLE_POLICIES = {
    "organizations": {
        "org_column": "id",
        "read": ANY_MEMBER,
        "write": ORG_ADMIN_ROLES,
        "description": "Tenant roots; billing-sensitive",
    },
    "org_memberships": {
        "org_column": "org_id",
        "read": ANY_MEMBER,
        "write": ORG_ADMIN_ROLES,
        "description": "Identity to organization bindings",
    },
    "plans": {
        "org_column": None,
        "read": PUBLIC,
        "write": NOBODY,
        "description": "Static plan catalog",
    },
    "subscriptions": {
        "org_column": "org_id",
        "read": ANY_MEMBER,
        "write": ORG_ADMIN_ROLES,
        "description": "Billing state per organization",
    },
    "branches": {
        "org_column": "org_id",
        "read": ANY_MEMBER,
        "write": ORG_OPERATOR_ROLES,
        "description": "Operational locations",
    },
    "menu_items": {
        "org_column": "org_id",
        "read": ANY_MEMBER,
        "write": ORG_OPERATOR_ROLES,
        "description": "Operational catalog",
    },
}