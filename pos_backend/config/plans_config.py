"""
Plan Catalog Configuration
Plans are reference data: seeded at startup and by scripts/seed_plans.py,
never written through caller-scoped store calls.
"""

PLAN_CATALOG = [
    {
        "id": "free",
        "name": "Free",
        "monthly_price_cents": 0,
        "features": {
            "max_branches": 1,
            "max_devices": 1,
            "features": ["pos_core", "reports_basic"],
        },
    },
]


def get_plan_catalog() -> list:
    return [dict(plan) for plan in PLAN_CATALOG]
