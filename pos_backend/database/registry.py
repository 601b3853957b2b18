from pos_backend.modules.branches.models import Branch
from pos_backend.modules.menu_items.models import MenuItem
from pos_backend.modules.organizations.models import Membership, Organization
from pos_backend.modules.plans.models import Plan
from pos_backend.modules.subscriptions.models import Subscription

# Table name -> mapped class, for every table the store can address
TABLE_MODELS = {
    Organization.__tablename__: Organization,
    Membership.__tablename__: Membership,
    Plan.__tablename__: Plan,
    Subscription.__tablename__: Subscription,
    Branch.__tablename__: Branch,
    MenuItem.__tablename__: MenuItem,
}
