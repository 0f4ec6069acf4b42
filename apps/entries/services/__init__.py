"""
Entries app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and lock the entry row.
"""

from .exceptions import (
    EntriesServiceError,
    EntryNotFoundError,
    PurchaseMemberNotFoundError,
    InvalidMembersError,
    ProductReferenceError,
)

from .dates import (
    parse_timestamp,
    local_date,
)

from .status_derivation import (
    StatusDerivation,
    derive_entry_status,
    resolve_member_update,
)

from .member_status import (
    update_member_statuses,
    remove_purchase_member,
)

from .entry_management import (
    create_entry,
    get_entry,
    update_entry,
    delete_entry,
)

from .purchase_items import (
    get_purchase_items,
    replace_purchase_items,
)

from .purchase_summary import (
    summarize_entry_purchases,
)

from .entry_listing import (
    LotteryMode,
    PurchaseMode,
    list_lottery_entries,
    list_purchase_entries,
    build_purchase_listing,
)


__all__ = [
    # Exceptions
    'EntriesServiceError',
    'EntryNotFoundError',
    'PurchaseMemberNotFoundError',
    'InvalidMembersError',
    'ProductReferenceError',

    # Dates
    'parse_timestamp',
    'local_date',

    # Status Derivation
    'StatusDerivation',
    'derive_entry_status',
    'resolve_member_update',
    'update_member_statuses',
    'remove_purchase_member',

    # Entry Management
    'create_entry',
    'get_entry',
    'update_entry',
    'delete_entry',

    # Purchase Items
    'get_purchase_items',
    'replace_purchase_items',
    'summarize_entry_purchases',

    # Listings
    'LotteryMode',
    'PurchaseMode',
    'list_lottery_entries',
    'list_purchase_entries',
    'build_purchase_listing',
]
