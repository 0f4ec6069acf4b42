"""
Masters app services layer.

Products, shops and members carry little logic of their own; the services
issue sequence IDs and keep multi-row writes inside a transaction.
"""

from .exceptions import (
    MastersServiceError,
    ProductNotFoundError,
    ShopNotFoundError,
    MemberNotFoundError,
)

from .product_management import (
    create_product,
    update_product,
    delete_product,
    get_product_by_id,
    list_current_products,
    list_past_products,
)

from .shop_management import (
    create_shop,
    update_shop,
    get_shop_by_id,
    schedule_defaults,
)

from .member_management import (
    create_member,
    update_member,
    get_primary_members,
)


__all__ = [
    # Exceptions
    'MastersServiceError',
    'ProductNotFoundError',
    'ShopNotFoundError',
    'MemberNotFoundError',

    # Product Management
    'create_product',
    'update_product',
    'delete_product',
    'get_product_by_id',
    'list_current_products',
    'list_past_products',

    # Shop Management
    'create_shop',
    'update_shop',
    'get_shop_by_id',
    'schedule_defaults',

    # Member Management
    'create_member',
    'update_member',
    'get_primary_members',
]
