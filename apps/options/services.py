"""Option table loading.

Option tables are read once per request and handed to the listing code as a
plain mapping, so business logic never queries them on its own.
"""

from typing import Dict, List, Any

from .models import OptionItem, OptionList

OptionTables = Dict[str, List[Dict[str, Any]]]


def load_option_tables() -> OptionTables:
    """
    Load OP002 (status) and OP003 (apply method) in display order.

    Lists with no rows are returned empty rather than omitted.
    """
    tables: OptionTables = {value: [] for value in OptionList.values}

    rows = OptionItem.objects.filter(list_code__in=OptionList.values).order_by('order', 'code')
    for row in rows:
        tables[row.list_code].append({
            'code': row.code,
            'name': row.name,
            'order': row.order,
        })

    return tables


def status_order_map(tables: OptionTables) -> Dict[int, int]:
    """Map status code to display order from a loaded OP002 table."""
    return {
        item['code']: item['order']
        for item in tables.get(OptionList.ENTRY_STATUS, [])
    }
