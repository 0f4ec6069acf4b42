"""
Purchase summation.

Rolls the stored per-member items of an entry up into per-member totals,
per-code totals and a grand total.
"""

from typing import Any, Dict, Iterable


def summarize_entry_purchases(entry) -> Dict[str, Any]:
    """
    Summarise an entry's purchases.

    Expects ``purchase_members__items`` to be prefetched for list use.

    Returns:
        {
            'entry_id': str,
            'members': [{'member_id', 'name', 'status', 'items',
                         'quantity', 'amount'}],
            'items': [{'code', 'short_name', 'quantity', 'amount'}],
            'total_quantity': int,
            'total_amount': int,
        }
    """
    members = []
    rollup: Dict[str, Dict[str, Any]] = {}

    for purchase_member in entry.purchase_members.all():
        items = [
            {
                'code': item.code,
                'short_name': item.short_name,
                'quantity': item.quantity,
                'amount': item.amount,
            }
            for item in purchase_member.items.all()
        ]

        for item in items:
            line = rollup.setdefault(item['code'], {
                'code': item['code'],
                'short_name': item['short_name'],
                'quantity': 0,
                'amount': 0,
            })
            line['quantity'] += item['quantity']
            line['amount'] += item['amount']

        members.append({
            'member_id': purchase_member.member_id,
            'name': purchase_member.name,
            'status': purchase_member.status,
            'items': items,
            'quantity': _sum(items, 'quantity'),
            'amount': _sum(items, 'amount'),
        })

    lines = list(rollup.values())
    return {
        'entry_id': entry.id,
        'members': members,
        'items': lines,
        'total_quantity': _sum(lines, 'quantity'),
        'total_amount': _sum(lines, 'amount'),
    }


def _sum(rows: Iterable[Dict[str, Any]], key: str) -> int:
    return sum(row[key] for row in rows)
