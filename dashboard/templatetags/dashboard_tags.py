"""Custom template tags for the dashboard and account list."""
from decimal import Decimal, InvalidOperation

from django import template

register = template.Library()


@register.filter(name="currency")
def currency(value, places=2):
    """Format as US dollars. None/blank renders as $0."""
    try:
        amount = Decimal(value or 0)
        places = int(places)
    except (InvalidOperation, TypeError, ValueError):
        return str(value)
    return f"${amount:,.{places}f}"


@register.filter(name="intcomma_safe")
def intcomma_safe(value):
    """Format an integer with commas. Safe for None."""
    if value is None:
        return "0"
    try:
        return f"{int(value):,}"
    except (ValueError, TypeError):
        return str(value)


TYPE_BADGES = {
    "NATIONAL_AIN": "bg-purple-100 text-purple-800",
    "CASH_FLEET": "bg-blue-100 text-blue-800",
    "LOCAL": "bg-gray-100 text-gray-800",
}

STATUS_BADGES = {
    "Needs Review": "bg-yellow-100 text-yellow-800",
    "Active": "bg-green-100 text-green-800",
    "Inactive": "bg-red-100 text-red-800",
}


@register.filter(name="type_badge")
def type_badge(account_type):
    return TYPE_BADGES.get(account_type, "bg-gray-100 text-gray-800")


@register.filter(name="status_badge")
def status_badge(status):
    return STATUS_BADGES.get(status, "bg-gray-100 text-gray-800")
