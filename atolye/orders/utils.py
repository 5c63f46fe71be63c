"""
Utility functions for order operations
"""
import time

from .models import Order


def generate_order_number(company):
    """SIP-<epoch milliseconds>, bumped until unused within the company"""
    millis = int(time.time() * 1000)
    order_number = f"SIP-{millis}"
    while Order.objects.filter(company=company, order_number=order_number).exists():
        millis += 1
        order_number = f"SIP-{millis}"
    return order_number
