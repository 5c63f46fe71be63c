"""
Utility functions for catalog operations
"""
STOCK_LEVEL_CRITICAL = 'critical'
STOCK_LEVEL_WARNING = 'warning'
STOCK_LEVEL_GOOD = 'good'


def is_stock_alert(stock_quantity, min_stock_level):
    """Same rule as ProductQuerySet.stock_alerts, for a single product"""
    current = stock_quantity or 0
    if min_stock_level is not None and min_stock_level > 0:
        return current <= min_stock_level
    if min_stock_level is None or min_stock_level == 0:
        return current == 0
    return False


def get_stock_level(stock_quantity, min_stock_level):
    """Classify a product as critical, warning or good"""
    if not is_stock_alert(stock_quantity, min_stock_level):
        return STOCK_LEVEL_GOOD
    current = stock_quantity or 0
    minimum = min_stock_level or 0
    if current == 0 or current <= minimum * 0.5:
        return STOCK_LEVEL_CRITICAL
    return STOCK_LEVEL_WARNING


def apply_stock_adjustment(current, adjustment_type, quantity):
    """New stock after an in/out adjustment, never below zero"""
    current = current or 0
    if adjustment_type == 'in':
        return current + quantity
    return max(current - quantity, 0)