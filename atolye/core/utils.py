"""Utility functions for audit logging"""
import logging
from datetime import datetime

from .models import AuditLog

logger = logging.getLogger(__name__)


def get_client_ip(request):
    """Extract client IP address from request"""
    if not request or not hasattr(request, 'META'):
        return None
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or None


def create_audit_log(request=None, action=None, model_name=None, object_id=None,
                     changes=None, user=None, company=None, object_name=None):
    """
    Create an audit log entry

    Args:
        request: Django request object (for user and IP) - optional if user is provided
        action: Action type (create, update, delete, stock_adjust, company_join, ...)
        model_name: Name of the model being acted upon
        object_id: ID of the object (as string)
        changes: Dictionary of changes made
        user: Optional user override (defaults to request.user if request provided)
        company: Company the object belongs to
        object_name: Human-readable name of the object (e.g., product name, order number)
    """
    try:
        audit_user = None
        if user:
            audit_user = user
        elif request and hasattr(request, 'user'):
            audit_user = request.user

        ip_address = get_client_ip(request) if request else None

        if not action or not model_name or not object_id:
            logger.warning(f"Audit log creation skipped: missing required fields (action={action}, model_name={model_name}, object_id={object_id})")
            return None

        return AuditLog.objects.create(
            user=audit_user if audit_user and audit_user.is_authenticated else None,
            company=company,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            object_name=object_name,
            changes=changes or {},
            ip_address=ip_address
        )
    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log: {str(e)}")
        return None


def serialize_changes(validated_data):
    """Turn serializer validated_data into JSON-safe audit changes"""
    changes = {}
    for key, value in validated_data.items():
        if hasattr(value, 'pk'):
            changes[key] = value.pk
        elif isinstance(value, (list, tuple)):
            changes[key] = len(value)
        elif value is None or isinstance(value, (bool, int, str)):
            changes[key] = value
        else:
            changes[key] = str(value)
    return changes


INVALID_DATE_MESSAGE = 'Geçersiz tarih biçimi. YYYY-AA-GG kullanın.'


def parse_date_param(value):
    """Parse a YYYY-MM-DD query parameter; None when missing, ValueError when malformed"""
    if not value:
        return None
    return datetime.strptime(value.strip(), '%Y-%m-%d').date()
