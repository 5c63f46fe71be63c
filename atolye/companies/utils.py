"""
Utility functions for company operations
"""
import secrets
import string

from .models import Company

COMPANY_CODE_LENGTH = 8
COMPANY_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_company_code(length=COMPANY_CODE_LENGTH):
    return ''.join(secrets.choice(COMPANY_CODE_ALPHABET) for _ in range(length))


def generate_unique_company_code():
    """Generate a join code no other company uses"""
    code = generate_company_code()
    while Company.objects.filter(company_code=code).exists():
        code = generate_company_code()
    return code


def normalize_company_code(value):
    return (value or '').strip().upper()
