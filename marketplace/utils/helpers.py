import random
import string
from datetime import datetime, timezone
from slugify import slugify as python_slugify


def utcnow_naive() -> datetime:
    """Current UTC time without tzinfo, comparable with values read back from the DB"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_order_number() -> str:
    """Generate unique order number"""
    timestamp = datetime.now().strftime('%Y%m%d%H%M%S')
    random_str = ''.join(random.choices(string.digits, k=4))
    return f'ORD{timestamp}{random_str}'


def generate_product_code(sequence: int) -> str:
    """PROD-0001 style catalogue code"""
    return f'PROD-{sequence:04d}'


def generate_verification_code() -> str:
    """Six digit email verification code"""
    return str(random.SystemRandom().randint(100000, 999999))


def slugify(text: str) -> str:
    """Generate URL-friendly slug"""
    return python_slugify(text)
