import math
from datetime import date, datetime, timezone

from portfolio.errors import ValidationError

def utc_now():
    return datetime.now(timezone.utc).replace(tzinfo=None)

def parse_date(value, field_name):
    """Accepts a date, a datetime or an ISO 'YYYY-MM-DD' string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f'{field_name} is required')
    try:
        return datetime.strptime(str(value).strip()[:10], '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError(f'{field_name} must be a date in YYYY-MM-DD format')

def _plural(count, unit):
    return f"{count} {unit}{'s' if count > 1 else ''}"

def calculate_duration(from_date, to_date):
    """
    Coarse duration label between two dates using 30-day months.

    Any partial day counts as a whole day. 2024-01-01 to 2024-04-01 is
    91 days, rendered as '3 months 1 day'.
    """
    delta = abs(to_date - from_date)
    days = math.ceil(delta.total_seconds() / 86400)
    months = days // 30
    remaining = days % 30

    if months > 0:
        duration = _plural(months, 'month')
        if remaining > 0:
            duration += ' ' + _plural(remaining, 'day')
        return duration
    return _plural(days, 'day')

def split_technologies(technologies):
    """Normalises a list or comma-separated string of technology names."""
    if not technologies:
        return []
    if isinstance(technologies, str):
        technologies = technologies.split(',')
    return [str(name).strip() for name in technologies if name and str(name).strip()]

def request_fields(request):
    """JSON object body of the request, or its form fields."""
    data = request.get_json(silent=True)
    if data is None:
        return request.form
    if not isinstance(data, dict):
        raise ValidationError('Request body must be an object')
    return data
