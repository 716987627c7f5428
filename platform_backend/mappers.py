"""
Row <-> JSON mapping.

Columns are snake_case in the database and camelCase at the HTTP boundary.
Each entity has exactly one function turning a stored row into its response
body; handlers never return raw rows.
"""
from datetime import date, datetime, timezone
from decimal import Decimal


def iso_timestamp(value):
    """Emit stored timestamps as ISO 8601 regardless of the driver's type."""
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    # sqlite returns 'YYYY-MM-DD HH:MM:SS'
    return str(value).replace(" ", "T", 1)


def to_db_timestamp(value):
    """Caller-supplied datetimes are stored as naive UTC, like CURRENT_TIMESTAMP."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    # zero-padded years keep stored text dates sortable
    return value.isoformat(sep=" ", timespec="seconds")


def to_number(value):
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def to_flag(value) -> bool:
    return bool(value) if value is not None else False


def article_to_json(row: dict) -> dict:
    return {
        'id': row['id'],
        'title': row.get('title'),
        'subHeadline': row.get('sub_headline'),
        'category': row.get('category'),
        'author': row.get('author'),
        'date': iso_timestamp(row.get('date')),
        'image': row.get('image'),
        'excerpt': row.get('excerpt'),
        'content': row.get('content'),
        'views': row.get('views') or 0,
        'status': row.get('status'),
        'isBreaking': to_flag(row.get('is_breaking')),
    }


def ad_to_json(row: dict) -> dict:
    return {
        'id': row['id'],
        'clientName': row.get('client_name'),
        'email': row.get('email'),
        'plan': row.get('plan'),
        'amount': to_number(row.get('amount')),
        'status': row.get('status'),
        'dateSubmitted': iso_timestamp(row.get('date_submitted')),
        'receiptImage': row.get('receipt_image'),
        'adImage': row.get('ad_image'),
        'adContent': row.get('ad_content'),
        'adUrl': row.get('ad_url'),
        'adHeadline': row.get('ad_headline'),
        'adContentFile': row.get('ad_content_file'),
    }


def comment_to_json(row: dict) -> dict:
    return {
        'id': row['id'],
        'articleId': row.get('article_id'),
        'author': row.get('author'),
        'email': row.get('email'),
        'content': row.get('content'),
        'date': iso_timestamp(row.get('date')),
    }


def support_message_to_json(row: dict) -> dict:
    return {
        'id': row['id'],
        'name': row.get('name'),
        'email': row.get('email'),
        'subject': row.get('subject'),
        'message': row.get('message'),
        'date': iso_timestamp(row.get('date')),
        'status': row.get('status'),
    }
