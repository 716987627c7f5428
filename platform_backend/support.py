"""
Contact-form messages: write-only for the public, read-only for admins.
"""
import logging

from flask import Blueprint, jsonify

from .database import get_db
from .mappers import support_message_to_json
from .models import SupportSubmission, json_body, parse_payload

support_bp = Blueprint('support', __name__, url_prefix='/api')


@support_bp.route('/support', methods=['POST'])
def submit_support_message():
    message = parse_payload(SupportSubmission, json_body())

    row = get_db().query_one("""
        INSERT INTO support_messages (name, email, subject, message)
        VALUES (?, ?, ?, ?)
        RETURNING *
    """, (message.name, message.email, message.subject, message.message))

    logging.info(f"📨 Support message {row['id']} received")
    return jsonify(support_message_to_json(row)), 201


@support_bp.route('/admin/support', methods=['GET'])
def list_support_messages():
    rows = get_db().query("SELECT * FROM support_messages ORDER BY date DESC, id DESC")
    return jsonify([support_message_to_json(row) for row in rows])
