"""
Service banner and health check.
"""
import logging
from datetime import datetime

from flask import Blueprint, jsonify

from .database import get_db
from .errors import StoreError

health_bp = Blueprint('health', __name__)


@health_bp.route('/', methods=['GET'])
def index():
    return 'The Platform API is running successfully! 🚀'


@health_bp.route('/api/health', methods=['GET'])
def health_check():
    """Endpoint for health check"""
    db = get_db()
    try:
        row = db.query_one("SELECT COUNT(*) AS total FROM articles")
    except StoreError as e:
        logging.error(f"❌ Health check failed: {e.message}")
        return jsonify({
            'status': 'unhealthy',
            'message': e.message,
            'database': 'disconnected',
            'timestamp': datetime.now().isoformat()
        }), 500

    return jsonify({
        'status': 'healthy',
        'database': 'connected',
        'backend': db.dialect,
        'total_articles': row['total'] if row else 0,
        'timestamp': datetime.now().isoformat()
    })
