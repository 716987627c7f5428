"""
Application factory and process entry point for The Platform API.
"""
import os
import logging

from flask import Flask
from flask_cors import CORS
from werkzeug.routing import IntegerConverter

from .ads import ads_bp
from .articles import articles_bp
from .comments import comments_bp
from .config import check_database_url, get_config
from .database import EXTENSION_KEY, MAX_ROW_ID, UnavailableDatabase, create_database
from .errors import register_error_handlers
from .health import health_bp
from .logging_utils import setup_logging
from .schema import bootstrap_database
from .support import support_bp


class RowIdConverter(IntegerConverter):
    """<id:...> URL segment: an integer that fits the id column; anything larger is a 404."""

    def __init__(self, map, *args, **kwargs):
        kwargs.setdefault('max', MAX_ROW_ID)
        super().__init__(map, *args, **kwargs)


def create_app(config=None, database=None, **overrides):
    """
    Build the Flask app.

    Args:
        config: Config object (defaults to get_config() for FLASK_ENV)
        database: Database to use; built from DATABASE_URL when omitted
        overrides: Individual config keys to override

    Returns:
        Flask app with the database available via database.get_db()
    """
    app = Flask(__name__)
    app.config.from_object(config or get_config())
    app.config.update(overrides)
    app.json.sort_keys = False

    setup_logging(app, app.config['LOG_LEVEL'], app.config.get('LOG_FILE'))

    CORS(app, supports_credentials=True, resources={r"/*": {"origins": app.config['CORS_ORIGINS']}})

    if database is None:
        check_database_url(app)
        try:
            database = create_database(
                app.config['DATABASE_URL'],
                pool_min=app.config['DB_POOL_MIN'],
                pool_max=app.config['DB_POOL_MAX'],
                prefer_ipv4=app.config['DB_PREFER_IPV4'],
                sslmode=app.config['DB_SSLMODE'],
            )
        except ValueError as e:
            logging.error(f"❌ {e}; requests will fail until DATABASE_URL is fixed")
            database = UnavailableDatabase(str(e))
    app.extensions[EXTENSION_KEY] = database

    if app.config.get('INIT_DB', True):
        bootstrap_database(database)

    app.url_map.converters['id'] = RowIdConverter
    register_error_handlers(app)
    for blueprint in (health_bp, articles_bp, ads_bp, comments_bp, support_bp):
        app.register_blueprint(blueprint)

    return app


def main():
    app = create_app()
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() == 'true'
    port = app.config['PORT']

    logging.info("=" * 50)
    logging.info("🚀 Starting The Platform API")
    logging.info(f"📡 Port: {port}")
    logging.info(f"🗄️ Database: {app.extensions[EXTENSION_KEY].describe()}")
    logging.info(f"🌐 CORS origins: {', '.join(app.config['CORS_ORIGINS'])}")
    logging.info(f"🔧 Debug: {debug_mode}")
    logging.info("=" * 50)

    app.run(debug=debug_mode, port=port, host=app.config['HOST'])


if __name__ == '__main__':
    main()
