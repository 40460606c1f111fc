from flask import Flask, jsonify
from careerpath.config import DevelopmentConfig
from careerpath.extensions import db, migrate
from careerpath.errors import ServiceError, StoreFailure

def create_app(config_class=DevelopmentConfig):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so the metadata knows every table
    from careerpath import models  # noqa: F401

    # Register Blueprints
    from careerpath.api.routes.auth import auth_bp
    from careerpath.api.routes.bookings import bookings_bp
    from careerpath.api.routes.chat import chat_bp
    from careerpath.api.routes.community import community_bp
    from careerpath.api.routes.catalog import catalog_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(bookings_bp, url_prefix='/api/bookings')
    app.register_blueprint(chat_bp, url_prefix='/api/chat')
    app.register_blueprint(community_bp, url_prefix='/api')
    app.register_blueprint(catalog_bp, url_prefix='/api')

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        if isinstance(error, StoreFailure):
            app.logger.error(f"Store failure: {error.detail}")
        return jsonify({'error': error.message}), error.status_code

    @app.route('/health')
    def health():
        return {"status": "ok", "app": "CareerPath"}

    return app
