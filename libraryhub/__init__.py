from flask import Flask, jsonify
from libraryhub.config import Config
from libraryhub.extensions import data_client, session_store
from libraryhub.services.navigation import navigation


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # 1) Remote data service client; rows are read/written with the viewer's token
    data_client.init_app(app)
    session_store.init_app(app)
    data_client.token_provider = session_store.access_token

    # 2) Header follows session changes for the app's lifetime
    navigation.init_app(app, session_store)

    # 3) Views
    from libraryhub.controllers.web_controller import web_bp
    from libraryhub.controllers.catalog_controller import catalog_bp
    from libraryhub.controllers.cart_controller import cart_bp
    from libraryhub.controllers.dashboard_controller import dashboard_bp
    from libraryhub.controllers.profile_controller import profile_bp
    app.register_blueprint(web_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(profile_bp)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    app.logger.info(f"[app] data service at {app.config['DATA_SERVICE_URL']}")
    return app
