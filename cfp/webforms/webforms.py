import logging

from flask import Flask, redirect, url_for

from cfp.config import Config
from cfp.models import db
from cfp.webforms.extensions import csrf, limiter

logging.basicConfig(level=logging.INFO)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    from cfp.webforms.auth import bp as auth_bp, current_user
    from cfp.webforms.sessions import bp as sessions_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(sessions_bp)

    @app.context_processor
    def inject_user():
        return {'current_user': current_user()}

    @app.route('/')
    def home():
        return redirect(url_for('sessions.new'))

    return app


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        db.create_all()
    app.run(host="0.0.0.0", port=5000, debug=True)
