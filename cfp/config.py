import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Load .env config
load_dotenv()

# --- RabbitMQ config ---------------------------------------------------------
RABBITMQ_HOST      = os.getenv("RABBITMQ_HOST", "rabbitmq")
RABBITMQ_PORT      = int(os.getenv("RABBITMQ_AMQP_PORT", 5672))
RABBITMQ_USERNAME  = os.getenv("RABBITMQ_USER", "guest")
RABBITMQ_PASSWORD  = os.getenv("RABBITMQ_PASSWORD", "guest")
RABBITMQ_VHOST     = os.getenv("RABBITMQ_VHOST", os.getenv("RABBITMQ_USER", "/"))

# --- SMTP config (mailer consumer) -------------------------------------------
SMTP_HOST   = os.getenv("SMTP_HOST", "localhost")
SMTP_PORT   = int(os.getenv("SMTP_PORT", 25))
MAIL_SENDER = os.getenv("MAIL_SENDER", "cfp@attendify.local")


def database_uri():
    """MySQL when the LOCAL_DB_* variables are set, otherwise DATABASE_URL or sqlite."""
    host = os.getenv("LOCAL_DB_HOST")
    if host:
        return URL.create(
            "mysql+mysqlconnector",
            username=os.getenv("LOCAL_DB_USER", "root"),
            password=os.getenv("LOCAL_DB_PASSWORD", "root"),
            host=host,
            database=os.getenv("LOCAL_DB_NAME", "cfp"),
        ).render_as_string(hide_password=False)
    return os.getenv("DATABASE_URL", "sqlite:///cfp.db")


class Config:
    SECRET_KEY = os.getenv("APP_SECRET_KEY", "dev")
    SQLALCHEMY_DATABASE_URI = database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # anonymous submissions are limited harder than the global default
    SUBMISSION_RATE_LIMIT = os.getenv("SUBMISSION_RATE_LIMIT", "10 per hour")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
