import logging
import xml.etree.ElementTree as ET

import pika
from pika.exceptions import AMQPError

from cfp import config
from cfp.errors import NotificationDeliveryError

logger = logging.getLogger(__name__)

EXCHANGE_NAME = "mail"                    # one exchange for every mail kind
ROUTING_KEYS  = {
    "session_submit": "mail.session_submit",
}


# --- connection helper -------------------------------------------------------
def _get_channel():
    creds = pika.PlainCredentials(config.RABBITMQ_USERNAME, config.RABBITMQ_PASSWORD)
    params = pika.ConnectionParameters(
        host=config.RABBITMQ_HOST,
        port=config.RABBITMQ_PORT,
        virtual_host=config.RABBITMQ_VHOST,
        credentials=creds
    )
    conn = pika.BlockingConnection(params)
    ch   = conn.channel()
    declare_mail_queues(ch)
    return conn, ch


def declare_mail_queues(ch):
    """Exchange plus one durable queue per mail kind, shared with the mailer consumer."""
    ch.exchange_declare(exchange=EXCHANGE_NAME, exchange_type="direct", durable=True)
    for routing_key in ROUTING_KEYS.values():
        ch.queue_declare(queue=routing_key, durable=True)
        ch.queue_bind(queue=routing_key, exchange=EXCHANGE_NAME, routing_key=routing_key)


# --- XML helpers -------------------------------------------------------------
def _build_info(parent, operation: str):
    info = ET.SubElement(parent, "info")
    ET.SubElement(info, "sender").text     = "cfp"
    ET.SubElement(info, "operation").text  = operation
    return info


def _session_submit_to_xml(presenter, session) -> bytes:
    root = ET.Element("cfp")
    _build_info(root, "session_submit")

    mail = ET.SubElement(root, "mail")
    ET.SubElement(mail, "to").text      = presenter.email
    ET.SubElement(mail, "subject").text = f"Your session '{session.title}' has been submitted"
    ET.SubElement(mail, "body").text    = (
        f"Hello,\n\n"
        f"The session '{session.title}' was submitted with you as a presenter.\n"
        f"The organisers will review it and get back to you.\n"
    )

    s = ET.SubElement(mail, "session")
    ET.SubElement(s, "id").text          = str(session.id)
    ET.SubElement(s, "title").text       = session.title
    ET.SubElement(s, "description").text = session.description or ""

    return ET.tostring(root, encoding="utf-8")


MAIL_BUILDERS = {
    "session_submit": _session_submit_to_xml,
}


# --- public API ---------------------------------------------------------------
def deliver(kind: str, presenter, session) -> None:
    """Queue one mail of the given kind for one presenter about one session."""
    if kind not in ROUTING_KEYS:
        raise ValueError(f"Invalid mail kind: {kind}")
    xml_bytes = MAIL_BUILDERS[kind](presenter, session)
    _publish(xml_bytes, ROUTING_KEYS[kind])


def _publish(xml_payload: bytes, routing_key: str):
    try:
        conn, ch = _get_channel()
        try:
            ch.basic_publish(
                exchange=EXCHANGE_NAME,
                routing_key=routing_key,
                body=xml_payload,
                properties=pika.BasicProperties(content_type="application/xml", delivery_mode=2)
            )
        finally:
            conn.close()
    except (AMQPError, OSError) as e:
        raise NotificationDeliveryError(routing_key, e) from e
    logger.info(f"Published to exchange '{EXCHANGE_NAME}' with key '{routing_key}'")
