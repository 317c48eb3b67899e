import logging
import smtplib
import xml.etree.ElementTree as ET
from email.message import EmailMessage

import pika

from cfp import config
from cfp.producer.postman import ROUTING_KEYS, declare_mail_queues

logging.basicConfig(level=logging.INFO)


def parse_message(message):
    try:
        root = ET.fromstring(message)
        operation = root.find('info/operation').text.strip()
        mail = root.find('mail')
        to = mail.find('to').text.strip()
        subject = mail.find('subject').text
        body = mail.find('body').text or ''
        return operation, to, subject, body
    except (ET.ParseError, AttributeError) as e:
        logging.error(f"Failed to parse XML message: {e}")
        return None, None, None, None


def build_mail(to, subject, body):
    mail = EmailMessage()
    mail['From'] = config.MAIL_SENDER
    mail['To'] = to
    mail['Subject'] = subject
    mail.set_content(body)
    return mail


def send_mail(to, subject, body):
    with smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT) as smtp:
        smtp.send_message(build_mail(to, subject, body))
    logging.info(f"Mail '{subject}' sent to {to}")


def callback(ch, method, properties, body):
    operation, to, subject, text = parse_message(body)

    if not all([operation, to, subject]):
        logging.error("Malformed mail message, acknowledging anyway")
        ch.basic_ack(delivery_tag=method.delivery_tag)
        return

    if operation not in ROUTING_KEYS:
        logging.error(f"Unsupported mail kind: {operation}")
    else:
        try:
            send_mail(to, subject, text)
        except (smtplib.SMTPException, OSError) as e:
            logging.error(f"Sending '{operation}' mail to {to} failed: {e}")

    ch.basic_ack(delivery_tag=method.delivery_tag)


def main():
    credentials = pika.PlainCredentials(username=config.RABBITMQ_USERNAME, password=config.RABBITMQ_PASSWORD)
    parameters = pika.ConnectionParameters(
        host=config.RABBITMQ_HOST,
        port=config.RABBITMQ_PORT,
        virtual_host=config.RABBITMQ_VHOST,
        credentials=credentials
    )
    connection = pika.BlockingConnection(parameters)
    channel = connection.channel()
    declare_mail_queues(channel)
    for queue in ROUTING_KEYS.values():
        channel.basic_consume(queue=queue, on_message_callback=callback)
    logging.info("Waiting for mail messages. To exit press CTRL+C")
    try:
        channel.start_consuming()
    except KeyboardInterrupt:
        logging.info("Mailer stopped by user")
    finally:
        connection.close()


if __name__ == "__main__":
    main()
