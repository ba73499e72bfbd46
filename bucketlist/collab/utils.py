"""Utility functions for the collaboration blueprint."""

import logging
import threading

from bucketlist.utils import send_email


def send_invite_email_background(app, email_data):
    """Send a bucket invite email in a background thread."""

    def task():
        with app.app_context():
            try:
                send_email(**email_data)
                logging.info(f"Invite email sent to {email_data['to']}")
            except Exception as e:
                logging.error(f"Invite email to {email_data['to']} failed: {e}")

    thread = threading.Thread(target=task)
    thread.start()
    return thread
