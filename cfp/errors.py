class NotificationDeliveryError(Exception):
    """A single notification could not be handed to the mail queue."""

    def __init__(self, routing_key, reason):
        super().__init__(f"Could not publish '{routing_key}': {reason}")
        self.routing_key = routing_key
        self.reason = reason
