class WebhookException(Exception):
    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidSignatureException(WebhookException):
    def __init__(self, message: str = "Invalid signature"):
        super().__init__(message)


class InvalidWebhookPayloadException(WebhookException):
    def __init__(self, message: str = "Invalid payload"):
        super().__init__(message)
