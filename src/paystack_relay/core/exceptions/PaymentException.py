from typing import Optional


class PaymentException(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PaymentValidationException(PaymentException):
    status_code = 400

    def __init__(self, message: str = "Email and amount are required"):
        super().__init__(message)


class PaymentGatewayException(PaymentException):
    """
    Raised when a Paystack call fails: network error, timeout, non-2xx
    status or a body that is not JSON. `error` carries Paystack's own
    message when it sent one.
    """
    status_code = 500

    def __init__(self, message: str = "Payment gateway error", error: Optional[str] = None):
        super().__init__(message)
        self.error = error or message
