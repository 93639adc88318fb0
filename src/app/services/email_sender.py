from abc import ABC, abstractmethod


class EmailDeliveryError(Exception):
    """
    Raised when the mail transport fails to accept a message.

    reason is one of AUTH, HOST_NOT_FOUND, CONNECTION, TIMEOUT, SMTP.
    """

    AUTH = "AUTH"
    HOST_NOT_FOUND = "HOST_NOT_FOUND"
    CONNECTION = "CONNECTION"
    TIMEOUT = "TIMEOUT"
    SMTP = "SMTP"

    def __init__(self, reason: str, message: str):
        self.reason = reason
        super().__init__(message)


class IEmailSender(ABC):
    """Outbound transactional email - application layer"""

    @abstractmethod
    async def send_password_reset(self, to_email: str, reset_url: str) -> None:
        """
        Submit the password reset email.

        Returns once the transport accepted the message (not on delivery).

        Raises:
            EmailDeliveryError: transport or authentication failure
        """
        pass
