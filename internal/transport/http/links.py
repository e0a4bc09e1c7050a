"""
Hypermedia links for payment resources.

Pure presentation helpers: they only see identifiers and a refundable flag,
never the payment service.
"""
from typing import Dict

from internal.transport.http.dto import LinkDTO


PAYMENTS_PATH = "/api/v1/payments"


class PaymentLinks:
    """
    Builds ``_links`` mappings for payment responses.

    Attributes:
        root_url: Scheme and host the links are rooted at, without trailing slash.
    """

    def __init__(self, root_url: str = "") -> None:
        self.root_url = root_url.rstrip("/")

    def _href(self, path: str) -> LinkDTO:
        return LinkDTO(href=f"{self.root_url}{PAYMENTS_PATH}{path}")

    def payment(self, payment_id: int) -> LinkDTO:
        return self._href(f"/{payment_id}")

    def refund(self, payment_id: int) -> LinkDTO:
        return self._href(f"/{payment_id}/refund")

    def user_payments(self, user_id: int) -> LinkDTO:
        return self._href(f"/user/{user_id}")

    def process(self) -> LinkDTO:
        return self._href("/process")

    def for_processed(self, payment_id: int, refundable: bool) -> Dict[str, LinkDTO]:
        """Links of a freshly processed payment."""
        links = {"self": self.payment(payment_id)}
        if refundable:
            links["refund"] = self.refund(payment_id)
        return links

    def for_payment(self, payment_id: int, user_id: int, refundable: bool) -> Dict[str, LinkDTO]:
        """Links of a payment fetched by ID."""
        links = self.for_processed(payment_id, refundable)
        links["user-payments"] = self.user_payments(user_id)
        return links

    def for_collection(self, user_id: int) -> Dict[str, LinkDTO]:
        """Links of a user's payment collection."""
        return {
            "self": self.user_payments(user_id),
            "process-payment": self.process(),
        }

    def for_refunded(self, payment_id: int, user_id: int) -> Dict[str, LinkDTO]:
        """Links returned by a refund."""
        return {
            "self": self.refund(payment_id),
            "payment": self.payment(payment_id),
            "user-payments": self.user_payments(user_id),
        }
