"""
Unit tests for payment hypermedia links.
"""
from internal.transport.http.links import PaymentLinks


def hrefs(links: dict) -> dict:
    return {rel: link.href for rel, link in links.items()}


class TestPaymentLinks:
    """Tests for PaymentLinks."""

    def setup_method(self):
        self.links = PaymentLinks("http://pay.local/")

    def test_processed_completed_payment(self):
        assert hrefs(self.links.for_processed(10, refundable=True)) == {
            "self": "http://pay.local/api/v1/payments/10",
            "refund": "http://pay.local/api/v1/payments/10/refund",
        }

    def test_processed_payment_not_refundable(self):
        assert list(self.links.for_processed(10, refundable=False)) == ["self"]

    def test_fetched_payment(self):
        links = hrefs(self.links.for_payment(10, 3, refundable=False))

        assert links == {
            "self": "http://pay.local/api/v1/payments/10",
            "user-payments": "http://pay.local/api/v1/payments/user/3",
        }

    def test_collection(self):
        assert hrefs(self.links.for_collection(3)) == {
            "self": "http://pay.local/api/v1/payments/user/3",
            "process-payment": "http://pay.local/api/v1/payments/process",
        }

    def test_refunded_payment(self):
        assert hrefs(self.links.for_refunded(10, 3)) == {
            "self": "http://pay.local/api/v1/payments/10/refund",
            "payment": "http://pay.local/api/v1/payments/10",
            "user-payments": "http://pay.local/api/v1/payments/user/3",
        }

    def test_relative_links_without_root(self):
        assert PaymentLinks().payment(1).href == "/api/v1/payments/1"
