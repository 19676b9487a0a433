from abc import ABC, abstractmethod

class PaymentGateway(ABC):
    @abstractmethod
    def create_checkout(self, amount, success_url, cancel_url, metadata):
        pass

    @abstractmethod
    def refund(self, payment_reference):
        pass

    @abstractmethod
    def parse_webhook(self, payload, signature):
        pass
