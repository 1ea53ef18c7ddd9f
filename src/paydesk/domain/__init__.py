"""Domain layer for paydesk application."""

__all__ = ["ClientService", "TransactionService", "InvoiceService"]


# Services are imported lazily so that the database layer can import
# paydesk.domain.entities without pulling the services in first.
def __getattr__(name):
    if name == "ClientService":
        from paydesk.domain.client import ClientService
        return ClientService
    if name == "TransactionService":
        from paydesk.domain.transaction import TransactionService
        return TransactionService
    if name == "InvoiceService":
        from paydesk.domain.invoice import InvoiceService
        return InvoiceService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
