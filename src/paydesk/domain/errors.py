"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class AllocationError(DomainError):
    """The invoice number sequence could not issue a number."""


class StorageError(DomainError):
    """The record store rejected or could not complete a write."""


class RenderError(DomainError):
    """An invoice document could not be drawn or encoded."""


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def invoice_not_found(invoice_ref: int | str) -> str:
    """Return message for missing invoice by ID or number."""
    return f"Invoice {invoice_ref} not found"


def bank_account_not_found(reference: int | str) -> str:
    """Return message for a bank account selection outside the client's list."""
    return f"Bank account {reference!r} not found for client"


def platform_not_found(reference: int | str) -> str:
    """Return message for a platform selection outside the client's list."""
    return f"Platform {reference!r} not found for client"


def duplicate_client_name(name: str) -> str:
    """Return message for duplicate client names."""
    return f"Client with name '{name}' already exists"


def transaction_already_invoiced(transaction_id: int, invoice_number: str) -> str:
    """Return message when a transaction already has an invoice."""
    return f"Transaction {transaction_id} is already invoiced as {invoice_number}"


def client_delete_blocked(
    client_id: int, transaction_count: int, invoice_count: int
) -> str:
    """Return message when client has dependent transactions or invoices."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if invoice_count > 0:
        parts.append(f"{invoice_count} invoice{'s' if invoice_count != 1 else ''}")
    return (
        f"Cannot delete client {client_id}: it has {', '.join(parts)}. "
        "Transactions and invoices are kept for the record."
    )
