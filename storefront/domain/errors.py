# storefront/domain/errors.py
"""
Wyjatki domenowe. Dziedzicza po wbudowanych typach (ValueError, RuntimeError),
wiec routery mapuja je tak samo jak reszte serwisow.
"""


class CheckoutIncompleteError(ValueError):
    """Brak danych checkoutu (osobowe / dostawa) albo pusty koszyk. Nic nie wysylamy do bazy."""


class SchemaNotReadyError(RuntimeError):
    """Schemat bazy nie istnieje albo ma starsza wersje niz oczekiwana."""


class OrderSubmissionError(RuntimeError):
    """Blad zapisu zamowienia. Wiadomosc zawiera tekst bledu z bazy."""


class OrderHeaderError(OrderSubmissionError):
    pass


class OrderItemsError(OrderSubmissionError):
    pass


class StorageError(RuntimeError):
    pass
