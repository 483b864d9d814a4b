from src.service.flight_booking.app.dto.booking_result import (
    CancellationResult,
    PaymentReceipt,
    ReservationDetail,
    SearchResult,
)

__all__ = [
    'CancellationResult',
    'PaymentReceipt',
    'ReservationDetail',
    'SearchResult',
]
