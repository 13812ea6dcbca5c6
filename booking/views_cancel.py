# booking/views_cancel.py
#
# Purpose:
# - Public "Cancel Booking" flow, keyed by the cancellation token the
#   customer received on the confirmation page and e-mail:
#   * GET  /bookings/cancel/                  -> token lookup form
#   * GET  /bookings/<token>/cancel/          -> booking summary + cancel button
#   * POST /bookings/<token>/cancel/submit/   -> cancel by rules
#
# Notes:
# - BookingManager enforces the policy (24-hour cutoff, confirmed only).
#   Saving the cancelled status triggers notifications/signals.py e-mails.
#
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_http_methods

from .exceptions import BookingError, CancellationNotAllowed
from .services.booking_manager import BookingManager
from .services.slot_utils import can_cancel


@require_http_methods(["GET"])
def cancel_lookup(request):
    """
    Render the lookup form; a submitted ?token= goes straight to the
    booking's cancel page.
    """
    token = (request.GET.get("token") or "").strip()
    if token:
        return redirect("cancel_booking_page", token=token)
    return render(request, "booking/cancel_lookup.html")


@require_http_methods(["GET"])
def cancel_booking_page(request, token):
    try:
        booking = BookingManager().get_booking(token)
    except BookingError as e:
        return render(request, "booking/error.html", {"message": e.message}, status=e.status_code)

    return render(request, "booking/cancel_booking.html", _context(booking))


@require_http_methods(["POST"])
def cancel_booking_action(request, token):
    """
    POST handler to cancel a booking.

    Behavior:
      - 404 page for an unknown token
      - 400 with the reason when the booking is cancelled already or starts
        in less than 24 hours
      - otherwise the booking is cancelled and the page says so
    """
    manager = BookingManager()
    try:
        booking = manager.cancel_booking(token)
    except CancellationNotAllowed as e:
        booking = manager.get_booking(token)
        ctx = _context(booking)
        ctx["error"] = e.message
        return render(request, "booking/cancel_booking.html", ctx, status=e.status_code)
    except BookingError as e:
        return render(request, "booking/error.html", {"message": e.message}, status=e.status_code)

    ctx = _context(booking)
    ctx["message"] = "Your booking has been cancelled."
    return render(request, "booking/cancel_booking.html", ctx)


def _context(booking):
    return {
        "booking": booking,
        "cancellable": not booking.is_cancelled and can_cancel(booking.starts_at, timezone.now()),
    }
