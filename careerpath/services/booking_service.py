import logging
from datetime import datetime

import pytz

from careerpath.config import Config
from careerpath.errors import (Forbidden, InvalidTransition, ProviderNotFound,
                               ResourceNotFound, ValidationError)

logger = logging.getLogger(__name__)

PENDING = 'pending'
CONFIRMED = 'confirmed'
COMPLETED = 'completed'
CANCELLED = 'cancelled'

# completed and cancelled are terminal
TRANSITIONS = {
    PENDING: {CONFIRMED, CANCELLED},
    CONFIRMED: {COMPLETED, CANCELLED},
    COMPLETED: set(),
    CANCELLED: set(),
}

BOOKING_TABS = ('upcoming', 'past', 'cancelled')


def compute_total(hourly_rate, duration_minutes):
    """Session price: hourly rate pro-rated to the booked minutes."""
    return hourly_rate * duration_minutes / 60


def to_utc(value, tz_name):
    """Parse an ISO string or datetime into naive UTC.

    Naive input is read as local time in ``tz_name``.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            raise ValidationError(f"Invalid start time: {value}")
    if value.tzinfo is None:
        value = pytz.timezone(tz_name).localize(value)
    return value.astimezone(pytz.utc).replace(tzinfo=None)


class BookingService:

    def __init__(self, store, timezone=Config.TIMEZONE, max_minutes=Config.MAX_BOOKING_MINUTES):
        self.store = store
        self.timezone = timezone
        self.max_minutes = max_minutes

    def _get_mentor(self, mentor_id):
        rows = self.store.select('mentors', {'id': mentor_id})
        if not rows:
            raise ProviderNotFound()
        return rows[0]

    def _get_booking(self, booking_id):
        rows = self.store.select('bookings', {'id': booking_id})
        if not rows:
            raise ResourceNotFound("Booking not found.")
        return rows[0]

    def _mentor_id_for(self, participant):
        rows = self.store.select('mentors', {'user_id': participant.user_id})
        return rows[0]['id'] if rows else None

    def create_booking(self, participant, mentor_id, scheduled_at, duration_minutes,
                       session_type='career-guidance', description=None):
        """
        Book a session with a mentor. The booking starts out pending and is
        priced from the mentor's hourly rate.
        """
        if scheduled_at is None:
            raise ValidationError("Start time is required.")
        try:
            duration_minutes = int(duration_minutes)
        except (TypeError, ValueError):
            raise ValidationError("Duration must be a whole number of minutes.")
        if duration_minutes <= 0 or duration_minutes > self.max_minutes:
            raise ValidationError(f"Duration must be between 1 and {self.max_minutes} minutes.")

        mentor = self._get_mentor(mentor_id)
        start = to_utc(scheduled_at, self.timezone)

        # No overlap check: two students may request the same slot
        booking = self.store.insert('bookings', {
            'student_id': participant.user_id,
            'mentor_id': mentor['id'],
            'scheduled_at': start,
            'duration_minutes': duration_minutes,
            'session_type': session_type or 'career-guidance',
            'description': description,
            'status': PENDING,
            'total_amount': compute_total(mentor['hourly_rate'], duration_minutes),
        })
        logger.info("Booking %s created for student %s with mentor %s",
                    booking['id'], participant.user_id, mentor['id'])
        return booking

    def _transition(self, booking, new_status):
        current = booking['status']
        if new_status not in TRANSITIONS.get(current, set()):
            raise InvalidTransition(f"Cannot move booking from {current} to {new_status}.")
        updated = self.store.update('bookings', {'id': booking['id'], 'status': current},
                                    {'status': new_status})
        if not updated:
            # Status changed underneath us between read and write
            raise InvalidTransition(f"Booking is no longer {current}.")
        return updated[0]

    def cancel_booking(self, participant, booking_id):
        """Cancel a pending or confirmed booking. Student, mentor or admin only."""
        booking = self._get_booking(booking_id)
        is_party = (booking['student_id'] == participant.user_id
                    or booking['mentor_id'] == self._mentor_id_for(participant))
        if not (is_party or participant.is_admin):
            raise Forbidden("Unauthorized.")
        return self._transition(booking, CANCELLED)

    def _require_mentor_of(self, participant, booking):
        if participant.is_admin:
            return
        if booking['mentor_id'] != self._mentor_id_for(participant):
            raise Forbidden("Only the booked mentor can do this.")

    def confirm_booking(self, participant, booking_id):
        booking = self._get_booking(booking_id)
        self._require_mentor_of(participant, booking)
        return self._transition(booking, CONFIRMED)

    def complete_booking(self, participant, booking_id):
        booking = self._get_booking(booking_id)
        self._require_mentor_of(participant, booking)
        updated = self._transition(booking, COMPLETED)
        self.store.rpc('increment_mentor_sessions', {'mentor_id': booking['mentor_id']})
        return updated

    def list_bookings(self, participant, tab=None, now=None):
        """Bookings the participant takes part in, as student or as mentor.

        tab: 'upcoming' (future, not cancelled), 'past' (started or completed),
        'cancelled'; None returns everything.
        """
        if tab is not None and tab not in BOOKING_TABS:
            raise ValidationError(f"Unknown tab '{tab}'.")

        mentor_id = self._mentor_id_for(participant)
        if mentor_id is not None:
            bookings = self.store.select('bookings', {'mentor_id': mentor_id}, order_by='scheduled_at')
        else:
            bookings = self.store.select('bookings', {'student_id': participant.user_id},
                                         order_by='scheduled_at')

        now = now or datetime.utcnow()

        def starts(b):
            return datetime.fromisoformat(b['scheduled_at'])

        if tab == 'upcoming':
            return [b for b in bookings if starts(b) > now and b['status'] != CANCELLED]
        if tab == 'past':
            return [b for b in bookings if starts(b) <= now or b['status'] == COMPLETED]
        if tab == 'cancelled':
            return [b for b in bookings if b['status'] == CANCELLED]
        return bookings
