from flask import Blueprint, request, jsonify, current_app
from careerpath.errors import ValidationError
from careerpath.services.booking_service import BookingService
from careerpath.store import SqlStore
from careerpath.utils.decorators import token_required, role_required

bookings_bp = Blueprint('bookings', __name__)

def _service():
    return BookingService(SqlStore(),
                          timezone=current_app.config['TIMEZONE'],
                          max_minutes=current_app.config['MAX_BOOKING_MINUTES'])

@bookings_bp.route('', methods=['POST'])
@token_required
def create_booking(auth):
    data = request.get_json(silent=True) or {}
    if 'mentor_id' not in data:
        raise ValidationError("'mentor_id' is required")

    booking = _service().create_booking(
        auth,
        mentor_id=data['mentor_id'],
        scheduled_at=data.get('scheduled_at'),
        duration_minutes=data.get('duration_minutes', 60),
        session_type=data.get('session_type', 'career-guidance'),
        description=data.get('description')
    )
    return jsonify({'data': booking}), 201

@bookings_bp.route('', methods=['GET'])
@token_required
def list_bookings(auth):
    bookings = _service().list_bookings(auth, tab=request.args.get('tab'))
    return jsonify({'data': bookings})

@bookings_bp.route('/<int:booking_id>/cancel', methods=['POST'])
@token_required
def cancel_booking(auth, booking_id):
    return jsonify({'data': _service().cancel_booking(auth, booking_id)})

@bookings_bp.route('/<int:booking_id>/confirm', methods=['POST'])
@token_required
@role_required('mentor')
def confirm_booking(auth, booking_id):
    return jsonify({'data': _service().confirm_booking(auth, booking_id)})

@bookings_bp.route('/<int:booking_id>/complete', methods=['POST'])
@token_required
@role_required('mentor')
def complete_booking(auth, booking_id):
    return jsonify({'data': _service().complete_booking(auth, booking_id)})
