from careerpath.extensions import db
from datetime import datetime

class Booking(db.Model):
    __tablename__ = 'bookings'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    mentor_id = db.Column(db.Integer, db.ForeignKey('mentors.id'), nullable=False, index=True)

    scheduled_at = db.Column(db.DateTime, nullable=False, index=True) # UTC
    duration_minutes = db.Column(db.Integer, nullable=False, default=60)
    session_type = db.Column(db.String(64), default='career-guidance')
    description = db.Column(db.Text, nullable=True)

    status = db.Column(db.String(20), default='pending') # pending, confirmed, completed, cancelled
    total_amount = db.Column(db.Float, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'student_id': self.student_id,
            'mentor_id': self.mentor_id,
            'scheduled_at': self.scheduled_at.isoformat(),
            'duration_minutes': self.duration_minutes,
            'session_type': self.session_type,
            'description': self.description,
            'status': self.status,
            'total_amount': self.total_amount
        }
