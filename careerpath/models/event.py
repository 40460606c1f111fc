from careerpath.extensions import db
from datetime import datetime

class CommunityEvent(db.Model):
    __tablename__ = 'community_events'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    event_date = db.Column(db.DateTime, nullable=False, index=True)
    type = db.Column(db.String(32), default='webinar') # webinar, workshop, meetup
    location = db.Column(db.String(255), nullable=True)
    max_attendees = db.Column(db.Integer, nullable=True) # NULL means no limit
    tags = db.Column(db.JSON, default=list)
    requirements = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), default='active')
    organizer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'event_date': self.event_date.isoformat(),
            'type': self.type,
            'location': self.location,
            'max_attendees': self.max_attendees,
            'tags': self.tags or [],
            'requirements': self.requirements,
            'status': self.status,
            'organizer_id': self.organizer_id
        }


class EventRegistration(db.Model):
    __tablename__ = 'event_registrations'

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey('community_events.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    status = db.Column(db.String(20), default='confirmed') # confirmed, pending, cancelled
    registered_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('event_id', 'user_id', name='uq_event_registration_user'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'event_id': self.event_id,
            'user_id': self.user_id,
            'status': self.status,
            'registered_at': self.registered_at.isoformat() if self.registered_at else None
        }
