from careerpath.extensions import db

class Mentor(db.Model):
    __tablename__ = 'mentors'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, unique=True)

    name = db.Column(db.String(128), nullable=False)
    bio = db.Column(db.Text, default='')
    location = db.Column(db.String(128))
    specialization = db.Column(db.JSON, default=list) # e.g. ["NEET Preparation", "Medical College Selection"]
    expertise = db.Column(db.JSON, default=list)
    streams = db.Column(db.JSON, default=list) # e.g. ["PCB", "PCM"]

    hourly_rate = db.Column(db.Integer, nullable=False) # INR
    rating = db.Column(db.Float, default=0.0)
    total_sessions = db.Column(db.Integer, default=0)
    availability = db.Column(db.String(20), default='Available') # Available, Busy, Unavailable

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'bio': self.bio or '',
            'location': self.location,
            'specialization': self.specialization or [],
            'expertise': self.expertise or [],
            'streams': self.streams or [],
            'hourly_rate': self.hourly_rate,
            'rating': self.rating,
            'total_sessions': self.total_sessions,
            'availability': self.availability
        }
