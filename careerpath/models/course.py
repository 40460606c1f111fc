from careerpath.extensions import db

class Course(db.Model):
    __tablename__ = 'courses'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, default='')
    field = db.Column(db.String(64), nullable=False)
    difficulty_level = db.Column(db.String(20), default='beginner') # beginner, intermediate, advanced
    skills_covered = db.Column(db.JSON, default=list)
    stream = db.Column(db.String(32), default='General')
    duration_weeks = db.Column(db.Integer)
    is_featured = db.Column(db.Boolean, default=False)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description or '',
            'field': self.field,
            'difficulty_level': self.difficulty_level,
            'skills_covered': self.skills_covered or [],
            'stream': self.stream,
            'duration_weeks': self.duration_weeks,
            'is_featured': self.is_featured
        }
