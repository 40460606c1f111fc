from careerpath.extensions import db
from datetime import datetime

class StudyGroup(db.Model):
    __tablename__ = 'study_groups'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(64), index=True)
    level = db.Column(db.String(32)) # beginner, intermediate, advanced
    topics = db.Column(db.JSON, default=list)
    meeting_schedule = db.Column(db.String(128))
    max_members = db.Column(db.Integer, nullable=True) # NULL means no limit
    requirements = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), default='active')
    moderator_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'level': self.level,
            'topics': self.topics or [],
            'meeting_schedule': self.meeting_schedule,
            'max_members': self.max_members,
            'requirements': self.requirements,
            'status': self.status,
            'moderator_id': self.moderator_id,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }


class GroupMember(db.Model):
    __tablename__ = 'group_members'

    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.Integer, db.ForeignKey('study_groups.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    role = db.Column(db.String(20), default='member') # member, moderator
    joined_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('group_id', 'user_id', name='uq_group_member_user'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'group_id': self.group_id,
            'user_id': self.user_id,
            'role': self.role,
            'joined_at': self.joined_at.isoformat() if self.joined_at else None
        }
