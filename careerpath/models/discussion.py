from careerpath.extensions import db
from datetime import datetime

class Discussion(db.Model):
    __tablename__ = 'community_discussions'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(64), index=True)
    tags = db.Column(db.JSON, default=list)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    likes_count = db.Column(db.Integer, default=0, nullable=False)
    replies_count = db.Column(db.Integer, default=0, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'category': self.category,
            'tags': self.tags or [],
            'author_id': self.author_id,
            'likes_count': self.likes_count,
            'replies_count': self.replies_count,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }


class DiscussionLike(db.Model):
    __tablename__ = 'discussion_likes'

    id = db.Column(db.Integer, primary_key=True)
    discussion_id = db.Column(db.Integer, db.ForeignKey('community_discussions.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('discussion_id', 'user_id', name='uq_discussion_like_user'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'discussion_id': self.discussion_id,
            'user_id': self.user_id
        }
