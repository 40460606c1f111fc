from dataclasses import dataclass
from datetime import datetime, timedelta

import jwt
from flask import current_app

from careerpath.errors import Unauthorized


@dataclass(frozen=True)
class AuthContext:
    """The authenticated participant every core operation acts on behalf of."""
    user_id: int
    role: str = 'student'

    @property
    def is_admin(self):
        return self.role == 'admin'


def issue_token(user):
    return jwt.encode({
        'user_id': user.id,
        'role': user.role,
        'exp': datetime.utcnow() + timedelta(hours=current_app.config['TOKEN_EXPIRY_HOURS'])
    }, current_app.config['SECRET_KEY'], algorithm="HS256")


def decode_token(token):
    try:
        data = jwt.decode(token, current_app.config['SECRET_KEY'], algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise Unauthorized('Token has expired')
    except jwt.InvalidTokenError:
        raise Unauthorized('Token is invalid')
    return AuthContext(user_id=data['user_id'], role=data.get('role', 'student'))
