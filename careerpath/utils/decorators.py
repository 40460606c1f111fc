from functools import wraps
from flask import request
from careerpath.auth import decode_token
from careerpath.errors import Forbidden, Unauthorized
from careerpath.extensions import db
from careerpath.models import User

def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = None
        if 'Authorization' in request.headers:
            # Bearer <token>
            auth_header = request.headers['Authorization']
            if auth_header.startswith("Bearer "):
                token = auth_header.split(" ")[1]

        if not token:
            raise Unauthorized('Token is missing!')

        auth = decode_token(token)
        if db.session.get(User, auth.user_id) is None:
            raise Unauthorized('User not found')

        return f(auth, *args, **kwargs)

    return decorated

def role_required(*roles):
    """Stack under @token_required: the view receives the AuthContext first."""
    def decorator(f):
        @wraps(f)
        def decorated(auth, *args, **kwargs):
            if auth.role not in roles and not auth.is_admin:
                raise Forbidden(f"Requires role: {', '.join(roles)}")
            return f(auth, *args, **kwargs)
        return decorated
    return decorator
