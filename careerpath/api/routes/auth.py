from flask import Blueprint, request, jsonify, current_app
from careerpath.auth import issue_token
from careerpath.errors import Unauthorized, ValidationError
from careerpath.extensions import db
from careerpath.models import User
from werkzeug.security import generate_password_hash, check_password_hash

auth_bp = Blueprint('auth', __name__)

STREAMS = ('PCM', 'PCB', 'Commerce', 'Arts', 'General')

@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    for key in ('username', 'email', 'password'):
        if not data.get(key):
            raise ValidationError(f"'{key}' is required")

    if User.query.filter_by(username=data['username']).first():
        raise ValidationError('Username already exists')
    if User.query.filter_by(email=data['email']).first():
        raise ValidationError('Email already exists')

    role = data.get('role', 'student')
    if role not in ('student', 'mentor'):
        raise ValidationError('Role must be student or mentor')
    stream = data.get('stream')
    if stream is not None and stream not in STREAMS:
        raise ValidationError(f"Stream must be one of {', '.join(STREAMS)}")

    user = User(
        username=data['username'],
        email=data['email'],
        password_hash=generate_password_hash(data['password']),
        full_name=data.get('full_name'),
        role=role,
        stream=stream
    )
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"Registered user {user.id} ({role})")
    return jsonify({'data': user.to_dict()}), 201

@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = User.query.filter_by(username=data.get('username')).first()

    if not user or not user.password_hash or not check_password_hash(user.password_hash, data.get('password') or ''):
        raise Unauthorized('Invalid credentials')

    return jsonify({'data': {'token': issue_token(user), 'username': user.username, 'role': user.role}})
