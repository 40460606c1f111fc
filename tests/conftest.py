import pytest
from datetime import datetime, timedelta
from werkzeug.security import generate_password_hash
from careerpath import create_app, db
from careerpath.auth import AuthContext
from careerpath.config import TestingConfig
from careerpath.models import User, Mentor, CommunityEvent, StudyGroup
from careerpath.store import SqlStore

@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def store(app):
    return SqlStore()

def make_user(username, role='student', stream='PCM'):
    user = User(username=username, email=f'{username}@test.com', role=role, stream=stream,
                password_hash=generate_password_hash('password'))
    db.session.add(user)
    db.session.commit()
    return user

def as_participant(user):
    return AuthContext(user_id=user.id, role=user.role)

@pytest.fixture
def students(app):
    return [make_user(f'student{i}') for i in range(4)]

@pytest.fixture
def mentor(app):
    user = make_user('mentor', role='mentor')
    mentor = Mentor(user_id=user.id, name='Dr. Priya Sharma', bio='NEET mentor',
                    specialization=['NEET Preparation'], expertise=['Biology'],
                    streams=['PCB'], hourly_rate=1000, rating=4.8)
    db.session.add(mentor)
    db.session.commit()
    return mentor

@pytest.fixture
def organizer(app):
    return make_user('organizer')

def make_event(organizer, max_attendees=None):
    event = CommunityEvent(title='JEE Strategy Webinar', event_date=datetime.utcnow() + timedelta(days=7),
                           max_attendees=max_attendees, tags=['Engineering'], organizer_id=organizer.id)
    db.session.add(event)
    db.session.commit()
    return event

def make_group(moderator, max_members=None):
    group = StudyGroup(name='Physics Circle', category='Science', level='beginner',
                       max_members=max_members, moderator_id=moderator.id)
    db.session.add(group)
    db.session.commit()
    return group

def login(client, username, password='password'):
    response = client.post('/api/auth/login', json={'username': username, 'password': password})
    return {'Authorization': f"Bearer {response.get_json()['data']['token']}"}
