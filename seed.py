from datetime import datetime, timedelta
from careerpath import create_app, db
from careerpath.models import User, Mentor, Course, CommunityEvent, StudyGroup, GroupMember
from werkzeug.security import generate_password_hash

app = create_app()

with app.app_context():
    db.create_all()

    # Create Admin
    admin = User.query.filter_by(username='admin').first()
    if not admin:
        admin = User(
            username='admin',
            email='admin@careerpath.in',
            password_hash=generate_password_hash('password', method='pbkdf2:sha256'),
            role='admin'
        )
        db.session.add(admin)
        db.session.flush()
        print("Admin created (admin/password)")

    # Create Mentors
    mentors_data = [
        {"name": "Dr. Priya Sharma", "bio": "AIIMS graduate guiding NEET aspirants", "streams": ["PCB"],
         "specialization": ["NEET Preparation", "Medical College Selection"], "expertise": ["Biology", "Chemistry"],
         "hourly_rate": 1500, "rating": 4.9},
        {"name": "Rahul Verma", "bio": "IIT Bombay alumnus, software engineer", "streams": ["PCM"],
         "specialization": ["JEE Preparation", "Technical Interviews"], "expertise": ["Physics", "Coding"],
         "hourly_rate": 2000, "rating": 4.8},
        {"name": "Neha Kapoor", "bio": "Chartered Accountant and finance coach", "streams": ["Commerce"],
         "specialization": ["CA Foundation", "Financial Planning"], "expertise": ["Accountancy"],
         "hourly_rate": 1200, "rating": 4.6, "availability": "Busy"},
        {"name": "Meera Iyer", "bio": "NLU graduate and corporate lawyer", "streams": ["Arts"],
         "specialization": ["CLAT Preparation"], "expertise": ["Legal Reasoning"],
         "hourly_rate": 1800, "rating": 4.7},
    ]

    for m_data in mentors_data:
        if not Mentor.query.filter_by(name=m_data['name']).first():
            db.session.add(Mentor(**m_data))
            print(f"Mentor {m_data['name']} created.")

    # Create Courses
    courses_data = [
        {"title": "Python for Data Science", "field": "Technology", "difficulty_level": "beginner",
         "skills_covered": ["Python", "Pandas"], "stream": "PCM", "is_featured": True},
        {"title": "NEET Biology Crash Course", "field": "Healthcare", "difficulty_level": "intermediate",
         "skills_covered": ["Botany", "Zoology"], "stream": "PCB", "is_featured": True},
        {"title": "Digital Marketing Basics", "field": "Business", "difficulty_level": "beginner",
         "skills_covered": ["SEO", "Social Media"], "stream": "Commerce"},
    ]

    for c_data in courses_data:
        if not Course.query.filter_by(title=c_data['title']).first():
            db.session.add(Course(**c_data))
            print(f"Course {c_data['title']} created.")

    if not CommunityEvent.query.first():
        db.session.add(CommunityEvent(title="Career Paths after 12th", event_date=datetime.utcnow() + timedelta(days=7),
                                      type="webinar", max_attendees=100, tags=["Guidance"], organizer_id=admin.id))
        group = StudyGroup(name="JEE Physics Circle", category="Engineering", level="intermediate",
                           max_members=20, moderator_id=admin.id)
        db.session.add(group)
        db.session.flush()
        db.session.add(GroupMember(group_id=group.id, user_id=admin.id, role='moderator'))
        print("Sample event and study group created.")

    db.session.commit()
    print("Database seeded successfully.")
