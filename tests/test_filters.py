import pytest
from careerpath.services.filter_service import filter_courses, filter_mentors, price_bucket, specializations

def mentor(id, streams, rating, rate=1500, name='Mentor', bio='', spec=None, skills=None, availability='Available'):
    return {'id': id, 'name': name, 'bio': bio, 'streams': streams, 'rating': rating,
            'hourly_rate': rate, 'specialization': spec or [], 'expertise': skills or [],
            'availability': availability}

MENTORS = [
    mentor(1, ['PCM'], 4.9, name='Rahul Verma', spec=['JEE Preparation'], skills=['Physics']),
    mentor(2, ['PCB'], 4.8, name='Priya Sharma', spec=['NEET Preparation'], skills=['Biology']),
    mentor(3, ['PCM', 'Commerce'], 4.2, name='Anita Rao', spec=['Data Science']),
    mentor(4, ['PCM'], 4.5, rate=2500, name='Vikram Singh', bio='Ex-Google engineer'),
    mentor(5, ['Arts'], 4.7, rate=1200, name='Meera Iyer', spec=['Law Entrance']),
    mentor(6, ['PCM'], 3.9, rate=1000, name='Arjun Das', availability='Busy'),
    mentor(7, ['Commerce'], 4.6, name='Neha Kapoor', spec=['CA Foundation']),
    mentor(8, ['PCM', 'PCB'], 4.7, rate=1800, name='Sanjay Gupta', skills=['Chemistry']),
    mentor(9, ['PCB'], 4.4, name='Kavya Nair'),
    mentor(10, ['PCM'], 4.6, rate=2200, name='Farhan Ali', spec=['Software Engineering'], availability='Busy'),
]

def ids(rows):
    return [r['id'] for r in rows]

def test_stream_and_min_rating_preserve_order():
    result = filter_mentors(MENTORS, stream='PCM', min_rating=4.5)
    assert ids(result) == [1, 4, 8, 10]
    assert all('PCM' in m['streams'] and m['rating'] >= 4.5 for m in result)

def test_no_criteria_returns_everything():
    assert filter_mentors(MENTORS) == MENTORS
    assert filter_mentors(MENTORS, stream='all', price_range='all', availability='') == MENTORS

def test_text_search_is_case_insensitive_across_fields():
    assert ids(filter_mentors(MENTORS, query='neet')) == [2]
    assert ids(filter_mentors(MENTORS, query='GOOGLE')) == [4]
    assert ids(filter_mentors(MENTORS, query='chem')) == [8]
    assert ids(filter_mentors(MENTORS, query='sharma')) == [2]

def test_price_buckets():
    assert price_bucket(1499) == 'budget'
    assert price_bucket(1500) == 'mid'
    assert price_bucket(2000) == 'premium'
    assert ids(filter_mentors(MENTORS, price_range='budget')) == [5, 6]
    assert ids(filter_mentors(MENTORS, price_range='premium')) == [4, 10]

def test_unknown_price_range():
    with pytest.raises(ValueError):
        filter_mentors(MENTORS, price_range='cheap')

def test_specialization_and_availability():
    assert ids(filter_mentors(MENTORS, specialization='preparation')) == [1, 2]
    assert ids(filter_mentors(MENTORS, availability='Busy')) == [6, 10]
    assert ids(filter_mentors(MENTORS, availability='Busy', min_rating='4.0')) == [10]

def test_specializations_first_seen_order():
    assert specializations(MENTORS)[:3] == ['JEE Preparation', 'NEET Preparation', 'Data Science']

COURSES = [
    {'id': 1, 'title': 'Python for Data Science', 'description': 'Pandas and NumPy', 'field': 'Technology',
     'difficulty_level': 'beginner', 'skills_covered': ['Python', 'Statistics'], 'stream': 'PCM', 'is_featured': True},
    {'id': 2, 'title': 'Financial Accounting', 'description': 'Ledgers and balance sheets', 'field': 'Finance',
     'difficulty_level': 'intermediate', 'skills_covered': ['Tally'], 'stream': 'Commerce', 'is_featured': False},
    {'id': 3, 'title': 'Human Anatomy', 'description': 'For NEET aspirants', 'field': 'Healthcare',
     'difficulty_level': 'advanced', 'skills_covered': ['Biology'], 'stream': 'PCB', 'is_featured': True},
]

def test_course_filters():
    assert ids(filter_courses(COURSES, query='statistics')) == [1]
    assert ids(filter_courses(COURSES, field='finance')) == [2]
    assert ids(filter_courses(COURSES, level='advanced')) == [3]
    assert ids(filter_courses(COURSES, featured=True)) == [1, 3]
    assert ids(filter_courses(COURSES, stream='PCB', query='neet')) == [3]
