"""Mentor and course search.

Every criterion is optional and they combine with AND. Results keep the
order of the input list; nothing is ranked.
"""
from careerpath.config import Config

ANY = (None, '', 'all')

PRICE_RANGES = ('budget', 'mid', 'premium')


def _is_set(value):
    return value not in ANY


def _text_in(needle, *haystacks):
    """Case-insensitive substring match against strings or lists of strings."""
    needle = needle.lower()
    for hay in haystacks:
        if isinstance(hay, (list, tuple)):
            if any(needle in (item or '').lower() for item in hay):
                return True
        elif needle in (hay or '').lower():
            return True
    return False


def price_bucket(rate, budget_max=Config.PRICE_BUDGET_MAX, premium_min=Config.PRICE_PREMIUM_MIN):
    if rate < budget_max:
        return 'budget'
    if rate < premium_min:
        return 'mid'
    return 'premium'


def filter_mentors(mentors, query=None, specialization=None, stream=None,
                   price_range=None, min_rating=None, availability=None):
    """Narrow a list of mentor dicts (see ``Mentor.to_dict``)."""
    if _is_set(price_range) and price_range not in PRICE_RANGES:
        raise ValueError(f"Unknown price range '{price_range}'")
    if _is_set(min_rating):
        min_rating = float(min_rating)

    def keep(mentor):
        if _is_set(query) and not _text_in(query, mentor['name'], mentor['bio'],
                                           mentor['specialization'], mentor['expertise']):
            return False
        if _is_set(stream) and stream not in mentor['streams']:
            return False
        if _is_set(specialization) and not _text_in(specialization, mentor['specialization']):
            return False
        if _is_set(price_range) and price_bucket(mentor['hourly_rate']) != price_range:
            return False
        if _is_set(min_rating) and (mentor['rating'] or 0) < min_rating:
            return False
        if _is_set(availability) and mentor['availability'] != availability:
            return False
        return True

    return [m for m in mentors if keep(m)]


def filter_courses(courses, query=None, field=None, level=None, stream=None, featured=None):
    """Narrow a list of course dicts (see ``Course.to_dict``)."""
    def keep(course):
        if _is_set(query) and not _text_in(query, course['title'], course['description'],
                                           course['skills_covered']):
            return False
        if _is_set(field) and course['field'].lower() != field.lower():
            return False
        if _is_set(level) and course['difficulty_level'] != level:
            return False
        if _is_set(stream) and course['stream'] != stream:
            return False
        if featured and not course['is_featured']:
            return False
        return True

    return [c for c in courses if keep(c)]


def specializations(mentors):
    """Distinct specializations across mentors, first-seen order."""
    seen = []
    for mentor in mentors:
        for spec in mentor['specialization']:
            if spec not in seen:
                seen.append(spec)
    return seen
