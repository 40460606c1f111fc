from flask import Blueprint, request, jsonify
from careerpath.errors import ProviderNotFound, ValidationError
from careerpath.services.filter_service import filter_courses, filter_mentors, specializations
from careerpath.store import SqlStore

catalog_bp = Blueprint('catalog', __name__)

@catalog_bp.route('/mentors', methods=['GET'])
def search_mentors():
    args = request.args
    mentors = SqlStore().select('mentors', order_by='id')
    try:
        filtered = filter_mentors(
            mentors,
            query=args.get('q'),
            specialization=args.get('specialization'),
            stream=args.get('stream'),
            price_range=args.get('price_range'),
            min_rating=args.get('min_rating'),
            availability=args.get('availability')
        )
    except ValueError as e:
        raise ValidationError(str(e))

    return jsonify({'data': {
        'mentors': filtered,
        'total': len(mentors),
        'specializations': specializations(mentors)
    }})

@catalog_bp.route('/mentors/<int:mentor_id>', methods=['GET'])
def get_mentor(mentor_id):
    rows = SqlStore().select('mentors', {'id': mentor_id})
    if not rows:
        raise ProviderNotFound()
    return jsonify({'data': rows[0]})

@catalog_bp.route('/courses', methods=['GET'])
def search_courses():
    args = request.args
    courses = SqlStore().select('courses', order_by='id')
    filtered = filter_courses(
        courses,
        query=args.get('q'),
        field=args.get('field'),
        level=args.get('level'),
        stream=args.get('stream'),
        featured=args.get('featured') in ('1', 'true', 'yes')
    )
    return jsonify({'data': filtered})
