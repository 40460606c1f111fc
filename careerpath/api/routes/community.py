from datetime import datetime
from flask import Blueprint, request, jsonify, current_app
from careerpath.errors import ResourceNotFound, ValidationError
from careerpath.services.capacity_service import CapacityManager, EVENT, STUDY_GROUP
from careerpath.store import SqlStore
from careerpath.utils.decorators import token_required

community_bp = Blueprint('community', __name__)

def _capacity_value(data, key):
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"'{key}' must be a positive integer or null")
    return value

def _require(data, *keys):
    for key in keys:
        if not data.get(key):
            raise ValidationError(f"'{key}' is required")

# --- EVENTS ---

@community_bp.route('/events', methods=['GET'])
def list_events():
    kind = request.args.get('type') # upcoming, past, all
    filters = {}
    if kind == 'upcoming':
        filters['event_date__gte'] = datetime.utcnow()
    elif kind == 'past':
        filters['event_date__lt'] = datetime.utcnow()
    if request.args.get('category'):
        filters['tags__contains'] = request.args['category']

    store = SqlStore()
    manager = CapacityManager(store)
    events = store.select('community_events', filters, order_by='event_date')
    for event in events:
        event['registrations'] = manager.member_count(EVENT, event['id'])
    return jsonify({'data': events})

@community_bp.route('/events', methods=['POST'])
@token_required
def create_event(auth):
    data = request.get_json(silent=True) or {}
    _require(data, 'title', 'event_date')
    try:
        event_date = datetime.fromisoformat(data['event_date'])
    except (TypeError, ValueError):
        raise ValidationError('Invalid event_date')

    event = SqlStore().insert('community_events', {
        'title': data['title'],
        'description': data.get('description'),
        'event_date': event_date,
        'type': data.get('type', 'webinar'),
        'location': data.get('location'),
        'max_attendees': _capacity_value(data, 'max_attendees'),
        'tags': data.get('tags', []),
        'requirements': data.get('requirements'),
        'organizer_id': auth.user_id,
        'status': 'active'
    })
    return jsonify({'data': event}), 201

@community_bp.route('/events/<int:event_id>/register', methods=['GET'])
@token_required
def check_event_registration(auth, event_id):
    decision = CapacityManager(SqlStore()).can_register(EVENT, event_id, auth)
    return jsonify({'data': decision.to_dict()})

@community_bp.route('/events/<int:event_id>/register', methods=['POST'])
@token_required
def register_for_event(auth, event_id):
    registration = CapacityManager(SqlStore()).register(EVENT, event_id, auth)
    return jsonify({'data': registration}), 201

@community_bp.route('/events/<int:event_id>/register', methods=['DELETE'])
@token_required
def unregister_from_event(auth, event_id):
    CapacityManager(SqlStore()).unregister(EVENT, event_id, auth)
    return jsonify({'data': {'message': 'Successfully unregistered from event'}})

# --- STUDY GROUPS ---

@community_bp.route('/study-groups', methods=['GET'])
def list_study_groups():
    filters = {'status': 'active'}
    if request.args.get('category'):
        filters['category'] = request.args['category']
    if request.args.get('level'):
        filters['level'] = request.args['level']

    store = SqlStore()
    manager = CapacityManager(store)
    groups = store.select('study_groups', filters, order_by='-created_at')
    for group in groups:
        group['members'] = manager.member_count(STUDY_GROUP, group['id'])
    return jsonify({'data': groups})

@community_bp.route('/study-groups', methods=['POST'])
@token_required
def create_study_group(auth):
    data = request.get_json(silent=True) or {}
    _require(data, 'name')

    # Creator is the first member
    group = SqlStore().rpc('create_study_group', {'group': {
        'name': data['name'],
        'description': data.get('description'),
        'category': data.get('category'),
        'level': data.get('level'),
        'topics': data.get('topics', []),
        'meeting_schedule': data.get('meeting_schedule'),
        'max_members': _capacity_value(data, 'max_members'),
        'requirements': data.get('requirements'),
        'moderator_id': auth.user_id,
        'status': 'active'
    }})
    return jsonify({'data': group}), 201

@community_bp.route('/study-groups/<int:group_id>/join', methods=['GET'])
@token_required
def check_group_join(auth, group_id):
    decision = CapacityManager(SqlStore()).can_register(STUDY_GROUP, group_id, auth)
    return jsonify({'data': decision.to_dict()})

@community_bp.route('/study-groups/<int:group_id>/join', methods=['POST'])
@token_required
def join_study_group(auth, group_id):
    membership = CapacityManager(SqlStore()).register(STUDY_GROUP, group_id, auth)
    return jsonify({'data': membership}), 201

@community_bp.route('/study-groups/<int:group_id>/join', methods=['DELETE'])
@token_required
def leave_study_group(auth, group_id):
    CapacityManager(SqlStore()).unregister(STUDY_GROUP, group_id, auth)
    return jsonify({'data': {'message': 'Successfully left study group'}})

# --- DISCUSSIONS ---

@community_bp.route('/discussions', methods=['GET'])
def list_discussions():
    sort = request.args.get('sort', 'recent') # recent, popular, unanswered
    filters = {}
    if request.args.get('category'):
        filters['category'] = request.args['category']

    if sort == 'popular':
        order_by = '-likes_count'
    elif sort == 'unanswered':
        filters['replies_count'] = 0
        order_by = '-created_at'
    else:
        order_by = '-created_at'

    return jsonify({'data': SqlStore().select('community_discussions', filters, order_by=order_by)})

@community_bp.route('/discussions', methods=['POST'])
@token_required
def create_discussion(auth):
    data = request.get_json(silent=True) or {}
    _require(data, 'title', 'content')
    discussion = SqlStore().insert('community_discussions', {
        'title': data['title'],
        'content': data['content'],
        'category': data.get('category'),
        'tags': data.get('tags', []),
        'author_id': auth.user_id
    })
    return jsonify({'data': discussion}), 201

@community_bp.route('/discussions/<int:discussion_id>/like', methods=['POST'])
@token_required
def toggle_like(auth, discussion_id):
    """Like the discussion, or take the like back if it is already there."""
    store = SqlStore()
    if not store.select('community_discussions', {'id': discussion_id}):
        raise ResourceNotFound('Discussion not found')

    pair = {'discussion_id': discussion_id, 'user_id': auth.user_id}
    if store.delete('discussion_likes', pair):
        likes = store.rpc('decrement_discussion_likes', {'discussion_id': discussion_id})
        liked = False
    else:
        store.insert('discussion_likes', dict(pair, created_at=datetime.utcnow()))
        likes = store.rpc('increment_discussion_likes', {'discussion_id': discussion_id})
        liked = True

    current_app.logger.debug(f"User {auth.user_id} liked={liked} discussion {discussion_id}")
    return jsonify({'data': {'liked': liked, 'likes_count': likes}})
