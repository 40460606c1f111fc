from flask import Blueprint, request, jsonify, current_app
from careerpath.errors import ValidationError
from careerpath.extensions import db
from careerpath.models import User
from careerpath.services.llm_service import CareerAdvisor, TextGenerationService
from careerpath.utils.decorators import token_required

chat_bp = Blueprint('chat', __name__)

def _advisor():
    return CareerAdvisor(TextGenerationService(
        api_key=current_app.config['OPENAI_API_KEY'],
        model=current_app.config['OPENAI_MODEL']
    ))

@chat_bp.route('/message', methods=['POST'])
@token_required
def chat(auth):
    data = request.get_json(silent=True) or {}
    message = (data.get('message') or '').strip()
    if not message:
        raise ValidationError("'message' is required")

    extra = data.get('context') or {}
    if not isinstance(extra, dict):
        raise ValidationError("'context' must be an object")

    user = db.session.get(User, auth.user_id)
    context = {'role': user.role, 'stream': user.stream}
    context.update(extra)

    # history is a list of {"role": ..., "content": ...} kept by the client
    history = [m for m in (data.get('history') or [])
               if isinstance(m, dict) and m.get('role') in ('user', 'assistant')]

    reply = _advisor().chat_reply(message, context=context, history=history)
    return jsonify({'data': {'response': reply}})

@chat_bp.route('/career-recommendations', methods=['POST'])
@token_required
def career_recommendations(auth):
    data = request.get_json(silent=True) or {}
    stream = data.get('stream') or db.session.get(User, auth.user_id).stream
    try:
        recommendations = _advisor().career_recommendations(
            stream, interests=data.get('interests'), skills=data.get('skills'))
    except ValueError as e:
        raise ValidationError(str(e))
    return jsonify({'data': recommendations})

@chat_bp.route('/lectures', methods=['POST'])
@token_required
def lectures(auth):
    data = request.get_json(silent=True) or {}
    if not data.get('stream') or not data.get('subject'):
        raise ValidationError("'stream' and 'subject' are required")
    try:
        result = _advisor().generate_lectures(data['stream'], data['subject'], data.get('prompt'))
    except ValueError as e:
        raise ValidationError(str(e))
    return jsonify({'data': result})

@chat_bp.route('/learning-roadmap', methods=['POST'])
@token_required
def learning_roadmap(auth):
    data = request.get_json(silent=True) or {}
    stream = data.get('stream') or db.session.get(User, auth.user_id).stream
    try:
        result = _advisor().learning_roadmap(
            stream,
            career_interests=data.get('careerInterests'),
            skill_level=data.get('skillLevel') or 'Beginner',
            stream_focus=data.get('streamFocus'),
        )
    except ValueError as e:
        raise ValidationError(str(e))
    return jsonify({'data': result})
