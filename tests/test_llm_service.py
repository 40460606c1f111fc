import json
import pytest
from unittest.mock import MagicMock, patch
from openai import OpenAIError
from careerpath.errors import GenerationError
from careerpath.schemas import ChatReply, LearningRoadmaps, LecturePlan
from careerpath.services.llm_service import (
    CHAT_FALLBACK, CareerAdvisor, TextGenerationService, as_list, fallback_roadmaps)

def completion(content):
    response = MagicMock()
    response.choices[0].message.content = content
    return response

def roadmap_payload(difficulty='Beginner'):
    return {
        'roadmaps': [{
            'id': 'jee-physics', 'title': 'Physics for JEE', 'description': 'Mechanics first',
            'duration': '8 weeks', 'difficulty': difficulty, 'category': 'Engineering',
            'prerequisites': ['Class 10 science'], 'learningOutcomes': ['Solve JEE mechanics'],
            'modules': [{
                'id': 'm1', 'title': 'Kinematics', 'description': 'Motion in 1D and 2D',
                'duration': '2 weeks', 'topics': ['velocity'],
                'resources': [{'type': 'video', 'title': 'Lecture', 'description': 'Intro',
                               'duration': '2 hours', 'difficulty': 'Easy'}],
                'assessment': {'type': 'quiz', 'description': 'Check', 'criteria': ['accuracy']},
            }],
            'careerAlignment': ['Engineer'], 'skillsGained': ['Mechanics'],
        }],
        'recommendations': 'Practice daily.',
    }

@pytest.fixture
def mock_openai():
    with patch('careerpath.services.llm_service.OpenAI') as mock_cls:
        client = MagicMock()
        mock_cls.return_value = client
        yield client

def test_generate_free_text(mock_openai):
    mock_openai.chat.completions.create.return_value = completion('Try engineering.')
    assert TextGenerationService(api_key='k', model='m').generate('hi') == 'Try engineering.'
    kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert kwargs['model'] == 'm'
    assert 'response_format' not in kwargs

def test_generate_structured(mock_openai):
    mock_openai.chat.completions.create.return_value = completion(json.dumps({'response': 'ok'}))
    data = TextGenerationService(api_key='k').generate('hi', schema=ChatReply)
    assert data == ChatReply(response='ok')
    kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert kwargs['response_format'] == {'type': 'json_object'}
    # the JSON schema of the model is sent along with the prompt
    assert '"response"' in kwargs['messages'][-1]['content']

def test_generate_rejects_bad_json(mock_openai):
    mock_openai.chat.completions.create.return_value = completion('not json')
    with pytest.raises(GenerationError):
        TextGenerationService(api_key='k').generate('hi', schema=ChatReply)

def test_generate_rejects_wrong_shape(mock_openai):
    mock_openai.chat.completions.create.return_value = completion(json.dumps({'lectures': 'x'}))
    with pytest.raises(GenerationError, match='LecturePlan'):
        TextGenerationService(api_key='k').generate('hi', schema=LecturePlan)

def test_generate_rejects_unknown_difficulty(mock_openai):
    payload = {'lectures': [{'title': 'Kinematics', 'description': 'Motion', 'duration': '40 minutes',
                             'difficulty': 'Expert', 'topics': [], 'materials': []}]}
    mock_openai.chat.completions.create.return_value = completion(json.dumps(payload))
    with pytest.raises(GenerationError):
        TextGenerationService(api_key='k').generate('hi', schema=LecturePlan)

def test_chat_falls_back_on_api_error(mock_openai):
    mock_openai.chat.completions.create.side_effect = OpenAIError('quota exceeded')
    advisor = CareerAdvisor(TextGenerationService(api_key='k'))
    assert advisor.chat_reply('Which stream after 10th?') == CHAT_FALLBACK

def test_recommendations_fall_back_to_stream_careers():
    generator = MagicMock()
    generator.generate.side_effect = GenerationError('down')
    recommendations = CareerAdvisor(generator).career_recommendations('PCB', ['biology'], [])
    assert [r['title'] for r in recommendations] == ['Doctor', 'Dentist', 'Pharmacist',
                                                     'Biotechnologist', 'Medical Researcher']

def test_recommendations_unknown_stream():
    with pytest.raises(ValueError):
        CareerAdvisor(MagicMock()).career_recommendations('Science')

def test_recommendations_accept_single_string_interest():
    generator = MagicMock()
    generator.generate.side_effect = GenerationError('down')
    CareerAdvisor(generator).career_recommendations('PCM', interests='robotics', skills='coding')
    prompt = generator.generate.call_args.args[0]
    assert 'interests (robotics)' in prompt
    assert 'skills (coding)' in prompt

def test_as_list():
    assert as_list(None, 'skills') == []
    assert as_list('robotics', 'interests') == ['robotics']
    assert as_list(['a', 'b'], 'interests') == ['a', 'b']
    with pytest.raises(ValueError, match="'skills'"):
        as_list({'a': 1}, 'skills')
    with pytest.raises(ValueError):
        as_list([1, 2], 'skills')

def test_lectures_are_normalised():
    generator = MagicMock()
    generator.generate.return_value = LecturePlan.model_validate({'lectures': [
        {'title': 'Kinematics', 'description': 'Motion', 'duration': '40 minutes',
         'difficulty': 'Advanced', 'topics': ['velocity'], 'materials': ['notes']},
    ]})
    lectures = CareerAdvisor(generator).generate_lectures('PCM', 'Physics')
    assert lectures[0]['id'] == 'physics-1'
    assert lectures[0]['stream'] == 'PCM'
    assert lectures[0]['difficulty'] == 'Advanced'

def test_lectures_with_unknown_difficulty_fall_back(mock_openai):
    payload = {'lectures': [{'title': 'Kinematics', 'description': 'Motion', 'duration': '40 minutes',
                             'difficulty': 'Expert', 'topics': [], 'materials': []}]}
    mock_openai.chat.completions.create.return_value = completion(json.dumps(payload))
    lectures = CareerAdvisor(TextGenerationService(api_key='k')).generate_lectures('PCM', 'Physics')
    assert len(lectures) == 6
    assert lectures[0]['title'] == 'Physics Fundamentals - Part 1'

def test_lectures_fallback():
    generator = MagicMock()
    generator.generate.side_effect = GenerationError('down')
    lectures = CareerAdvisor(generator).generate_lectures('Commerce', 'Business Studies')
    assert len(lectures) == 6
    assert lectures[0]['id'] == 'business-studies-1'
    assert [l['difficulty'] for l in lectures][::2] == ['Beginner', 'Intermediate', 'Advanced']

def test_learning_roadmap_generated(mock_openai):
    mock_openai.chat.completions.create.return_value = completion(json.dumps(roadmap_payload()))
    result = CareerAdvisor(TextGenerationService(api_key='k')).learning_roadmap(
        'PCM', career_interests=['robotics'], skill_level='Beginner')
    assert result['roadmaps'][0]['id'] == 'jee-physics'
    assert result['roadmaps'][0]['modules'][0]['resources'][0]['url'] is None
    assert result['recommendations'] == 'Practice daily.'
    prompt = mock_openai.chat.completions.create.call_args.kwargs['messages'][-1]['content']
    assert 'engineering and technology' in prompt
    assert 'JEE' in prompt

def test_learning_roadmap_falls_back():
    generator = MagicMock()
    generator.generate.side_effect = GenerationError('down')
    result = CareerAdvisor(generator).learning_roadmap('PCB', skill_level='Intermediate')
    assert result == fallback_roadmaps('PCB', 'Intermediate')
    assert [r['id'] for r in result['roadmaps']] == ['pcb-physics', 'pcb-chemistry', 'pcb-biology']
    assert all(r['difficulty'] == 'Intermediate' for r in result['roadmaps'])
    assert all(len(r['modules']) == 4 for r in result['roadmaps'])
    assert 'NEET' in result['recommendations']

def test_fallback_roadmaps_match_schema():
    for stream in ('PCB', 'PCM', 'Commerce', 'Arts'):
        LearningRoadmaps.model_validate(fallback_roadmaps(stream))

def test_learning_roadmap_rejects_bad_input():
    advisor = CareerAdvisor(MagicMock())
    with pytest.raises(ValueError):
        advisor.learning_roadmap('Science')
    with pytest.raises(ValueError):
        advisor.learning_roadmap('PCM', skill_level='Expert')
