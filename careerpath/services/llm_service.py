import json
import logging

from openai import OpenAI, OpenAIError
from pydantic import ValidationError as SchemaError

from careerpath.config import Config
from careerpath.errors import GenerationError
from careerpath.schemas import CareerRecommendations, ChatReply, LearningRoadmaps, LecturePlan

logger = logging.getLogger(__name__)

STREAM_CAREERS = {
    "PCB": ["Doctor", "Dentist", "Pharmacist", "Biotechnologist", "Medical Researcher",
            "Veterinarian", "Physiotherapist", "Nurse", "Biomedical Engineer",
            "Forensic Scientist", "Nutritionist"],
    "PCM": ["Engineer", "Software Developer", "Data Scientist", "Architect", "Pilot",
            "Astronomer", "Physicist", "Mathematician", "Statistician", "Actuary",
            "Technology Consultant"],
    "Commerce": ["Chartered Accountant", "Investment Banker", "Financial Analyst",
                 "Marketing Manager", "Business Analyst", "Entrepreneur", "HR Manager",
                 "Digital Marketing Specialist", "Supply Chain Manager"],
    "Arts": ["Journalist", "Lawyer", "Psychologist", "Social Worker", "Teacher",
             "Content Writer", "Graphic Designer", "Historian", "Political Scientist"],
}

STREAM_SUBJECTS = {
    "PCB": ["Physics", "Chemistry", "Biology", "Mathematics", "English"],
    "PCM": ["Physics", "Chemistry", "Mathematics", "Computer Science", "English"],
    "Commerce": ["Accountancy", "Business Studies", "Economics", "Mathematics", "English"],
    "Arts": ["History", "Geography", "Political Science", "Psychology", "English", "Sociology"],
}

DIFFICULTIES = ("Beginner", "Intermediate", "Advanced")


STREAM_FOCUS = {
    "PCB": "medical and healthcare",
    "PCM": "engineering and technology",
    "Commerce": "business and commerce",
    "Arts": "arts and humanities",
}

STREAM_EXAMS = {
    "PCB": "NEET",
    "PCM": "JEE",
    "Commerce": "CA Foundation / CUET",
    "Arts": "CUET / CLAT",
}

CHAT_FALLBACK = "I'm here to help with your career questions! Could you please rephrase your question?"


def as_list(value, name):
    """Accept a list of strings, or a single string as a one-item list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ValueError(f"'{name}' must be a string or a list of strings")


class TextGenerationService:
    """Thin wrapper over the chat completions API.

    ``generate`` returns free text, or an instance of the pydantic ``schema``
    when one is given. Any failure surfaces as ``GenerationError``.
    """

    def __init__(self, api_key=None, model=None):
        self.api_key = api_key or Config.OPENAI_API_KEY
        self.model = model or Config.OPENAI_MODEL

    def get_client(self):
        return OpenAI(api_key=self.api_key)

    def generate(self, prompt, schema=None, system=None, history=None, temperature=0.7):
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        if history:
            messages.extend(history)

        if schema is not None:
            prompt = (f"{prompt}\n\nReturn ONLY valid JSON matching this JSON Schema:\n"
                      f"{json.dumps(schema.model_json_schema())}")
        messages.append({"role": "user", "content": prompt})

        kwargs = {"model": self.model, "messages": messages, "temperature": temperature}
        if schema is not None:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self.get_client().chat.completions.create(**kwargs)
        except OpenAIError as e:
            logger.error("LLM Error: %s", e)
            raise GenerationError(str(e))

        content = response.choices[0].message.content
        if schema is None:
            if not content:
                raise GenerationError("Empty response")
            return content

        try:
            return schema.model_validate_json(content or "")
        except SchemaError as e:
            logger.error("LLM returned a payload that does not match %s: %s", schema.__name__, e)
            raise GenerationError(f"Invalid {schema.__name__}: {e}")


def fallback_recommendations(stream):
    careers = STREAM_CAREERS.get(stream) or STREAM_CAREERS["PCM"]
    return [{
        "title": career,
        "description": f"A career in {career} involves applying specialized knowledge to make a meaningful impact in your field.",
        "requiredSkills": ["Analytical skills", "Attention to detail", "Problem-solving skills",
                           "Communication skills", "Teamwork"],
        "averageSalary": "INR 5-10 Lakhs per annum",
        "growthProspects": "High growth potential with increasing demand",
        "educationPath": ["10th", "12th", "Bachelor's degree", "Master's degree"],
        "relevantCourses": ["Foundation courses", "Specialized training", "Professional certifications"],
    } for career in careers[:5]]


def fallback_lectures(stream, subject):
    slug = "-".join(subject.lower().split())
    return [{
        "id": f"{slug}-{i + 1}",
        "title": f"{subject} Fundamentals - Part {i + 1}",
        "description": f"Comprehensive introduction to key concepts in {subject} with practical applications and career connections.",
        "duration": "45 minutes",
        "difficulty": DIFFICULTIES[i // 2],
        "topics": [f"{subject} basics", "Practical applications", "Career connections",
                   "Problem solving", "Real-world examples"],
        "materials": ["Video lecture", "Study notes", "Practice exercises", "Interactive quizzes"],
        "stream": stream,
    } for i in range(6)]


def fallback_roadmaps(stream, skill_level="Beginner"):
    """One roadmap per stream subject, built from static templates."""
    exam = STREAM_EXAMS[stream]
    careers = STREAM_CAREERS[stream][:3]
    difficulty = skill_level if skill_level in DIFFICULTIES else "Beginner"
    roadmaps = []
    for subject in STREAM_SUBJECTS[stream][:3]:
        slug = "-".join(subject.lower().split())
        modules = [{
            "id": f"{slug}-m{n + 1}",
            "title": f"{subject}: {stage}",
            "description": f"{stage} of {subject} with practice tied to {exam} preparation.",
            "duration": "2 weeks",
            "topics": [f"{subject} {stage.lower()}", "Worked examples", "Practice problems"],
            "resources": [
                {"type": "video", "title": f"{subject} {stage} lectures", "description": "Recorded lessons",
                 "duration": "6 hours", "difficulty": resource_level},
                {"type": "practice", "title": f"{exam} style question set", "description": "Timed practice",
                 "duration": "4 hours", "difficulty": resource_level},
            ],
            "assessment": {"type": "quiz", "description": f"{subject} {stage.lower()} check",
                           "criteria": ["Accuracy", "Time management"]},
        } for n, (stage, resource_level) in enumerate([("Foundations", "Easy"),
                                                       ("Core concepts", "Medium"),
                                                       ("Applications", "Medium"),
                                                       ("Exam practice", "Hard")])]
        roadmaps.append({
            "id": f"{stream.lower()}-{slug}",
            "title": f"{subject} for {STREAM_FOCUS[stream].title()} Careers",
            "description": f"Build {subject} from the ground up towards {exam} and beyond.",
            "duration": "6 weeks",
            "difficulty": difficulty,
            "category": STREAM_FOCUS[stream].title(),
            "prerequisites": ["Class 10 fundamentals"],
            "learningOutcomes": [f"Confident with core {subject} concepts", f"Ready for {exam} level problems"],
            "modules": modules,
            "careerAlignment": careers,
            "skillsGained": [subject, "Problem solving", "Exam strategy"],
        })
    return {
        "roadmaps": roadmaps,
        "recommendations": f"Study consistently, revise weekly and attempt {exam} mock tests every month.",
    }


class CareerAdvisor:
    """Career recommendations, lecture plans, learning roadmaps and chat replies.

    Every method degrades to a static answer when generation fails.
    """

    SYSTEM_PROMPT = (
        "You are a career counselor for Indian students. Give encouraging, concise advice "
        "grounded in the Indian education system and job market."
    )

    def __init__(self, generator=None):
        self.generator = generator or TextGenerationService()

    def career_recommendations(self, stream, interests=None, skills=None):
        if stream not in STREAM_CAREERS:
            raise ValueError(f"Unknown stream '{stream}'")
        interests = as_list(interests, "interests")
        skills = as_list(skills, "skills")
        prompt = (
            f"Based on the student's stream ({stream}), interests ({', '.join(interests)}) "
            f"and skills ({', '.join(skills)}), recommend 5 career paths from: "
            f"{', '.join(STREAM_CAREERS[stream])}. For each give a title, a 2-3 sentence description, "
            "5-7 required skills, the average salary range in India, growth prospects, "
            "a step-by-step education path and relevant courses or certifications."
        )
        try:
            data = self.generator.generate(prompt, schema=CareerRecommendations, system=self.SYSTEM_PROMPT)
            return [r.model_dump() for r in data.recommendations]
        except GenerationError as e:
            logger.warning("Falling back to static career recommendations: %s", e)
            return fallback_recommendations(stream)

    def generate_lectures(self, stream, subject, custom_prompt=None):
        if stream not in STREAM_SUBJECTS:
            raise ValueError(f"Unknown stream '{stream}'")
        prompt = custom_prompt or (
            f"Create 6 lecture topics for {subject} in the {stream} stream for Indian students. "
            "Keep them practical and career-focused with progressive difficulty "
            f"({', '.join(DIFFICULTIES)})."
        )
        try:
            data = self.generator.generate(prompt, schema=LecturePlan, system=self.SYSTEM_PROMPT)
        except GenerationError as e:
            logger.warning("Falling back to static lectures: %s", e)
            return fallback_lectures(stream, subject)

        slug = "-".join(subject.lower().split())
        lectures = []
        for i, lecture in enumerate(data.lectures):
            lecture = lecture.model_dump()
            lecture["id"] = lecture["id"] or f"{slug}-{i + 1}"
            lecture["stream"] = stream
            lectures.append(lecture)
        return lectures

    def learning_roadmap(self, stream, career_interests=None, skill_level="Beginner", stream_focus=None):
        """3-4 stream-specific roadmaps of 4-6 modules, each with resources and an assessment."""
        if stream not in STREAM_FOCUS:
            raise ValueError(f"Unknown stream '{stream}'")
        if skill_level not in DIFFICULTIES:
            raise ValueError(f"Skill level must be one of {', '.join(DIFFICULTIES)}")
        interests = as_list(career_interests, "career_interests")
        focus = stream_focus or STREAM_FOCUS[stream]
        prompt = (
            f"Create 3-4 personalized learning roadmaps for an Indian {stream} student focused on "
            f"{focus} careers. Career interests: {', '.join(interests) or 'not specified'}. "
            f"Current skill level: {skill_level}. Every roadmap must stay within the {stream} stream, "
            f"include {STREAM_EXAMS[stream]} preparation where relevant, progress from beginner to advanced "
            "and have 4-6 modules with resources, an assessment and practical projects."
        )
        try:
            data = self.generator.generate(prompt, schema=LearningRoadmaps, system=self.SYSTEM_PROMPT)
            return data.model_dump()
        except GenerationError as e:
            logger.warning("Falling back to static learning roadmap: %s", e)
            return fallback_roadmaps(stream, skill_level)

    def chat_reply(self, message, context=None, history=None):
        prompt = f'Respond to: "{message}"\n\nStudent context: {json.dumps(context or {})}'
        try:
            data = self.generator.generate(prompt, schema=ChatReply, system=self.SYSTEM_PROMPT,
                                           history=history)
            return data.response
        except GenerationError as e:
            logger.warning("Falling back to static chat reply: %s", e)
            return CHAT_FALLBACK
