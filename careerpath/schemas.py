"""
Pydantic Schemas - Generated Payloads

Shapes the text-generation service must return for each assistant feature.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Difficulty = Literal["Beginner", "Intermediate", "Advanced"]


# ============================================================
# CAREER RECOMMENDATIONS
# ============================================================

class CareerRecommendation(BaseModel):
    title: str
    description: str = Field(description="Brief description, 2-3 sentences")
    requiredSkills: List[str]
    averageSalary: str = Field(description="Average salary range in India")
    growthProspects: str
    educationPath: List[str]
    relevantCourses: List[str]


class CareerRecommendations(BaseModel):
    recommendations: List[CareerRecommendation]


# ============================================================
# LECTURES
# ============================================================

class Lecture(BaseModel):
    id: Optional[str] = None
    title: str
    description: str
    duration: str
    difficulty: Difficulty
    topics: List[str]
    materials: List[str]


class LecturePlan(BaseModel):
    lectures: List[Lecture]


# ============================================================
# LEARNING ROADMAPS
# ============================================================

class RoadmapResource(BaseModel):
    type: Literal["video", "article", "course", "book", "practice", "project"]
    title: str
    description: str
    url: Optional[str] = None
    duration: str
    difficulty: Literal["Easy", "Medium", "Hard"]


class ModuleAssessment(BaseModel):
    type: Literal["quiz", "project", "assignment"]
    description: str
    criteria: List[str]


class RoadmapModule(BaseModel):
    id: str
    title: str
    description: str
    duration: str
    topics: List[str]
    resources: List[RoadmapResource]
    assessment: ModuleAssessment


class Roadmap(BaseModel):
    id: str
    title: str
    description: str
    duration: str = Field(description="Estimated completion time")
    difficulty: Difficulty
    category: str
    prerequisites: List[str]
    learningOutcomes: List[str]
    modules: List[RoadmapModule]
    careerAlignment: List[str]
    skillsGained: List[str]


class LearningRoadmaps(BaseModel):
    roadmaps: List[Roadmap]
    recommendations: str = Field(description="Overall recommendations for the learner")


# ============================================================
# CHAT
# ============================================================

class ChatReply(BaseModel):
    response: str
