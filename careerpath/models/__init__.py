from careerpath.models.user import User
from careerpath.models.mentor import Mentor
from careerpath.models.event import CommunityEvent, EventRegistration
from careerpath.models.study_group import StudyGroup, GroupMember
from careerpath.models.booking import Booking
from careerpath.models.course import Course
from careerpath.models.discussion import Discussion, DiscussionLike

TABLES = {
    model.__tablename__: model
    for model in (User, Mentor, CommunityEvent, EventRegistration, StudyGroup,
                  GroupMember, Booking, Course, Discussion, DiscussionLike)
}
