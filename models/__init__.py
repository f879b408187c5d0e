from models.course import Course
from models.teacher import Teacher
from models.classroom import Classroom
from models.student import Student
from models.timetable_slot import ConflictInfo, SlotDraft, TimetableSlot
from models.registry import SchoolRegistry
from models.timetable_data import TimetableData

__all__ = [
    "Course",
    "Teacher",
    "Classroom",
    "Student",
    "ConflictInfo",
    "SlotDraft",
    "TimetableSlot",
    "SchoolRegistry",
    "TimetableData",
]
