# __init__.py
from careercoach.models.career_option import CareerOption
from careercoach.models.career_path import (
	CareerCourse,
	CareerPath,
	CareerProject,
	CareerResource,
	CareerSkill,
)

__all__ = [
	"CareerOption",
	"CareerPath",
	"CareerSkill",
	"CareerCourse",
	"CareerProject",
	"CareerResource",
]
