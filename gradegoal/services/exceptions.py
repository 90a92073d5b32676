"""Domain exceptions raised by the course store and file transfer"""


class GradeGoalError(Exception):
    """Base class for GradeGoal errors"""


class LastCourseError(GradeGoalError):
    """Raised when deleting the only remaining course"""

    def __init__(self, message: str = "Keep at least one course."):
        super().__init__(message)


class CourseNotFoundError(GradeGoalError, LookupError):
    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__(f"Course not found: {course_id}")


class ItemNotFoundError(GradeGoalError, LookupError):
    def __init__(self, course_id: str, item_id: str):
        self.course_id = course_id
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found in course {course_id}")


class TransferError(GradeGoalError, ValueError):
    """Base class for problems with imported course files"""


class InvalidJSONError(TransferError):
    def __init__(self, message: str = "Invalid JSON file"):
        super().__init__(message)


class InvalidCourseFileError(TransferError):
    def __init__(self, message: str = "Invalid course file"):
        super().__init__(message)
