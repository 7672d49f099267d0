class TrackerServiceError(Exception):
    def __init__(self, message: str, code: int = 500, details: str = ""):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        return f"Error {self.code}: {self.message} - {self.details}"


class RoutineValidationError(TrackerServiceError):
    def __init__(self, name: str, exercise_count: int) -> None:
        super().__init__(
            "Routine needs a name and at least one exercise",
            code=400,
            details=f"name={name!r} exercises={exercise_count}",
        )
        self.name = name
        self.exercise_count = exercise_count


class RecordNotFoundError(TrackerServiceError):
    def __init__(self, table: str, record_id: str):
        super().__init__(f"No {table} record found with id {record_id}", code=404)
        self.table = table
        self.record_id = record_id


class ImportFormatError(TrackerServiceError):
    def __init__(self, details: str) -> None:
        super().__init__("Invalid import file", code=400, details=details)


class UserNotSignedInError(TrackerServiceError):
    def __init__(self) -> None:
        super().__init__("No signed-in user; set DATA_API_USER_ID", code=401)
