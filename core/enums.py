from enum import Enum


class StorageBackend(str, Enum):
    remote = "remote"
    local = "local"

    def __str__(self) -> str:
        return self.value


class ChartLocale(str, Enum):
    es = "es"
    en = "en"

    def __str__(self) -> str:
        return self.value


class SetField(str, Enum):
    weight = "weight"
    reps = "reps"

    def __str__(self) -> str:
        return self.value


class TemplateField(str, Enum):
    name = "name"
    sets = "sets"
    reps = "reps"

    def __str__(self) -> str:
        return self.value


class ExportKind(str, Enum):
    json = "json"
    csv = "csv"

    def __str__(self) -> str:
        return self.value
