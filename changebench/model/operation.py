from enum import Enum


class OperationKind(Enum):
    Insert = "insert"
    Update = "update"
    Replace = "replace"
    Delete = "delete"
    Drop = "drop"
    Invalidate = "invalidate"
    Other = "other"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for kind in cls:
                if kind.value == value.lower():
                    return kind

            return cls.Other

        return super()._missing_(value)

    def __repr__(self):
        return f"<OperationKind.{self.name}>"
