import enum

class DogStatus(enum.StrEnum):
    HAVE = "HAVE"
    AVOID = "AVOID"
    LIKE = "LIKE"

class OperationKind(enum.StrEnum):
    QUERY = "query"
    MUTATION = "mutation"
    FIELD = "field"
