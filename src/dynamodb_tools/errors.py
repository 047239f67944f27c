class DynamoToolsError(Exception):
    """Base class for every error raised by dynamodb-tools."""


class ConfigReadError(DynamoToolsError):
    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"Failed to read configuration file '{path}': {cause}")
        self.path = path
        self.cause = cause


class ConfigParseError(DynamoToolsError):
    def __init__(self, path: str, cause: Exception | str) -> None:
        super().__init__(f"Failed to parse configuration file '{path}': {cause}")
        self.path = path
        self.cause = cause


class MissingFieldError(DynamoToolsError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Missing expected field in configuration: {field}")
        self.field = field


class SchemaError(DynamoToolsError):
    """The document parsed, but does not describe a table DynamoDB would accept."""


class TableCreationError(DynamoToolsError):
    pass


class TableDeletionError(DynamoToolsError):
    pass


class TableDescribeError(DynamoToolsError):
    pass
