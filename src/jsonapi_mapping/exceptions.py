import abc
import typing


class JSONAPIMappingException(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class InvalidDeclarationError(JSONAPIMappingException):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


class InvalidAccessorError(InvalidDeclarationError):
    class_: typing.Optional[type]
    detail: str

    def __init__(self, class_: typing.Optional[type], detail: str):
        if class_ is not None:
            message = f"invalid accessor for {class_.__qualname__}: {detail}"
        else:
            message = f"invalid accessor: {detail}"
        super().__init__(message)
        self.class_ = class_
        self.detail = detail


class UnresolvedRelationshipError(JSONAPIMappingException):
    class_: type
    name: str
    reason: typing.Optional[str]

    @property
    def message(self) -> str:
        return f'relationship ({self.name}) of {self.class_.__qualname__} cannot be mapped{": " + self.reason if self.reason is not None else ""}'

    def __init__(self, class_: type, name: str, reason: typing.Optional[str] = None):
        super().__init__(class_, name, reason)
        self.class_ = class_
        self.name = name
        self.reason = reason


class MappingNotFoundError(JSONAPIMappingException):
    key: typing.Union[type, str]

    @property
    def message(self) -> str:
        if isinstance(self.key, type):
            return f"no mapping registered for {self.key.__qualname__}"
        else:
            return f'no mapping registered for resource type "{self.key}"'

    def __init__(self, key: typing.Union[type, str]):
        super().__init__(key)
        self.key = key
