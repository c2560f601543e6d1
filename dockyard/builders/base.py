"""Shared machinery for configuration builders.

Every configuration payload is a frozen pydantic model whose aliases are
Docker's wire field names. Builders accumulate raw values and validate
them exactly once, in ``build()``.
"""

from types import MappingProxyType
from typing import Annotated, Any, ClassVar, Generic, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    ValidationError,
    WrapSerializer,
)

from dockyard.exceptions import InvalidFieldError, MissingRequiredFieldError

K = TypeVar("K")
V = TypeVar("V")


def _thaw(value: Any, handler: SerializerFunctionWrapHandler) -> Any:
    return handler(dict(value))


# Read-only mapping field: validated as a dict, stored as a MappingProxyType
# and serialized back as a plain dict.
FrozenDict = Annotated[
    dict[K, V],
    AfterValidator(MappingProxyType),
    WrapSerializer(_thaw),
]


class WireModel(BaseModel):
    """Immutable request payload serialized with Docker field names.

    Fields listed in ``QUERY_FIELDS`` travel in the query string rather than
    the JSON body (e.g. the container name on ``POST /containers/create``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    QUERY_FIELDS: ClassVar[frozenset[str]] = frozenset()

    def to_body(self) -> dict[str, Any]:
        """Serialize the JSON body, omitting unset fields."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude=set(self.QUERY_FIELDS),
        )

    def to_query(self) -> dict[str, Any]:
        """Serialize the query-string fields, omitting unset ones."""
        if not self.QUERY_FIELDS:
            return {}
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            include=set(self.QUERY_FIELDS),
        )


ConfigT = TypeVar("ConfigT", bound=WireModel)


class ConfigBuilder(Generic[ConfigT]):
    """Mutable accumulator producing a validated, immutable config.

    Subclasses set ``config_class`` and ``required_fields``. Setters store
    raw values and return the builder; nothing is validated until
    ``build()``.
    """

    config_class: type[ConfigT]
    required_fields: tuple[str, ...] = ()

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"

    def _set(self, field_name: str, value: Any):
        self._values[field_name] = value
        return self

    def _append(self, field_name: str, *items: Any):
        current = list(self._values.get(field_name) or [])
        current.extend(items)
        self._values[field_name] = current
        return self

    def _put(self, field_name: str, key: str, value: Any):
        current = dict(self._values.get(field_name) or {})
        current[key] = value
        self._values[field_name] = current
        return self

    def _prepare(self) -> dict[str, Any]:
        """Hook for subclasses to fill derived defaults before validation.

        Validation copies every collection, so the builder keeps no reference
        into the built config.
        """
        return dict(self._values)

    def build(self) -> ConfigT:
        """Validate accumulated values and produce the immutable config.

        Raises:
            MissingRequiredFieldError: If a required field was never set or is blank
            InvalidFieldError: If a value fails validation
        """
        for field_name in self.required_fields:
            value = self._values.get(field_name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MissingRequiredFieldError(field_name)

        try:
            return self.config_class(**self._prepare())
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidFieldError(details) from e
