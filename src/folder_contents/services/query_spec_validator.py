"""Validation of listing query parameters."""

from typing import Callable, List, Optional, Tuple, Union

from loguru import logger

from folder_contents.config import (
    PUBLICATION_STATUS_FILTERS,
    VERSION_FILTERS,
    ListingConfig,
)
from folder_contents.schemas.query import QuerySpec, SortCriterion
from folder_contents.services.exceptions import (
    InvalidQueryParameter,
    LimitOutOfRange,
    MissingResourceTypes,
    OffsetOutOfRange,
    UnknownPublicationStatus,
    UnknownResourceType,
    UnknownSortKey,
    UnknownVersionFilter,
)

DESCENDING_PREFIX = "-"

RawInt = Union[str, int, None]


def _split_tokens(raw: Optional[str]) -> List[str]:
    if raw is None:
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


def _parse_int(raw: RawInt) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


class QuerySpecValidator:
    """Turns raw listing parameters into a QuerySpec.

    The known resource types, sort keys and paging bounds come from the
    injected ListingConfig. Parsing is pure: the same input always gives the
    same QuerySpec or the same errors.
    """

    def __init__(self, config: ListingConfig):
        self.config = config

    def parse(
        self,
        resource_types: Optional[str],
        sort: Optional[str] = None,
        limit: RawInt = None,
        offset: RawInt = None,
        version: Optional[str] = None,
        publication_status: Optional[str] = None,
    ) -> QuerySpec:
        """Validate every parameter and build the canonical query.

        Raises:
            InvalidQueryParameter: the first failing field. Its ``errors``
                attribute lists every failing field.
        """
        errors: List[InvalidQueryParameter] = []

        def check(parse_field: Callable, *args):
            try:
                return parse_field(*args)
            except InvalidQueryParameter as e:
                errors.append(e)
                return None

        parsed_limit = check(self.parse_limit, limit)
        parsed_offset = check(self.parse_offset, offset)
        parsed_sort = check(self.parse_sort, sort)
        parsed_types = check(self.parse_resource_types, resource_types)
        parsed_version = check(self.parse_choice, version, VERSION_FILTERS, UnknownVersionFilter)
        parsed_status = check(
            self.parse_choice, publication_status, PUBLICATION_STATUS_FILTERS, UnknownPublicationStatus
        )

        if errors:
            first = errors[0]
            first.errors = errors
            logger.warning(
                f"Invalid listing query: {[f'{e.field}: {e.message}' for e in errors]}"
            )
            raise first

        return QuerySpec(
            resource_types=parsed_types,
            sort=parsed_sort,
            limit=parsed_limit,
            offset=parsed_offset,
            version=parsed_version,
            publication_status=parsed_status,
        )

    def parse_limit(self, raw: RawInt) -> int:
        if raw is None or raw == "":
            return self.config.default_limit
        limit = _parse_int(raw)
        if limit is None:
            raise LimitOutOfRange(f"You should specify an integer limit, got '{raw}'")
        if limit <= 0:
            raise LimitOutOfRange("You should specify a positive limit!")
        if limit > self.config.max_limit:
            raise LimitOutOfRange(
                f"You should specify a limit smaller than or equal to {self.config.max_limit}!"
            )
        return limit

    def parse_offset(self, raw: RawInt) -> int:
        if raw is None or raw == "":
            return self.config.default_offset
        offset = _parse_int(raw)
        if offset is None:
            raise OffsetOutOfRange(f"You should specify an integer offset, got '{raw}'")
        if offset < 0:
            raise OffsetOutOfRange("You should specify a positive or zero offset!")
        return offset

    def parse_sort(self, raw: Optional[str]) -> Tuple[SortCriterion, ...]:
        tokens = _split_tokens(raw) or _split_tokens(self.config.default_sort)
        criteria = []
        for token in tokens:
            descending = token.startswith(DESCENDING_PREFIX)
            key = token[len(DESCENDING_PREFIX):] if descending else token
            if key not in self.config.known_sort_keys:
                raise UnknownSortKey(token, self.config.known_sort_keys)
            # duplicates are kept, they only repeat a tie-break
            criteria.append(SortCriterion(key=key, descending=descending))
        return tuple(criteria)

    def parse_resource_types(self, raw: Optional[str]) -> Tuple[str, ...]:
        tokens = _split_tokens(raw)
        if not tokens:
            raise MissingResourceTypes()
        resource_types: List[str] = []
        for token in tokens:
            if token not in self.config.known_resource_types:
                raise UnknownResourceType(token, self.config.known_resource_types)
            if token not in resource_types:
                resource_types.append(token)
        return tuple(resource_types)

    @staticmethod
    def parse_choice(raw: Optional[str], allowed: Tuple[str, ...], error) -> str:
        value = raw.strip() if raw is not None else ""
        if not value:
            return allowed[0]
        if value not in allowed:
            raise error(value, allowed)
        return value
