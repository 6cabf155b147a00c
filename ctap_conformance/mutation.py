"""Generation of malformed command payloads from well-formed references.

Every generator is a pure function of its arguments: it never talks to a
device, and calling it again with the same reference yields the same cases in
the same order. Malformed references raise ``PayloadDefinitionError`` as soon
as iteration starts.
"""

import copy
import itertools
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ctap_conformance.cbor_values import (
    MAX_NESTING_DEPTH,
    ContainerKind,
    encode,
    first_wrong_type_example,
    major_type,
    nested_container,
    type_name,
    wrong_type_examples,
)
from ctap_conformance.errors import PayloadDefinitionError
from ctap_conformance.models.definition import (
    CommandDefinition,
    ParameterKey,
    ReferencePayload,
)
from ctap_conformance.status import Status

type Path = tuple[ParameterKey, ...]


class MutationFamily(StrEnum):
    """Kinds of faults a case introduces."""

    WRONG_TYPE = "wrong type"
    MISSING_PARAMETER = "missing parameter"
    INNER_MAP_TYPE = "wrong inner map entry type"
    INNER_ARRAY_TYPE = "wrong inner array element type"
    NESTING_DEPTH = "excessive nesting depth"


EXPECTED_STATUS: Mapping[MutationFamily, Status | None] = {
    MutationFamily.WRONG_TYPE: Status.ERR_CBOR_UNEXPECTED_TYPE,
    MutationFamily.MISSING_PARAMETER: Status.ERR_MISSING_PARAMETER,
    MutationFamily.INNER_MAP_TYPE: Status.ERR_CBOR_UNEXPECTED_TYPE,
    MutationFamily.INNER_ARRAY_TYPE: Status.ERR_CBOR_UNEXPECTED_TYPE,
    MutationFamily.NESTING_DEPTH: None,
}


@dataclass(frozen=True, kw_only=True)
class MutationCase:
    """A malformed payload and a description of what was broken.

    ``expected`` is the status a conforming device answers with, or ``None``
    when any answer is acceptable.
    """

    payload: Any
    description: str
    path: Path
    family: MutationFamily
    expected: Status | None

    def encode(self) -> bytes:
        """Canonical CBOR encoding of the payload."""
        return encode(self.payload)


def render_path(path: Path) -> str:
    """Render a path into the payload, e.g. ``$[4][0]['alg']``."""
    return "$" + "".join(f"[{key!r}]" for key in path)


def _case(
    payload: ReferencePayload,
    mutated: Any,
    family: MutationFamily,
    path: Path,
    substitute: Any = None,
) -> MutationCase:
    description = f"{family.value} at {render_path(path)}"
    if family is not MutationFamily.MISSING_PARAMETER:
        description = f"{description}: {type_name(substitute)}"
    if payload.name:
        description = f"{payload.name} - {description}"

    return MutationCase(
        payload=copy.deepcopy(mutated),
        description=description,
        path=path,
        family=family,
        expected=EXPECTED_STATUS[family],
    )


def _replaced(container: Any, path: Path, value: Any) -> Any:
    """Return a copy of ``container`` with the item at ``path`` replaced."""
    if not path:
        return value

    head, *rest = path
    match container:
        case dict():
            return {**container, head: _replaced(container[head], tuple(rest), value)}
        case list() | tuple():
            items = list(container)
            items[head] = _replaced(items[head], tuple(rest), value)
            return items
    raise PayloadDefinitionError(f"Cannot descend into {type_name(container)}")


def _check_values(value: Any) -> None:
    """Fail if any value below ``value`` has no CBOR representation."""
    major_type(value)
    match value:
        case dict():
            for key, item in value.items():
                _check_values(key)
                _check_values(item)
        case list() | tuple():
            for item in value:
                _check_values(item)


def _parameters(payload: ReferencePayload) -> dict[ParameterKey, Any]:
    _check_values(payload.parameters)
    return dict(payload.parameters)


def _outer_value(
    parameters: dict[ParameterKey, Any], key: ParameterKey, expected: type
) -> Any:
    if key not in parameters:
        raise PayloadDefinitionError(f"Parameter {key!r} is not in the reference payload")
    value = parameters[key]
    if not isinstance(value, expected):
        raise PayloadDefinitionError(
            f"Parameter {key!r} holds a {type_name(value)}, "
            f"expected {'an array' if expected is list else 'a map'}"
        )
    return value


def wrong_top_level_types(payload: ReferencePayload) -> Iterator[MutationCase]:
    """Replace the payload, and values inside it, with other CBOR types.

    The whole payload is first replaced by every catalog type that is not a
    map. Then each parameter value is replaced by every type outside its own
    family, followed by the entries of a map parameter or the first element
    of an array parameter (arrays are assumed to be homogeneous). When that
    first element is a map, its entries are replaced too. Nothing deeper is
    visited.
    """
    parameters = _parameters(payload)

    for example in wrong_type_examples(parameters):
        yield _case(payload, example, MutationFamily.WRONG_TYPE, (), example)

    for key, value in parameters.items():
        yield from _type_cases(payload, parameters, (key,), value)
        match value:
            case dict():
                yield from _entry_type_cases(payload, parameters, (key,), value)
            case list() | tuple() if value:
                first = value[0]
                yield from _type_cases(payload, parameters, (key, 0), first)
                if isinstance(first, dict):
                    yield from _entry_type_cases(payload, parameters, (key, 0), first)


def _type_cases(
    payload: ReferencePayload,
    parameters: dict[ParameterKey, Any],
    path: Path,
    value: Any,
) -> Iterator[MutationCase]:
    for example in wrong_type_examples(value):
        yield _case(
            payload,
            _replaced(parameters, path, example),
            MutationFamily.WRONG_TYPE,
            path,
            example,
        )


def _entry_type_cases(
    payload: ReferencePayload,
    parameters: dict[ParameterKey, Any],
    path: Path,
    value: dict[ParameterKey, Any],
) -> Iterator[MutationCase]:
    for key, item in value.items():
        yield from _type_cases(payload, parameters, (*path, key), item)


def missing_parameters(payload: ReferencePayload) -> Iterator[MutationCase]:
    """Drop each required parameter once. Optional parameters are kept."""
    parameters = _parameters(payload)

    for key in parameters:
        if key not in payload.required:
            continue
        mutated = {other: value for other, value in parameters.items() if other != key}
        yield _case(payload, mutated, MutationFamily.MISSING_PARAMETER, (key,))


def bad_inner_map_types(
    payload: ReferencePayload,
    outer_key: ParameterKey,
    inner_map: dict[ParameterKey, Any],
    wrap_in_array: bool = False,
) -> Iterator[MutationCase]:
    """Give each entry of a nested map a wrong type, one entry per case.

    The mutated map becomes the value of ``outer_key``, or the only element of
    an array there if ``wrap_in_array`` is set, e.g.
    ``{outer_key: {key: wrong}}`` or ``{outer_key: [{key: wrong}]}``.
    """
    parameters = _parameters(payload)
    _outer_value(parameters, outer_key, list if wrap_in_array else dict)
    if not isinstance(inner_map, dict) or not inner_map:
        raise PayloadDefinitionError(f"Inner map for {outer_key!r} must be a non-empty map")
    _check_values(inner_map)

    for key, value in inner_map.items():
        example = first_wrong_type_example(value)
        mutated_map = {**inner_map, key: example}
        if wrap_in_array:
            outer_value: Any = [mutated_map]
            path: Path = (outer_key, 0, key)
        else:
            outer_value = mutated_map
            path = (outer_key, key)
        yield _case(
            payload,
            {**parameters, outer_key: outer_value},
            MutationFamily.INNER_MAP_TYPE,
            path,
            example,
        )


def bad_inner_array_types(
    payload: ReferencePayload,
    outer_key: ParameterKey,
    elements: Sequence[Any],
) -> Iterator[MutationCase]:
    """Give each element of an array parameter a wrong type, one per case."""
    parameters = _parameters(payload)
    _outer_value(parameters, outer_key, list)
    if isinstance(elements, (str, bytes)) or not elements:
        raise PayloadDefinitionError(
            f"Elements for {outer_key!r} must be a non-empty sequence"
        )
    _check_values(list(elements))

    for index, element in enumerate(elements):
        example = first_wrong_type_example(element)
        mutated_array = list(elements)
        mutated_array[index] = example
        yield _case(
            payload,
            {**parameters, outer_key: mutated_array},
            MutationFamily.INNER_ARRAY_TYPE,
            (outer_key, index),
            example,
        )


def descriptor_depth_cases(
    payload: ReferencePayload,
    key: ParameterKey,
    nested_field: str = "transports",
) -> Iterator[MutationCase]:
    """Put an over-deep array, then map, into a credential descriptor list.

    The first descriptor of the array at ``key`` gets an extra item in its
    ``nested_field`` list, nested just deep enough that the payload exceeds
    ``MAX_NESTING_DEPTH``. Devices may answer with any status, but they have
    to answer.
    """
    parameters = _parameters(payload)
    descriptors = _outer_value(parameters, key, list)
    if not descriptors or not isinstance(descriptors[0], dict):
        raise PayloadDefinitionError(f"Parameter {key!r} holds no credential descriptor")

    descriptor = descriptors[0]
    nested = descriptor.get(nested_field, [])
    if not isinstance(nested, list):
        raise PayloadDefinitionError(
            f"Descriptor field {nested_field!r} holds a {type_name(nested)}, "
            "expected an array"
        )

    path: Path = (key, 0, nested_field, len(nested))
    levels = max(1, MAX_NESTING_DEPTH + 1 - len(path))
    for kind in ContainerKind:
        container = nested_container(kind, levels)
        mutated_descriptor = {**descriptor, nested_field: [*nested, container]}
        yield _case(
            payload,
            {**parameters, key: [mutated_descriptor, *descriptors[1:]]},
            MutationFamily.NESTING_DEPTH,
            path,
            container,
        )


def generate_cases(definition: CommandDefinition) -> list[MutationCase]:
    """Generate the cases of every mutation family configured for a command.

    Cases are built eagerly, so a broken target raises before the first case
    reaches a device.
    """
    payload = definition.payload
    return list(
        itertools.chain(
            wrong_top_level_types(payload),
            missing_parameters(payload),
            *(
                bad_inner_map_types(
                    payload, target.key, target.inner_map, target.wrap_in_array
                )
                for target in definition.inner_maps
            ),
            *(
                bad_inner_array_types(payload, target.key, target.elements)
                for target in definition.inner_arrays
            ),
            *(
                descriptor_depth_cases(payload, key)
                for key in definition.descriptor_lists
            ),
        )
    )
